"""Application entry point and FastAPI app factory."""

from __future__ import annotations

import logging
import sys
import traceback
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.settings import Settings, settings as default_settings
from .controllers import audio, tasks, tips, tts
from .controllers.dependencies import GatewayServices, build_services
from .middleware import BodySizeLimitMiddleware, StructuredLoggingMiddleware, TelemetryMiddleware
from .services.errors import GatewayError
from .views import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _configure_logging(settings: Settings) -> None:
    """Stream application logs to stdout and rotating files."""

    logging.getLogger().handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    middleware_logger = logging.getLogger("solace_gateway.middleware.structured")
    middleware_logger.handlers.clear()
    middleware_stdout = logging.StreamHandler(sys.stdout)
    middleware_stdout.setFormatter(logging.Formatter("%(message)s"))
    middleware_logger.addHandler(middleware_stdout)
    middleware_logger.setLevel(logging.INFO)
    middleware_logger.propagate = False

    pipeline_log_path = Path(settings.audio_log_file)
    pipeline_log_path.parent.mkdir(parents=True, exist_ok=True)
    pipeline_handler = RotatingFileHandler(
        pipeline_log_path,
        maxBytes=500_000,
        backupCount=5,
        encoding="utf-8",
    )
    pipeline_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    )
    pipeline_logger = logging.getLogger("solace_gateway.pipeline")
    pipeline_logger.handlers.clear()
    pipeline_logger.addHandler(pipeline_handler)
    pipeline_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    noisy_loggers = [
        "httpx",
        "httpcore",
        "google_genai",
        "urllib3",
    ]
    for name in noisy_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def _error_body(
    error: str,
    *,
    details: Optional[str] = None,
    code: Optional[str] = None,
    exc: Optional[BaseException] = None,
    include_stack: bool = False,
) -> dict[str, Any]:
    stack = None
    if include_stack and exc is not None:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    body = ErrorResponse(error=error, details=details or None, code=code, stack=stack)
    return body.model_dump(exclude_none=True)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[GatewayServices] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``services`` lets callers supply pre-built collaborators (tests use fakes);
    when omitted the Gemini, Text-to-Speech and ffmpeg clients are built from
    ``settings``.
    """

    if settings is None:
        settings = services.settings if services is not None else default_settings
    _configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Solace mental wellness API gateway for Gemini and Google Text-to-Speech",
    )
    app.state.services = services or build_services(settings)

    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.media.max_body_bytes)
    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(audio.router)
    app.include_router(tips.router)
    app.include_router(tts.router)
    app.include_router(tasks.router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint."""

        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "operational",
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Liveness probe that also reports whether the Gemini key is present."""

        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            apiKeyConfigured=settings.gemini.configured,
        )

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose application metrics for Prometheus scraping."""

        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(GatewayError)
    async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s failed [%s]: %s", request.url.path, exc.code, exc.message, exc_info=exc)
        else:
            logger.warning("%s rejected [%s]: %s", request.url.path, exc.code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                exc.public_message,
                details=exc.message,
                code=exc.code,
                exc=exc,
                include_stack=settings.is_development,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "Invalid request body",
                details=_describe_validation_errors(exc),
                code="client_error",
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "Internal server error",
                details=str(exc) or None,
                exc=exc,
                include_stack=settings.is_development,
            ),
        )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "solace_gateway.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
    )
