"""Thin google-genai wrapper for generation and the Files API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from fastapi.concurrency import run_in_threadpool
from google import genai
from google.genai import types as genai_types

from solace_gateway.config.settings import GeminiConfig
from solace_gateway.domain.models import (
    GenerationRequest,
    GenerationResult,
    RemoteFileState,
    RemoteUploadHandle,
)
from solace_gateway.services.errors import GenerationError, RemoteUploadError

logger = logging.getLogger(__name__)


class GenerativeModelClient(Protocol):
    """Operations the pipelines need from the generative-language service."""

    async def upload_file(
        self, path: Path, *, mime_type: str, display_name: str
    ) -> RemoteUploadHandle: ...

    async def get_file(self, name: str) -> RemoteUploadHandle: ...

    async def generate(self, request: GenerationRequest) -> GenerationResult: ...


def _coerce_state(raw_state: Any) -> RemoteFileState:
    """Map SDK file states (enum or plain string) onto `RemoteFileState`."""

    if raw_state is None:
        return RemoteFileState.UNKNOWN
    value = getattr(raw_state, "value", raw_state)
    try:
        return RemoteFileState(str(value).upper())
    except ValueError:
        return RemoteFileState.UNKNOWN


def _error_detail(remote_file: Any) -> str | None:
    error = getattr(remote_file, "error", None)
    if error is None:
        return None
    message = getattr(error, "message", None)
    return str(message or error)


def _to_handle(remote_file: Any, mime_type: str) -> RemoteUploadHandle:
    return RemoteUploadHandle(
        name=str(remote_file.name),
        uri=str(remote_file.uri or ""),
        mime_type=getattr(remote_file, "mime_type", None) or mime_type,
        state=_coerce_state(getattr(remote_file, "state", None)),
        error=_error_detail(remote_file),
    )


class GeminiClient:
    """Invoke Gemini models and manage uploaded media with standard configuration."""

    def __init__(self, config: GeminiConfig) -> None:
        self._model = config.model
        self._client: genai.Client | None = None

        if not config.configured:
            logger.warning("GOOGLE_API_KEY is not set; Gemini calls will fail")
            return

        timeout_ms = int(config.request_timeout_seconds * 1000)
        try:
            self._client = genai.Client(
                api_key=config.api_key.get_secret_value(),
                http_options=genai_types.HttpOptions(timeout=timeout_ms),
            )
        except Exception as exc:  # pragma: no cover - configuration issue
            logger.warning("Could not initialise Gemini client: %s", exc)
            self._client = None

    async def upload_file(
        self,
        path: Path,
        *,
        mime_type: str,
        display_name: str,
    ) -> RemoteUploadHandle:
        """Upload a local file to the Files API and return its handle."""

        if self._client is None:
            raise RemoteUploadError("Gemini client is not configured")

        def _call() -> Any:
            return self._client.files.upload(
                file=str(path),
                config=genai_types.UploadFileConfig(
                    mime_type=mime_type,
                    display_name=display_name,
                ),
            )

        try:
            remote_file = await run_in_threadpool(_call)
        except Exception as exc:  # pragma: no cover - external dependency
            raise RemoteUploadError(f"Upload failed: {exc}") from exc

        return _to_handle(remote_file, mime_type)

    async def get_file(self, name: str) -> RemoteUploadHandle:
        """Fetch the current processing state of an uploaded file."""

        if self._client is None:
            raise RemoteUploadError("Gemini client is not configured")

        try:
            remote_file = await run_in_threadpool(self._client.files.get, name=name)
        except Exception as exc:  # pragma: no cover - external dependency
            raise RemoteUploadError(f"Could not query upload state: {exc}") from exc

        return _to_handle(remote_file, "")

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run a single `generate_content` call and return the aggregate text."""

        if self._client is None:
            raise GenerationError("Gemini client is not configured")

        contents: list[Any] = [request.prompt]
        if request.file_uri:
            contents.append(
                genai_types.Part.from_uri(
                    file_uri=request.file_uri,
                    mime_type=request.mime_type,
                )
            )

        def _call() -> str:
            response = self._client.models.generate_content(
                model=self._model,
                contents=contents,
            )
            return (response.text or "").strip()

        try:
            text = await run_in_threadpool(_call)
        except Exception as exc:  # pragma: no cover - external dependency
            raise GenerationError(f"Generation failed: {exc}") from exc

        return GenerationResult(text=text)


__all__ = ["GeminiClient", "GenerativeModelClient"]
