"""Reject oversized request bodies before they reach the JSON parser."""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """Answer 413 when the declared or actual body exceeds `max_body_bytes`."""

    def __init__(self, app: ASGIApp, *, max_body_bytes: int) -> None:
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.method not in {"POST", "PUT", "PATCH"}:
            return await call_next(request)

        declared = request.headers.get("content-length")
        if declared is not None:
            try:
                declared_size = int(declared)
            except ValueError:
                return self._reject("Invalid Content-Length header", status_code=400)
            if declared_size > self.max_body_bytes:
                return self._too_large(declared_size)
            return await call_next(request)

        # Chunked uploads carry no length header; read and measure the body.
        body = await request.body()
        if len(body) > self.max_body_bytes:
            return self._too_large(len(body))
        return await call_next(request)

    def _too_large(self, size: int) -> Response:
        logger.warning("Rejected request body of %d bytes (limit %d)", size, self.max_body_bytes)
        return self._reject("Request body too large", status_code=413)

    @staticmethod
    def _reject(message: str, *, status_code: int) -> Response:
        return JSONResponse(status_code=status_code, content={"error": message})
