"""Common response schemas."""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
    code: Optional[str] = None
    stack: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    apiKeyConfigured: bool
