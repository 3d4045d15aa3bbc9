"""Error taxonomy shared by the pipelines and controllers.

Every fatal condition inside a request is raised as a ``GatewayError``
subclass and mapped to a JSON body by the handler registered in
``solace_gateway.main``. ``status_code`` and ``code`` classify the failure;
``public_message`` is the stable ``error`` string for the endpoint family.
"""

from __future__ import annotations

from typing import ClassVar


class GatewayError(RuntimeError):
    """Base class for errors surfaced to HTTP clients."""

    status_code: ClassVar[int] = 500
    code: ClassVar[str] = "internal_error"
    default_public_message: ClassVar[str] = "Internal server error"

    def __init__(self, message: str, *, public_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.public_message = public_message or self.default_public_message


class ClientInputError(GatewayError):
    """Required request field missing or malformed."""

    status_code = 400
    code = "client_error"
    default_public_message = "Invalid request"

    def __init__(self, message: str) -> None:
        super().__init__(message, public_message=message)


class UnsupportedLanguageError(ClientInputError):
    code = "unsupported_language"

    def __init__(self, language: str) -> None:
        super().__init__("Unsupported language")
        self.language = language


class AudioIntegrityError(GatewayError):
    """The staged or transcoded audio file is missing or empty."""

    code = "integrity_error"
    default_public_message = "Failed to process audio"


class RemoteUploadError(GatewayError):
    status_code = 502
    code = "upload_failed"
    default_public_message = "Failed to process audio"


class RemoteProcessingFailedError(GatewayError):
    """The remote file-store reported the FAILED state."""

    status_code = 502
    code = "remote_processing_failed"
    default_public_message = "Failed to process audio"


class ProcessingTimeoutError(GatewayError):
    """The remote file-store stayed in PROCESSING past the poll ceiling."""

    status_code = 504
    code = "processing_timeout"
    default_public_message = "Failed to process audio"


class GenerationError(GatewayError):
    status_code = 502
    code = "generation_failed"
    default_public_message = "Failed to process request"


class TipsFormatError(GatewayError):
    """The model reply violates the two-block tips contract."""

    status_code = 502
    code = "tips_format_error"
    default_public_message = "Failed to generate tips"


class TipsBlockCountError(TipsFormatError):
    code = "tips_block_count"

    def __init__(self, found: int) -> None:
        super().__init__(
            f"Response does not contain exactly two JSON blocks (found {found})"
        )
        self.found = found


class TipsInvalidJsonError(TipsFormatError):
    code = "tips_invalid_json"

    def __init__(self, block: str, reason: str) -> None:
        super().__init__(f"The {block} block is not valid JSON: {reason}")
        self.block = block


class TipsMissingFieldError(TipsFormatError):
    code = "tips_missing_field"

    def __init__(self, block: str, fields: list[str]) -> None:
        joined = ", ".join(fields)
        super().__init__(f"The {block} block is missing required fields: {joined}")
        self.block = block
        self.fields = fields


class TipsEmptyVideoListError(TipsFormatError):
    code = "tips_empty_videos"

    def __init__(self) -> None:
        super().__init__("The video block must be a non-empty JSON array")


class SpeechSynthesisError(GatewayError):
    code = "synthesis_failed"
    default_public_message = "Failed to generate speech"


class RequestDeadlineExceeded(GatewayError):
    status_code = 504
    code = "deadline_exceeded"
    default_public_message = "Failed to process request"


__all__ = [
    "GatewayError",
    "ClientInputError",
    "UnsupportedLanguageError",
    "AudioIntegrityError",
    "RemoteUploadError",
    "RemoteProcessingFailedError",
    "ProcessingTimeoutError",
    "GenerationError",
    "TipsFormatError",
    "TipsBlockCountError",
    "TipsInvalidJsonError",
    "TipsMissingFieldError",
    "TipsEmptyVideoListError",
    "SpeechSynthesisError",
    "RequestDeadlineExceeded",
]
