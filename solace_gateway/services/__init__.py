"""Service layer helpers for external integrations."""

from .errors import (
    AudioIntegrityError,
    ClientInputError,
    GatewayError,
    GenerationError,
    ProcessingTimeoutError,
    RemoteProcessingFailedError,
    RemoteUploadError,
    RequestDeadlineExceeded,
    SpeechSynthesisError,
    TipsFormatError,
    UnsupportedLanguageError,
)
from .gemini import GeminiClient, GenerativeModelClient
from .speech import GoogleSpeechService, SpeechResult, SpeechSynthesizer, resolve_voice
from .staging import StagingArea
from .transcoder import AudioTranscoder, FfmpegTranscoder, TranscoderError

__all__ = [
    "AudioIntegrityError",
    "AudioTranscoder",
    "ClientInputError",
    "FfmpegTranscoder",
    "GatewayError",
    "GeminiClient",
    "GenerationError",
    "GenerativeModelClient",
    "GoogleSpeechService",
    "ProcessingTimeoutError",
    "RemoteProcessingFailedError",
    "RemoteUploadError",
    "RequestDeadlineExceeded",
    "SpeechResult",
    "SpeechSynthesizer",
    "SpeechSynthesisError",
    "StagingArea",
    "TipsFormatError",
    "TranscoderError",
    "UnsupportedLanguageError",
    "resolve_voice",
]
