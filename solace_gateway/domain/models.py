"""Request-scoped entities of the media pipeline.

Nothing here is persisted; every object lives for one request. Kept apart
from the pipeline and service modules so both can import it without cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class AudioPayload:
    """Raw client recording as submitted in the request body."""

    data: str
    mime_type: str = "audio/mp3"


@dataclass(frozen=True)
class StagedFile:
    """Decoded audio persisted in the staging directory."""

    path: Path
    size_bytes: int


class TranscodeOutcome(str, Enum):
    """Which path the normalisation step took."""

    SKIPPED = "skipped"
    CONVERTED = "converted"
    FAILED = "failed"


@dataclass(frozen=True)
class TranscodeResult:
    outcome: TranscodeOutcome
    path: Path
    detail: str | None = None

    @property
    def produced_new_file(self) -> bool:
        return self.outcome is TranscodeOutcome.CONVERTED


class RemoteFileState(str, Enum):
    """Processing state reported by the remote file-store."""

    PROCESSING = "PROCESSING"
    ACTIVE = "ACTIVE"
    FAILED = "FAILED"
    UNKNOWN = "STATE_UNSPECIFIED"


@dataclass(frozen=True)
class RemoteUploadHandle:
    """Reference to an uploaded file and the last state observed for it."""

    name: str
    uri: str
    mime_type: str
    state: RemoteFileState
    error: str | None = None


class PollOutcome(str, Enum):
    """Terminal states of the upload/poll state machine."""

    READY = "READY"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED_OUT"


@dataclass(frozen=True)
class PollResult:
    outcome: PollOutcome
    handle: RemoteUploadHandle
    attempts: int


@dataclass(frozen=True)
class GenerationRequest:
    """Prompt plus optional file reference sent to the model, consumed once."""

    prompt: str
    file_uri: str | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    text: str


@dataclass(frozen=True)
class AudioPipelineResult:
    """What the `/api/audio` handler needs to build its response."""

    text: str
    file_uri: str
    file_state: RemoteFileState
    transcode_outcome: TranscodeOutcome
