"""Transcoding normalisation stage (Stage 02) and the integrity gate (Stage 03)."""

from __future__ import annotations

import logging
from pathlib import Path

from solace_gateway.domain.models import StagedFile, TranscodeOutcome, TranscodeResult
from solace_gateway.services.errors import AudioIntegrityError
from solace_gateway.services.transcoder import AudioTranscoder, TranscoderError
from solace_gateway.telemetry import record_transcode

logger = logging.getLogger("solace_gateway.pipeline")


async def normalize_audio(staged: StagedFile, transcoder: AudioTranscoder) -> TranscodeResult:
    """Re-encode the staged file, falling back to the original on any problem.

    An absent or failing ffmpeg never aborts the request; the original bytes
    are uploaded instead.
    """

    if not await transcoder.is_available():
        result = TranscodeResult(
            outcome=TranscodeOutcome.SKIPPED,
            path=staged.path,
            detail="ffmpeg unavailable",
        )
    else:
        try:
            converted = await transcoder.convert(staged.path)
        except TranscoderError as exc:
            logger.warning("FFmpeg conversion error, uploading original: %s", exc)
            result = TranscodeResult(
                outcome=TranscodeOutcome.FAILED,
                path=staged.path,
                detail=str(exc),
            )
        else:
            logger.debug("Converted audio file to: %s", converted)
            result = TranscodeResult(outcome=TranscodeOutcome.CONVERTED, path=converted)

    record_transcode(result.outcome.value)
    return result


def ensure_uploadable(path: Path) -> int:
    """Return the file size, raising `AudioIntegrityError` if missing or empty."""

    try:
        size = path.stat().st_size
    except FileNotFoundError:
        raise AudioIntegrityError("Audio file processing failed or file is missing") from None
    if size == 0:
        raise AudioIntegrityError("Audio file processing failed or file is empty")
    return size


__all__ = ["ensure_uploadable", "normalize_audio"]
