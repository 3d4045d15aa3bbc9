"""Request ingestion helpers (Stage 01 of the audio pipeline)."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path

from solace_gateway.domain.models import AudioPayload, StagedFile
from solace_gateway.services.errors import ClientInputError
from solace_gateway.services.staging import StagingArea

logger = logging.getLogger("solace_gateway.pipeline")

_DATA_URI_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[^,]*)?,", re.IGNORECASE)


def parse_audio_payload(raw: str, *, default_mime_type: str = "audio/mp3") -> AudioPayload:
    """Split an optional `data:<mime>;base64,` prefix off the client string."""

    text = raw.strip()
    match = _DATA_URI_PATTERN.match(text)
    if match:
        return AudioPayload(
            data=text[match.end():],
            mime_type=match.group("mime") or default_mime_type,
        )
    if "," in text:
        # Any other "<prefix>,<data>" shape: keep what follows the first comma.
        return AudioPayload(data=text.split(",", 1)[1], mime_type=default_mime_type)
    return AudioPayload(data=text, mime_type=default_mime_type)


def decode_audio_payload(payload: AudioPayload) -> bytes:
    """Decode the base64 body, rejecting characters outside the alphabet."""

    compact = "".join(payload.data.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ClientInputError("Invalid base64 audio payload") from exc


async def stage_audio(
    payload: AudioPayload,
    staging: StagingArea,
    *,
    path: Path | None = None,
) -> StagedFile:
    """Decode the payload and write it to `path` or a fresh staging name."""

    audio_bytes = decode_audio_payload(payload)
    staged = await staging.write(audio_bytes, path=path, extension="mp3")
    logger.debug(
        "Audio saved to %s (%s bytes, declared %s)",
        staged.path,
        staged.size_bytes,
        payload.mime_type,
    )
    return staged


__all__ = ["decode_audio_payload", "parse_audio_payload", "stage_audio"]
