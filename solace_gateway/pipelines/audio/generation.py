"""Generation stage (Stage 06) shared by the audio, tips and task endpoints."""

from __future__ import annotations

import logging

from solace_gateway.domain.models import GenerationRequest, GenerationResult, RemoteUploadHandle
from solace_gateway.services.gemini import GenerativeModelClient

logger = logging.getLogger("solace_gateway.pipeline")


def _truncate(value: str, max_length: int = 240) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


async def generate_text(client: GenerativeModelClient, prompt: str) -> GenerationResult:
    """Single text-only generation call."""

    logger.debug("Generating content with prompt: %s", _truncate(prompt))
    result = await client.generate(GenerationRequest(prompt=prompt))
    logger.debug("Response received: %s", _truncate(result.text))
    return result


async def generate_from_upload(
    client: GenerativeModelClient,
    prompt: str,
    handle: RemoteUploadHandle,
    *,
    mime_type: str,
) -> GenerationResult:
    """Single generation call referencing an uploaded, ready file."""

    logger.debug("Generating content for %s with prompt: %s", handle.uri, _truncate(prompt))
    result = await client.generate(
        GenerationRequest(prompt=prompt, file_uri=handle.uri, mime_type=mime_type)
    )
    logger.debug("Response received: %s", _truncate(result.text))
    return result


__all__ = ["generate_from_upload", "generate_text"]
