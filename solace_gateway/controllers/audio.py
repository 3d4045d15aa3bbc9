"""Chat endpoint accepting a prompt and an optional recorded audio clip.

Text-only requests go straight to the model. Requests carrying a recording
run through `AudioGenerationPipeline` (decode, transcode, upload, poll,
generate, cleanup). Both paths run under the configured request deadline.
"""

import logging
from typing import Any

from fastapi import APIRouter

from solace_gateway.controllers.dependencies import ServicesDep, run_with_deadline
from solace_gateway.pipelines.audio import AudioGenerationPipeline, generate_text
from solace_gateway.services.errors import ClientInputError
from solace_gateway.views import AudioRequest, AudioResponse, FileInfo, TextResponse

router = APIRouter(prefix="/api", tags=["audio"])

logger = logging.getLogger(__name__)

PIPELINE_STAGES = tuple(AudioGenerationPipeline.describe())
"""Ordered pipeline metadata used for quick reference and debugging."""


@router.post("/audio")
async def generate_from_audio(payload: AudioRequest, services: ServicesDep) -> dict[str, Any]:
    """Answer a prompt, optionally grounded in a base64 recording."""

    if not payload.prompt:
        raise ClientInputError("Prompt is required")

    deadline = services.settings.media.request_deadline_seconds

    if not payload.base64_audio:
        logger.info("Processing text-only request")
        result = await run_with_deadline(
            "text",
            generate_text(services.model_client, payload.prompt),
            deadline,
        )
        return TextResponse(text=result.text).model_dump()

    logger.info("Processing audio request")
    outcome = await run_with_deadline(
        "audio",
        services.audio_pipeline().run(payload.prompt, payload.base64_audio),
        deadline,
    )
    response = AudioResponse(
        text=outcome.text,
        file_info=FileInfo(uri=outcome.file_uri, state=outcome.file_state.value),
    )
    return response.model_dump(by_alias=True)
