"""Text-to-speech controller backed by Google Cloud Text-to-Speech."""

import logging

from fastapi import APIRouter
from fastapi.responses import Response

from solace_gateway.controllers.dependencies import ServicesDep, run_with_deadline
from solace_gateway.services.errors import ClientInputError
from solace_gateway.services.speech import resolve_voice
from solace_gateway.views import TextToSpeechRequest

router = APIRouter(prefix="/api", tags=["tts"])

logger = logging.getLogger(__name__)


@router.post("/tts", response_class=Response)
async def text_to_speech(payload: TextToSpeechRequest, services: ServicesDep) -> Response:
    """Synthesise `text` with the fixed voice for `language` and return MP3 bytes."""

    if not payload.text or not payload.language:
        raise ClientInputError("Text and language are required")

    voice = resolve_voice(payload.language)
    result = await run_with_deadline(
        "tts",
        services.speech.synthesize(payload.text, voice),
        services.settings.media.request_deadline_seconds,
    )
    logger.info("Synthesised %d bytes with voice %s", len(result.audio_bytes), result.voice_name)
    return Response(content=result.audio_bytes, media_type=result.media_type)
