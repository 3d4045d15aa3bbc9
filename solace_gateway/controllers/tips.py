"""Personalised tips generation."""

import logging

from fastapi import APIRouter

from solace_gateway.controllers.dependencies import ServicesDep, run_with_deadline
from solace_gateway.pipelines.audio import generate_text
from solace_gateway.services.errors import ClientInputError
from solace_gateway.services.gemini import GenerativeModelClient
from solace_gateway.services.response_contract import TipsBundle, parse_tips_response
from solace_gateway.views import Tips, TipsRequest, TipsResponse, YoutubeVideo

router = APIRouter(prefix="/api", tags=["tips"])

logger = logging.getLogger(__name__)


async def _generate_bundle(client: GenerativeModelClient, prompt: str) -> TipsBundle:
    result = await generate_text(client, prompt)
    return parse_tips_response(result.text)


@router.post("/tips", response_model=TipsResponse)
async def generate_tips(payload: TipsRequest, services: ServicesDep) -> TipsResponse:
    """Ask the model for a tips block plus video recommendations and validate both."""

    if not payload.prompt or payload.assessment is None:
        raise ClientInputError("Prompt and assessment are required")

    bundle = await run_with_deadline(
        "tips",
        _generate_bundle(services.model_client, payload.prompt),
        services.settings.media.request_deadline_seconds,
    )
    logger.info("Generated tips with %d video recommendations", len(bundle.youtube))

    return TipsResponse(
        tips=Tips(
            tip=bundle.tips.tip,
            tricks=bundle.tips.tricks,
            suggestions=bundle.tips.suggestions,
        ),
        youtube=[
            YoutubeVideo(
                video_title=video.video_title,
                description_video=video.description_video,
                link=video.link,
            )
            for video in bundle.youtube
        ],
    )
