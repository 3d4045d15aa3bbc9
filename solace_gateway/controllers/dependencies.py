"""Common FastAPI dependencies reused across controllers.

External clients are built once by `build_services` when the app is created
and stored on `app.state.services`; controllers never reach for module
globals, so tests can hand `create_app` a container full of fakes.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Annotated, Awaitable, TypeVar

from fastapi import Depends, Request

from solace_gateway.config.settings import Settings
from solace_gateway.pipelines.audio import AudioGenerationPipeline
from solace_gateway.pipelines.audio.polling import SleepFunc
from solace_gateway.services import (
    AudioTranscoder,
    FfmpegTranscoder,
    GeminiClient,
    GenerativeModelClient,
    GoogleSpeechService,
    SpeechSynthesizer,
    StagingArea,
)
from solace_gateway.services.errors import GatewayError, RequestDeadlineExceeded
from solace_gateway.telemetry import record_pipeline_outcome


@dataclass
class GatewayServices:
    """Long-lived collaborators shared by every request."""

    settings: Settings
    model_client: GenerativeModelClient
    speech: SpeechSynthesizer
    transcoder: AudioTranscoder
    staging: StagingArea
    sleep: SleepFunc = field(default=asyncio.sleep)

    def audio_pipeline(self) -> AudioGenerationPipeline:
        return AudioGenerationPipeline(
            client=self.model_client,
            transcoder=self.transcoder,
            staging=self.staging,
            media=self.settings.media,
            sleep=self.sleep,
        )


def build_services(settings: Settings) -> GatewayServices:
    """Construct the production clients from settings."""

    return GatewayServices(
        settings=settings,
        model_client=GeminiClient(settings.gemini),
        speech=GoogleSpeechService(settings.speech),
        transcoder=FfmpegTranscoder(settings.media),
        staging=StagingArea(settings.media.staging_dir),
    )


def get_services(request: Request) -> GatewayServices:
    return request.app.state.services


ServicesDep = Annotated[GatewayServices, Depends(get_services)]

T = TypeVar("T")


async def run_with_deadline(pipeline: str, work: Awaitable[T], deadline: float) -> T:
    """Await `work` under `deadline` seconds and count the outcome for `pipeline`.

    An expired deadline becomes `RequestDeadlineExceeded`.
    """

    try:
        result = await asyncio.wait_for(work, timeout=deadline)
    except asyncio.TimeoutError as exc:
        record_pipeline_outcome(pipeline, RequestDeadlineExceeded.code)
        raise RequestDeadlineExceeded(
            f"Request exceeded the {int(deadline)} second deadline"
        ) from exc
    except GatewayError as exc:
        record_pipeline_outcome(pipeline, exc.code)
        raise

    record_pipeline_outcome(pipeline, "ok")
    return result


__all__ = [
    "GatewayServices",
    "ServicesDep",
    "build_services",
    "get_services",
    "run_with_deadline",
]
