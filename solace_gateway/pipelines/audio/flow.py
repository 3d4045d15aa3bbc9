"""End-to-end orchestration for `/api/audio` requests that carry a recording.

Execution order:

1. ``ingestion`` – strip the data-URI prefix, decode base64, stage the file.
2. ``transcoding`` – probe ffmpeg and re-encode to MP3, falling back to the original.
3. ``integrity`` – refuse to upload a missing or zero-byte file.
4. ``upload`` – push the selected file to the Gemini Files API.
5. ``polling`` – wait for the remote file to leave PROCESSING.
6. ``generation`` – one model call with the prompt plus the file reference.
7. ``cleanup`` – delete every local temporary, whatever happened above.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Iterable, List, TypeVar

from solace_gateway.config.settings import MediaConfig
from solace_gateway.domain.models import AudioPipelineResult, StagedFile, TranscodeResult
from solace_gateway.services.gemini import GenerativeModelClient
from solace_gateway.services.staging import StagingArea
from solace_gateway.services.transcoder import AudioTranscoder

from .generation import generate_from_upload
from .ingestion import parse_audio_payload, stage_audio
from .polling import SleepFunc, raise_for_outcome, wait_until_ready
from .transcoding import ensure_uploadable, normalize_audio

logger = logging.getLogger("solace_gateway.pipeline")

T = TypeVar("T")


async def _finish_in_flight(work: Awaitable[T]) -> T:
    """Await `work`; on cancellation let it run to completion, then re-raise.

    Threadpool calls keep running after the awaiting coroutine is cancelled,
    so cleanup has to wait until they stop writing files.
    """

    task = asyncio.ensure_future(work)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Stage ended with %r after the request was cancelled", task.exception())
        raise


@dataclass(frozen=True)
class PipelineStage:
    """Human-readable description of one stage in the audio pipeline."""

    order: int
    name: str
    module: str
    summary: str


class AudioGenerationPipeline:
    """Shepherd one base64 recording through conversion and polling to model text."""

    _STAGES: List[PipelineStage] = [
        PipelineStage(1, "Ingestion", "solace_gateway.pipelines.audio.ingestion",
                      "Strip the data-URI prefix, decode base64, write a uniquely named file."),
        PipelineStage(2, "Transcoding", "solace_gateway.pipelines.audio.transcoding",
                      "Probe ffmpeg and re-encode to MP3; keep the original on any failure."),
        PipelineStage(3, "Integrity", "solace_gateway.pipelines.audio.transcoding",
                      "Fail before any network call if the selected file is missing or empty."),
        PipelineStage(4, "Upload", "solace_gateway.services.gemini",
                      "Upload the selected file to the Gemini Files API."),
        PipelineStage(5, "Polling", "solace_gateway.pipelines.audio.polling",
                      "Re-query the remote state until ACTIVE, FAILED or the attempt ceiling."),
        PipelineStage(6, "Generation", "solace_gateway.pipelines.audio.generation",
                      "Send the prompt plus the file reference in a single model call."),
        PipelineStage(7, "Cleanup", "solace_gateway.pipelines.audio.flow",
                      "Delete the staged and transcoded files on every exit path."),
    ]

    def __init__(
        self,
        *,
        client: GenerativeModelClient,
        transcoder: AudioTranscoder,
        staging: StagingArea,
        media: MediaConfig,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._client = client
        self._transcoder = transcoder
        self._staging = staging
        self._media = media
        self._sleep = sleep

    @classmethod
    def describe(cls) -> Iterable[PipelineStage]:
        """Return the ordered stages for diagnostics and docs."""

        return tuple(cls._STAGES)

    async def run(self, prompt: str, base64_audio: str) -> AudioPipelineResult:
        payload = parse_audio_payload(base64_audio, default_mime_type=self._media.upload_mime_type)
        staged_path = self._staging.new_path()
        # Registered before the worker threads start so cleanup finds them.
        temporaries: list[Path] = [staged_path, self._transcoder.output_path_for(staged_path)]
        try:
            staged: StagedFile = await _finish_in_flight(
                stage_audio(payload, self._staging, path=staged_path)
            )
            transcoded: TranscodeResult = await _finish_in_flight(
                normalize_audio(staged, self._transcoder)
            )
            logger.debug(
                "Using processed file: %s (%s%s)",
                transcoded.path,
                transcoded.outcome.value,
                f": {transcoded.detail}" if transcoded.detail else "",
            )

            size = ensure_uploadable(transcoded.path)
            logger.info("Uploading %s (%s bytes) to Gemini", transcoded.path.name, size)
            uploaded = await self._client.upload_file(
                transcoded.path,
                mime_type=self._media.upload_mime_type,
                display_name=transcoded.path.name,
            )
            logger.info("File uploaded as: %s", uploaded.uri)

            poll_result = await wait_until_ready(
                self._client,
                uploaded,
                max_attempts=self._media.poll_max_attempts,
                interval_seconds=self._media.poll_interval_seconds,
                sleep=self._sleep,
            )
            ready = raise_for_outcome(
                poll_result,
                max_attempts=self._media.poll_max_attempts,
                interval_seconds=self._media.poll_interval_seconds,
            )

            generated = await generate_from_upload(
                self._client,
                prompt,
                uploaded,
                mime_type=self._media.upload_mime_type,
            )
            return AudioPipelineResult(
                text=generated.text,
                file_uri=uploaded.uri,
                file_state=ready.state,
                transcode_outcome=transcoded.outcome,
            )
        finally:
            for path in temporaries:
                self._staging.remove(path)


__all__ = ["AudioGenerationPipeline", "PipelineStage"]
