"""Shared fakes and fixtures for the gateway test suite."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from solace_gateway.config.settings import GeminiConfig, MediaConfig, Settings
from solace_gateway.controllers.dependencies import GatewayServices
from solace_gateway.domain.models import (
    GenerationRequest,
    GenerationResult,
    RemoteFileState,
    RemoteUploadHandle,
)
from solace_gateway.main import create_app
from solace_gateway.services.speech import SpeechResult, VoiceSettings
from solace_gateway.services.staging import StagingArea
from solace_gateway.services.transcoder import TranscoderError

SAMPLE_AUDIO = b"ID3\x03\x00\x00\x00fake-mp3-frames"


class FakeModelClient:
    """Scripted stand-in for the Gemini client.

    `states` is consumed one entry per `get_file` call; the last entry repeats
    once the script runs out.
    """

    def __init__(
        self,
        *,
        reply: str = "model reply",
        states: Iterable[RemoteFileState] = (RemoteFileState.ACTIVE,),
        upload_state: RemoteFileState = RemoteFileState.PROCESSING,
        failure_detail: str | None = None,
        generation_error: Exception | None = None,
        upload_error: Exception | None = None,
    ) -> None:
        self.reply = reply
        self._states = deque(states)
        self._last_state = self._states[-1] if self._states else RemoteFileState.ACTIVE
        self.upload_state = upload_state
        self.failure_detail = failure_detail
        self.generation_error = generation_error
        self.upload_error = upload_error
        self.uploads: list[dict] = []
        self.get_file_calls = 0
        self.generate_calls: list[GenerationRequest] = []
        self.files_seen_on_disk: list[bool] = []

    def script_states(self, *states: RemoteFileState) -> None:
        self._states = deque(states)
        self._last_state = states[-1]

    async def upload_file(self, path: Path, *, mime_type: str, display_name: str) -> RemoteUploadHandle:
        self.files_seen_on_disk.append(path.exists())
        self.uploads.append(
            {
                "path": path,
                "mime_type": mime_type,
                "display_name": display_name,
                "content": path.read_bytes(),
            }
        )
        if self.upload_error is not None:
            raise self.upload_error
        return RemoteUploadHandle(
            name="files/abc123",
            uri="https://generativelanguage.googleapis.com/v1beta/files/abc123",
            mime_type=mime_type,
            state=self.upload_state,
        )

    async def get_file(self, name: str) -> RemoteUploadHandle:
        self.get_file_calls += 1
        state = self._states.popleft() if self._states else self._last_state
        return RemoteUploadHandle(
            name=name,
            uri="https://generativelanguage.googleapis.com/v1beta/files/abc123",
            mime_type="audio/mp3",
            state=state,
            error=self.failure_detail if state is RemoteFileState.FAILED else None,
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.generate_calls.append(request)
        if self.generation_error is not None:
            raise self.generation_error
        return GenerationResult(text=self.reply)


class FakeTranscoder:
    """Records conversions; writes a `_converted.mp3` sibling like ffmpeg would."""

    def __init__(
        self,
        *,
        available: bool = True,
        fail: bool = False,
        output: bytes = b"converted-mp3",
    ) -> None:
        self.available = available
        self.fail = fail
        self.output = output
        self.converted: list[Path] = []

    def output_path_for(self, source: Path) -> Path:
        return source.with_name(f"{source.stem}_converted.mp3")

    async def is_available(self) -> bool:
        return self.available

    async def convert(self, source: Path) -> Path:
        if self.fail:
            raise TranscoderError("ffmpeg exited with 1: invalid data")
        target = self.output_path_for(source)
        target.write_bytes(self.output)
        self.converted.append(target)
        return target


class FakeSpeech:
    def __init__(self, audio: bytes = b"mp3-speech") -> None:
        self.audio = audio
        self.calls: list[tuple[str, VoiceSettings]] = []

    async def synthesize(self, text: str, voice: VoiceSettings) -> SpeechResult:
        self.calls.append((text, voice))
        return SpeechResult(audio_bytes=self.audio, media_type="audio/mp3", voice_name=voice.voice_name)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "audio"


@pytest.fixture
def test_settings(tmp_path: Path, staging_dir: Path) -> Settings:
    return Settings(
        environment="test",
        log_file=str(tmp_path / "logs" / "app.log"),
        audio_log_file=str(tmp_path / "logs" / "audio_pipeline.log"),
        gemini=GeminiConfig(GOOGLE_API_KEY="test-key"),
        media=MediaConfig(staging_dir=str(staging_dir)),
    )


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def transcoder() -> FakeTranscoder:
    return FakeTranscoder()


@pytest.fixture
def speech() -> FakeSpeech:
    return FakeSpeech()


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def services(
    test_settings: Settings,
    model_client: FakeModelClient,
    transcoder: FakeTranscoder,
    speech: FakeSpeech,
    sleeper: RecordingSleep,
    staging_dir: Path,
) -> GatewayServices:
    return GatewayServices(
        settings=test_settings,
        model_client=model_client,
        speech=speech,
        transcoder=transcoder,
        staging=StagingArea(staging_dir),
        sleep=sleeper,
    )


@pytest.fixture
def client(test_settings: Settings, services: GatewayServices) -> TestClient:
    app = create_app(test_settings, services)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def staged_files(directory: Path) -> list[Path]:
    if not directory.exists():
        return []
    return sorted(directory.iterdir())

