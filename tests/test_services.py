"""Tests for the Gemini and Text-to-Speech wrappers without network access."""

import asyncio
from pathlib import Path
from types import SimpleNamespace

import pytest
from google.genai import types as genai_types

from solace_gateway.config.settings import GeminiConfig, SpeechConfig
from solace_gateway.domain.models import GenerationRequest, RemoteFileState
from solace_gateway.services.errors import GenerationError, RemoteUploadError, SpeechSynthesisError
from solace_gateway.services.gemini import GeminiClient, _coerce_state, _to_handle
from solace_gateway.services.speech import GoogleSpeechService, resolve_voice


def test_unconfigured_gemini_client_fails_per_call(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    client = GeminiClient(GeminiConfig(GOOGLE_API_KEY=""))

    with pytest.raises(GenerationError, match="not configured"):
        asyncio.run(client.generate(GenerationRequest(prompt="hi")))
    with pytest.raises(RemoteUploadError):
        asyncio.run(client.upload_file(Path("x.mp3"), mime_type="audio/mp3", display_name="x.mp3"))
    with pytest.raises(RemoteUploadError):
        asyncio.run(client.get_file("files/x"))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (genai_types.FileState.ACTIVE, RemoteFileState.ACTIVE),
        (genai_types.FileState.PROCESSING, RemoteFileState.PROCESSING),
        ("failed", RemoteFileState.FAILED),
        (None, RemoteFileState.UNKNOWN),
        ("SOMETHING_NEW", RemoteFileState.UNKNOWN),
    ],
)
def test_coerce_state(raw, expected):
    assert _coerce_state(raw) is expected


def test_to_handle_reads_sdk_file():
    remote = SimpleNamespace(
        name="files/abc",
        uri="https://example.test/files/abc",
        mime_type=None,
        state=genai_types.FileState.FAILED,
        error=SimpleNamespace(message="bad audio"),
    )

    handle = _to_handle(remote, "audio/mp3")

    assert handle.name == "files/abc"
    assert handle.mime_type == "audio/mp3"
    assert handle.state is RemoteFileState.FAILED
    assert handle.error == "bad audio"


class _RecordingTtsClient:
    def __init__(self, audio: bytes) -> None:
        self.audio = audio
        self.kwargs = None

    def synthesize_speech(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(audio_content=self.audio)


def test_speech_service_passes_voice_and_timeout():
    service = GoogleSpeechService(SpeechConfig(GOOGLE_TTS_TIMEOUT_SECONDS=12))
    fake = _RecordingTtsClient(b"mp3")
    service._client = fake

    result = asyncio.run(service.synthesize("breathe", resolve_voice("fr")))

    assert result.audio_bytes == b"mp3"
    assert result.media_type == "audio/mp3"
    assert fake.kwargs["timeout"] == 12
    assert fake.kwargs["voice"].name == "fr-FR-Neural2-A"
    assert fake.kwargs["voice"].language_code == "fr-FR"


def test_speech_service_rejects_empty_audio():
    service = GoogleSpeechService(SpeechConfig())
    service._client = _RecordingTtsClient(b"")

    with pytest.raises(SpeechSynthesisError, match="empty"):
        asyncio.run(service.synthesize("breathe", resolve_voice("en")))


def test_speech_service_reports_missing_credentials(tmp_path):
    service = GoogleSpeechService(SpeechConfig(GOOGLE_TTS_CREDENTIALS_FILE=str(tmp_path / "missing.json")))

    with pytest.raises(SpeechSynthesisError, match="credentials"):
        asyncio.run(service.synthesize("breathe", resolve_voice("en")))
