"""Google Cloud Text-to-Speech integration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Protocol

from fastapi.concurrency import run_in_threadpool
from google.cloud import texttospeech

from solace_gateway.config.settings import SpeechConfig
from solace_gateway.services.errors import SpeechSynthesisError, UnsupportedLanguageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoiceSettings:
    language_code: str
    voice_name: str


LANGUAGE_VOICES: Mapping[str, VoiceSettings] = MappingProxyType(
    {
        "en": VoiceSettings("en-US", "en-US-Neural2-F"),
        "de": VoiceSettings("de-DE", "de-DE-Neural2-F"),
        "hi": VoiceSettings("hi-IN", "hi-IN-Neural2-D"),
        "fr": VoiceSettings("fr-FR", "fr-FR-Neural2-A"),
        "ta": VoiceSettings("ta-IN", "ta-IN-Neural2-A"),
        "kn": VoiceSettings("kn-IN", "kn-IN-Neural2-A"),
        "es": VoiceSettings("es-ES", "es-ES-Neural2-A"),
    }
)


def resolve_voice(language: str) -> VoiceSettings:
    """Return the voice for a short language code or raise `UnsupportedLanguageError`."""

    voice = LANGUAGE_VOICES.get(language)
    if voice is None:
        raise UnsupportedLanguageError(language)
    return voice


@dataclass(frozen=True)
class SpeechResult:
    """Synthesised audio bytes ready to be streamed back."""

    audio_bytes: bytes
    media_type: str
    voice_name: str


class SpeechSynthesizer(Protocol):
    async def synthesize(self, text: str, voice: VoiceSettings) -> SpeechResult: ...


class GoogleSpeechService:
    """Synthesize MP3 speech with Google Cloud Text-to-Speech."""

    def __init__(self, config: SpeechConfig) -> None:
        self._credentials_file = config.credentials_file
        self._timeout = config.request_timeout_seconds
        self._client: texttospeech.TextToSpeechClient | None = None

    def _get_client(self) -> texttospeech.TextToSpeechClient:
        # Built on first use so the app can start without a credentials file.
        if self._client is None:
            try:
                self._client = texttospeech.TextToSpeechClient.from_service_account_file(
                    self._credentials_file
                )
            except Exception as exc:  # pragma: no cover - configuration issue
                raise SpeechSynthesisError(
                    f"Could not load TTS credentials from {self._credentials_file}: {exc}"
                ) from exc
        return self._client

    async def synthesize(self, text: str, voice: VoiceSettings) -> SpeechResult:
        client = self._get_client()

        def _call() -> bytes:
            response = client.synthesize_speech(
                input=texttospeech.SynthesisInput(text=text),
                voice=texttospeech.VoiceSelectionParams(
                    language_code=voice.language_code,
                    name=voice.voice_name,
                    ssml_gender=texttospeech.SsmlVoiceGender.FEMALE,
                ),
                audio_config=texttospeech.AudioConfig(
                    audio_encoding=texttospeech.AudioEncoding.MP3,
                ),
                timeout=self._timeout,
            )
            return response.audio_content

        try:
            audio_bytes = await run_in_threadpool(_call)
        except Exception as exc:  # pragma: no cover - network call
            logger.exception("TTS synth failed for voice '%s'", voice.voice_name)
            raise SpeechSynthesisError(f"Failed to synthesize speech: {exc}") from exc

        if not audio_bytes:
            raise SpeechSynthesisError("Text-to-speech returned an empty audio stream.")

        return SpeechResult(
            audio_bytes=audio_bytes,
            media_type="audio/mp3",
            voice_name=voice.voice_name,
        )


__all__ = [
    "LANGUAGE_VOICES",
    "GoogleSpeechService",
    "SpeechResult",
    "SpeechSynthesizer",
    "VoiceSettings",
    "resolve_voice",
]
