from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiConfig(BaseSettings):
    """Google Gemini (generation + Files API) configuration."""

    api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias="GOOGLE_API_KEY",
    )
    model: str = Field(
        default="gemini-2.0-flash",
        validation_alias="GEMINI_MODEL",
    )
    request_timeout_seconds: float = Field(
        default=60.0,
        validation_alias="GEMINI_REQUEST_TIMEOUT_SECONDS",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.api_key.get_secret_value())


class SpeechConfig(BaseSettings):
    """Google Cloud Text-to-Speech configuration."""

    credentials_file: str = Field(
        default="./google-services.json",
        validation_alias="GOOGLE_TTS_CREDENTIALS_FILE",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        validation_alias="GOOGLE_TTS_TIMEOUT_SECONDS",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class MediaConfig(BaseSettings):
    """Staging, transcoding and remote polling limits for the audio pipeline."""

    staging_dir: str = "audio"
    ffmpeg_binary: str = "ffmpeg"
    probe_timeout_seconds: float = Field(default=10.0, gt=0)
    transcode_timeout_seconds: float = Field(default=60.0, gt=0)
    audio_codec: str = "libmp3lame"
    audio_bitrate: str = "128k"
    upload_mime_type: str = "audio/mp3"
    poll_max_attempts: int = Field(default=12, ge=0)
    poll_interval_seconds: float = Field(default=5.0, ge=0)
    request_deadline_seconds: float = Field(default=180.0, gt=0)
    max_body_bytes: int = Field(default=10 * 1024 * 1024, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="MEDIA_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "Solace API Gateway"
    app_version: str = "1.0.0"
    environment: str = "production"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 5000
    log_file: str = "logs/app.log"
    audio_log_file: str = "logs/audio_pipeline.log"

    # Gemini
    gemini: GeminiConfig = Field(default_factory=GeminiConfig)

    # Text-to-speech
    speech: SpeechConfig = Field(default_factory=SpeechConfig)

    # Audio pipeline
    media: MediaConfig = Field(default_factory=MediaConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"


# Global settings instance
settings = Settings()
