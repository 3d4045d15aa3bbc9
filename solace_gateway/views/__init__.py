"""Pydantic schemas used as views in the MVC architecture."""

from .audio import AudioRequest, AudioResponse, FileInfo, TextResponse
from .common import ErrorResponse, HealthResponse
from .tasks import TaskGenerationRequest, TaskGenerationResponse, TaskItem
from .tips import Tips, TipsRequest, TipsResponse, YoutubeVideo
from .tts import TextToSpeechRequest

__all__ = [
    "AudioRequest",
    "AudioResponse",
    "FileInfo",
    "TextResponse",
    "ErrorResponse",
    "HealthResponse",
    "TaskGenerationRequest",
    "TaskGenerationResponse",
    "TaskItem",
    "Tips",
    "TipsRequest",
    "TipsResponse",
    "YoutubeVideo",
    "TextToSpeechRequest",
]
