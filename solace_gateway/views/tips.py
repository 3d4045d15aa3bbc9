"""Schemas for tip generation."""

from typing import Any, List, Optional

from pydantic import BaseModel


class TipsRequest(BaseModel):
    prompt: Optional[str] = None
    assessment: Optional[Any] = None


class Tips(BaseModel):
    tip: str
    tricks: str
    suggestions: str


class YoutubeVideo(BaseModel):
    video_title: str
    description_video: str
    link: str


class TipsResponse(BaseModel):
    tips: Tips
    youtube: List[YoutubeVideo]
    success: bool = True
