"""Schemas for the chat endpoint (text or recorded audio)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AudioRequest(BaseModel):
    base64_audio: Optional[str] = Field(default=None, alias="base64Audio")
    prompt: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class FileInfo(BaseModel):
    uri: str
    state: str


class TextResponse(BaseModel):
    text: str


class AudioResponse(BaseModel):
    text: str
    success: bool = True
    file_info: FileInfo = Field(alias="fileInfo")

    model_config = ConfigDict(populate_by_name=True)
