"""Pydantic models for validating model replies.

The tips endpoint expects two JSON documents separated by a blank line; the
task endpoint expects a JSON array somewhere in the reply. Both run through
these schemas so controllers receive normalized, type-safe objects.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from solace_gateway.services.errors import (
    TipsBlockCountError,
    TipsEmptyVideoListError,
    TipsInvalidJsonError,
    TipsMissingFieldError,
)

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?")
_BLANK_LINE_PATTERN = re.compile(r"\n\s*\n")
_JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


class TipsBlock(BaseModel):
    tip: str = Field(min_length=1)
    tricks: str = Field(min_length=1)
    suggestions: str = Field(min_length=1)

    model_config = ConfigDict(extra="allow")


class VideoRecommendation(BaseModel):
    video_title: str = Field(min_length=1)
    description_video: str = Field(min_length=1)
    link: str = Field(min_length=1)

    model_config = ConfigDict(extra="allow")


@dataclass(frozen=True)
class TipsBundle:
    tips: TipsBlock
    youtube: list[VideoRecommendation]


def _strip_code_fences(payload: str) -> str:
    return _FENCE_PATTERN.sub("", payload or "").strip()


def _missing_fields(error: ValidationError) -> list[str]:
    fields: list[str] = []
    for line_error in error.errors():
        location = ".".join(str(part) for part in line_error.get("loc", ()))
        if location and location not in fields:
            fields.append(location)
    return fields


def parse_tips_response(raw_text: str) -> TipsBundle:
    """Split a tips reply into its two JSON blocks and validate both.

    Raises one `TipsFormatError` subclass per violated rule: block count,
    invalid JSON, missing tip fields, or an empty/missing video list.
    """

    cleaned = _strip_code_fences(raw_text)
    blocks = [part.strip() for part in _BLANK_LINE_PATTERN.split(cleaned) if part.strip()]
    if len(blocks) != 2:
        raise TipsBlockCountError(len(blocks))

    tips_raw, videos_raw = blocks
    try:
        tips_data = json.loads(tips_raw)
    except json.JSONDecodeError as exc:
        raise TipsInvalidJsonError("tips", str(exc)) from exc
    try:
        videos_data = json.loads(videos_raw)
    except json.JSONDecodeError as exc:
        raise TipsInvalidJsonError("video", str(exc)) from exc

    if not isinstance(tips_data, dict):
        raise TipsMissingFieldError("tips", ["tip", "tricks", "suggestions"])
    try:
        tips = TipsBlock.model_validate(tips_data)
    except ValidationError as exc:
        raise TipsMissingFieldError("tips", _missing_fields(exc)) from exc

    if not isinstance(videos_data, list) or not videos_data:
        raise TipsEmptyVideoListError()
    try:
        videos = [VideoRecommendation.model_validate(item) for item in videos_data]
    except ValidationError as exc:
        raise TipsMissingFieldError("video", _missing_fields(exc)) from exc

    return TipsBundle(tips=tips, youtube=videos)


class WellnessTask(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    mental_health_benefit: str = Field(alias="mentalHealthBenefit", min_length=1)
    difficulty: Literal["easy", "medium", "hard"]
    completion_status: bool = Field(default=False, alias="completionStatus")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


_TASK_LIST = TypeAdapter(list[WellnessTask])

FALLBACK_TASKS: tuple[WellnessTask, ...] = (
    WellnessTask(
        name="Daily Mindfulness Practice",
        description="Take 5 minutes to practice mindful breathing and focus on the present moment.",
        mentalHealthBenefit=(
            "Reduces anxiety and stress by bringing your attention to the present, "
            "calming your nervous system and breaking worry cycles."
        ),
        difficulty="easy",
    ),
    WellnessTask(
        name="Nature Walk",
        description="Spend 15 minutes walking outside in nature, observing your surroundings.",
        mentalHealthBenefit=(
            "Exposure to nature reduces cortisol levels, improves mood, and helps "
            "restore mental energy through attention restoration."
        ),
        difficulty="easy",
    ),
)


class TaskListContractError(ValueError):
    """Raised when a reply does not contain a valid task array."""


def parse_task_list(raw_text: str) -> list[WellnessTask]:
    """Extract the first JSON array from the reply and validate every task."""

    match = _JSON_ARRAY_PATTERN.search(_strip_code_fences(raw_text))
    if not match:
        raise TaskListContractError("Could not find a JSON array in the response")
    try:
        tasks = _TASK_LIST.validate_json(match.group(0))
    except ValidationError as exc:
        raise TaskListContractError(f"Invalid task list: {exc.error_count()} errors") from exc
    if not tasks:
        raise TaskListContractError("The task list is empty")
    return tasks


__all__ = [
    "FALLBACK_TASKS",
    "TaskListContractError",
    "TipsBlock",
    "TipsBundle",
    "VideoRecommendation",
    "WellnessTask",
    "parse_task_list",
    "parse_tips_response",
]
