"""Schemas for wellness task generation."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskGenerationRequest(BaseModel):
    assessment: Optional[Any] = None
    count: int = Field(default=5, ge=1, le=10)


class TaskItem(BaseModel):
    name: str
    description: str
    mentalHealthBenefit: str
    difficulty: str
    completionStatus: bool = False

    model_config = ConfigDict(extra="allow")


class TaskGenerationResponse(BaseModel):
    tasks: List[TaskItem]
    fallback: bool = False
    success: bool = True
