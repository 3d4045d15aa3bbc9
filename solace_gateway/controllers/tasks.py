"""Wellness task generation from a self-assessment."""

import logging

from fastapi import APIRouter

from solace_gateway.controllers.dependencies import ServicesDep, run_with_deadline
from solace_gateway.pipelines.audio import generate_text
from solace_gateway.services.errors import ClientInputError
from solace_gateway.services.prompt_builder import build_task_prompt
from solace_gateway.services.response_contract import (
    FALLBACK_TASKS,
    TaskListContractError,
    parse_task_list,
)
from solace_gateway.views import TaskGenerationRequest, TaskGenerationResponse, TaskItem

router = APIRouter(prefix="/api", tags=["tasks"])

logger = logging.getLogger(__name__)


@router.post("/tasks", response_model=TaskGenerationResponse)
async def generate_tasks(
    payload: TaskGenerationRequest,
    services: ServicesDep,
) -> TaskGenerationResponse:
    """Generate `count` tasks; fall back to a fixed list when the reply is unusable."""

    if payload.assessment is None or payload.assessment == "":
        raise ClientInputError("Assessment is required")

    prompt = build_task_prompt(payload.assessment, count=payload.count)
    # Generation failures propagate; only an unusable reply falls back.
    result = await run_with_deadline(
        "tasks",
        generate_text(services.model_client, prompt),
        services.settings.media.request_deadline_seconds,
    )

    try:
        tasks = parse_task_list(result.text)
    except TaskListContractError as exc:
        logger.warning("Falling back to default tasks: %s", exc)
        return TaskGenerationResponse(
            tasks=[TaskItem(**task.to_payload()) for task in FALLBACK_TASKS],
            fallback=True,
        )

    return TaskGenerationResponse(tasks=[TaskItem(**task.to_payload()) for task in tasks])
