"""Remote upload readiness polling (Stage 05 of the audio pipeline).

State machine::

    UPLOADED -> PROCESSING -> READY | FAILED | TIMED_OUT

The upload response is never trusted as final: its state is queried once,
then re-queried after each `interval_seconds` sleep while it stays
PROCESSING, at most `max_attempts` times. With the defaults (12 x 5 s) a
file that never leaves PROCESSING times out after roughly 60 seconds.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from solace_gateway.domain.models import (
    PollOutcome,
    PollResult,
    RemoteFileState,
    RemoteUploadHandle,
)
from solace_gateway.services.errors import ProcessingTimeoutError, RemoteProcessingFailedError
from solace_gateway.services.gemini import GenerativeModelClient
from solace_gateway.telemetry import observe_poll

logger = logging.getLogger("solace_gateway.pipeline")

SleepFunc = Callable[[float], Awaitable[None]]

DEFAULT_MAX_ATTEMPTS = 12
DEFAULT_INTERVAL_SECONDS = 5.0


def _terminal_outcome(state: RemoteFileState) -> PollOutcome | None:
    if state is RemoteFileState.PROCESSING:
        return None
    if state is RemoteFileState.FAILED:
        return PollOutcome.FAILED
    # ACTIVE, and any state the SDK cannot name, let generation proceed.
    return PollOutcome.READY


async def wait_until_ready(
    client: GenerativeModelClient,
    uploaded: RemoteUploadHandle,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    sleep: SleepFunc = asyncio.sleep,
) -> PollResult:
    """Drive the poll loop and return its terminal outcome without raising."""

    handle = await client.get_file(uploaded.name)
    attempts = 0

    while handle.state is RemoteFileState.PROCESSING and attempts < max_attempts:
        logger.debug("Processing file %s... attempt %s", uploaded.name, attempts + 1)
        await sleep(interval_seconds)
        handle = await client.get_file(uploaded.name)
        attempts += 1

    outcome = _terminal_outcome(handle.state) or PollOutcome.TIMED_OUT
    observe_poll(outcome.value, attempts)
    logger.info(
        "Remote file %s finished polling outcome=%s state=%s attempts=%s",
        uploaded.name,
        outcome.value,
        handle.state.value,
        attempts,
    )
    return PollResult(outcome=outcome, handle=handle, attempts=attempts)


def raise_for_outcome(
    result: PollResult,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
) -> RemoteUploadHandle:
    """Return the ready handle or raise the error matching the outcome."""

    if result.outcome is PollOutcome.FAILED:
        detail = result.handle.error or "Unknown error"
        raise RemoteProcessingFailedError(f"Audio processing failed: {detail}")
    if result.outcome is PollOutcome.TIMED_OUT:
        ceiling = int(max_attempts * interval_seconds)
        raise ProcessingTimeoutError(f"Audio processing timed out after {ceiling} seconds")
    return result.handle


__all__ = ["SleepFunc", "raise_for_outcome", "wait_until_ready"]
