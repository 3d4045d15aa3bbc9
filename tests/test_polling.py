"""Unit tests for the upload readiness state machine."""

import asyncio

import pytest

from conftest import FakeModelClient, RecordingSleep
from solace_gateway.domain.models import PollOutcome, RemoteFileState, RemoteUploadHandle
from solace_gateway.pipelines.audio.polling import raise_for_outcome, wait_until_ready
from solace_gateway.services.errors import ProcessingTimeoutError, RemoteProcessingFailedError

UPLOADED = RemoteUploadHandle(
    name="files/abc123",
    uri="https://example.test/files/abc123",
    mime_type="audio/mp3",
    state=RemoteFileState.PROCESSING,
)


def _poll(client, sleeper, **kwargs):
    return asyncio.run(wait_until_ready(client, UPLOADED, sleep=sleeper, **kwargs))


def test_upload_state_is_always_re_queried():
    client = FakeModelClient(states=[RemoteFileState.ACTIVE])
    sleeper = RecordingSleep()

    result = _poll(client, sleeper)

    assert result.outcome is PollOutcome.READY
    assert result.attempts == 0
    assert client.get_file_calls == 1
    assert sleeper.delays == []


def test_becomes_ready_after_several_polls():
    states = [RemoteFileState.PROCESSING] * 3 + [RemoteFileState.ACTIVE]
    client = FakeModelClient(states=states)
    sleeper = RecordingSleep()

    result = _poll(client, sleeper)

    assert result.outcome is PollOutcome.READY
    assert result.attempts == 3
    assert sleeper.delays == [5.0, 5.0, 5.0]
    assert raise_for_outcome(result).state is RemoteFileState.ACTIVE


def test_twelve_processing_polls_time_out():
    client = FakeModelClient(states=[RemoteFileState.PROCESSING])
    sleeper = RecordingSleep()

    result = _poll(client, sleeper)

    assert result.outcome is PollOutcome.TIMED_OUT
    assert result.attempts == 12
    assert len(sleeper.delays) == 12
    with pytest.raises(ProcessingTimeoutError, match="timed out after 60 seconds"):
        raise_for_outcome(result)


def test_ready_on_the_last_allowed_poll():
    """The post-upload query is not one of the twelve polls.

    Twelve PROCESSING answers (the post-upload query plus eleven polls) still
    leave the twelfth poll, so ACTIVE there succeeds. Only a file that is
    still PROCESSING after the twelfth poll times out.
    """

    states = [RemoteFileState.PROCESSING] * 12 + [RemoteFileState.ACTIVE]
    client = FakeModelClient(states=states)

    result = _poll(client, RecordingSleep())

    assert result.outcome is PollOutcome.READY
    assert result.attempts == 12


def test_failed_state_carries_remote_detail():
    client = FakeModelClient(states=[RemoteFileState.FAILED], failure_detail="corrupt stream")

    result = _poll(client, RecordingSleep())

    assert result.outcome is PollOutcome.FAILED
    with pytest.raises(RemoteProcessingFailedError) as excinfo:
        raise_for_outcome(result)
    assert excinfo.value.message == "Audio processing failed: corrupt stream"
    assert excinfo.value.status_code == 502


def test_failed_state_without_detail():
    client = FakeModelClient(states=[RemoteFileState.FAILED])

    with pytest.raises(RemoteProcessingFailedError, match="Unknown error"):
        raise_for_outcome(_poll(client, RecordingSleep()))


def test_unspecified_state_lets_generation_proceed():
    client = FakeModelClient(states=[RemoteFileState.UNKNOWN])

    result = _poll(client, RecordingSleep())

    assert result.outcome is PollOutcome.READY


def test_custom_ceiling_and_interval():
    client = FakeModelClient(states=[RemoteFileState.PROCESSING])
    sleeper = RecordingSleep()

    result = _poll(client, sleeper, max_attempts=3, interval_seconds=0.5)

    assert sleeper.delays == [0.5, 0.5, 0.5]
    with pytest.raises(ProcessingTimeoutError, match="after 1 seconds"):
        raise_for_outcome(result, max_attempts=3, interval_seconds=0.5)
