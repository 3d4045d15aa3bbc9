"""Tests for POST /api/tasks."""

import json

from solace_gateway.services.errors import GenerationError
from solace_gateway.services.prompt_builder import build_task_prompt

TASKS_REPLY = json.dumps(
    [
        {
            "name": "Gratitude Journal",
            "description": "Write three things you are grateful for.",
            "mentalHealthBenefit": "Shifts attention toward positive experiences.",
            "difficulty": "easy",
            "completionStatus": False,
        },
        {
            "name": "Evening Stretch",
            "description": "Ten minutes of gentle stretching before bed.",
            "mentalHealthBenefit": "Relaxes the body and improves sleep.",
            "difficulty": "medium",
        },
    ]
)


def test_tasks_are_parsed_from_reply(client, model_client):
    model_client.reply = f"Here you go:\n```json\n{TASKS_REPLY}\n```"

    response = client.post("/api/tasks", json={"assessment": {"mood": "low"}, "count": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["fallback"] is False
    assert body["success"] is True
    assert [task["name"] for task in body["tasks"]] == ["Gratitude Journal", "Evening Stretch"]
    assert body["tasks"][1]["completionStatus"] is False
    prompt = model_client.generate_calls[0].prompt
    assert "create 2 personalized tasks" in prompt
    assert '"mood": "low"' in prompt


def test_unusable_reply_returns_fallback_tasks(client, model_client):
    model_client.reply = "I cannot help with that."

    response = client.post("/api/tasks", json={"assessment": "Feeling stressed"})

    assert response.status_code == 200
    body = response.json()
    assert body["fallback"] is True
    assert [task["name"] for task in body["tasks"]] == ["Daily Mindfulness Practice", "Nature Walk"]


def test_invalid_difficulty_triggers_fallback(client, model_client):
    model_client.reply = TASKS_REPLY.replace('"medium"', '"extreme"')

    response = client.post("/api/tasks", json={"assessment": "Feeling stressed"})

    assert response.json()["fallback"] is True


def test_assessment_is_required(client, model_client):
    response = client.post("/api/tasks", json={"count": 3})

    assert response.status_code == 400
    assert response.json()["error"] == "Assessment is required"
    assert model_client.generate_calls == []


def test_count_out_of_range(client):
    response = client.post("/api/tasks", json={"assessment": "x", "count": 50})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"
    assert "count" in response.json()["details"]


def test_prompt_keeps_string_assessment_verbatim():
    prompt = build_task_prompt("  slept badly  ", count=4)

    assert "create 4 personalized tasks" in prompt
    assert "slept badly\n" in prompt
    assert '"difficulty": "easy|medium|hard"' in prompt


def test_generation_failure_is_not_replaced_by_fallback(client, model_client):
    model_client.generation_error = GenerationError("Generation failed: upstream 503")

    response = client.post("/api/tasks", json={"assessment": "Feeling stressed"})

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "generation_failed"
    assert "tasks" not in body
