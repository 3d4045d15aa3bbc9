"""Helpers to construct prompts the gateway owns.

Chat, audio and tips prompts arrive fully formed from the web client. Task
generation is assembled here from the stored assessment so the reply format
stays in step with `response_contract.parse_task_list`.
"""

from __future__ import annotations

import json
from typing import Any

TASK_PROMPT_TEMPLATE = """\
Based on the following mental wellbeing assessment data, create {count} personalized tasks for the user that would help improve their wellbeing.

Mental wellbeing assessment data:
{assessment}

Instructions:
1. Create {count} tasks tailored to the user's mental health needs
2. Each task should have:
   - name: A clear, concise task title
   - description: Detailed explanation of how to complete the task
   - mentalHealthBenefit: Explanation of how this task specifically improves mental wellbeing
   - difficulty: level (easy, medium, hard)
3. Tasks should be specific, actionable, and achievable
4. Provide tasks in a structured JSON format only with no additional text
5. Each task should be designed to improve an aspect of their mental wellbeing

Response format MUST be valid JSON in this exact structure:
[
  {{
    "name": "Task name here",
    "description": "Task description here",
    "mentalHealthBenefit": "Explanation of mental health benefits",
    "difficulty": "easy|medium|hard",
    "completionStatus": false
  }}
]
"""


def _format_assessment(assessment: Any) -> str:
    # Stored assessments are usually the raw model text; keep strings verbatim.
    if isinstance(assessment, str):
        return assessment.strip()
    return json.dumps(assessment, ensure_ascii=False, indent=2, default=str)


def build_task_prompt(assessment: Any, *, count: int = 5) -> str:
    """Render the task-generation prompt for an assessment payload."""

    return TASK_PROMPT_TEMPLATE.format(
        count=count,
        assessment=_format_assessment(assessment),
    )


__all__ = ["TASK_PROMPT_TEMPLATE", "build_task_prompt"]
