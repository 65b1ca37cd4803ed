"""Prompts for the instructional evaluator model."""

from collections.abc import Sequence
from typing import Any

EVALUATOR_SYSTEM_PROMPT = (
    "You are an instructional coach evaluating a short open-ended response. "
    "Be concise, neutral, and explanatory. Do not praise or judge the learner. "
    "Evaluate only against the provided learning objective and criteria. "
    "Return ONLY valid JSON with the required schema. No markdown, no extra text."
)

# Domain checks for the task-sequencing exercise this endpoint was first deployed for
DEFAULT_EVALUATION_FOCUS = (
    "Identifies at least one dependency",
    "Explains how sequencing affects project flow",
    "Mentions a realistic risk (e.g., rework, delays, coordination)",
)

VERDICT_RULES = """\
Rules for verdict:
- "Correct": all criteria are met clearly.
- "Not quite right": some criteria are met, but at least one is missing or unclear.
- "Incorrect": most criteria are not met or the response is off-topic.
"""

OUTPUT_KEYS = """\
Output MUST be ONLY JSON with exactly these keys:
- verdict
- summary
- criteria_feedback (array of { criterion, met, comment })
- next_step
"""


def number_criteria(criteria: Sequence[Any]) -> str:
    """Render criteria as a 1-indexed list, one per line."""
    return "\n".join(f"{i}. {c}" for i, c in enumerate(criteria, start=1))


def build_user_prompt(
    learning_objective: str,
    criteria: Sequence[Any],
    response_text: str,
    focus: Sequence[str] = DEFAULT_EVALUATION_FOCUS,
) -> str:
    """Assemble the user instruction for one learner submission."""
    parts = [
        f"Learning objective:\n{learning_objective}\n\n",
        f"Evaluation criteria:\n{number_criteria(criteria)}\n\n",
        f"Learner response:\n{response_text}\n\n",
    ]
    if focus:
        checks = "\n".join(f"- {check}" for check in focus)
        parts.append(f"Evaluate whether the response:\n{checks}\n\n")
    parts.append(VERDICT_RULES + "\n")
    parts.append(OUTPUT_KEYS)
    return "".join(parts)
