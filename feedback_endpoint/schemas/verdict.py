"""Schemas for learner submissions and the model's verdict."""

from typing import Literal

from pydantic import BaseModel


class Submission(BaseModel):
    """Validated, trimmed learner submission."""

    response_text: str
    learning_objective: str
    criteria: list[str] = []


class CriterionFeedback(BaseModel):
    criterion: str
    met: bool
    comment: str


class Verdict(BaseModel):
    verdict: Literal["Correct", "Not quite right", "Incorrect"]
    summary: str
    criteria_feedback: list[CriterionFeedback]
    next_step: str

    model_config = {"extra": "forbid"}
