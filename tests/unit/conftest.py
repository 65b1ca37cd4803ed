"""Shared test fixtures for feedback endpoint unit tests."""

import json

import pytest
from fastapi.testclient import TestClient

from feedback_endpoint.config import Settings
from feedback_endpoint.main import create_app

API_KEY = "sk-test-secret-key-123"
PROD_ORIGIN = "https://jiang53y.github.io"
RESPONSES_URL = "https://api.openai.test/v1/responses"

VERDICT = {
    "verdict": "Correct",
    "summary": "The response names a dependency, its effect on flow, and a risk.",
    "criteria_feedback": [
        {
            "criterion": "Identifies a dependency",
            "met": True,
            "comment": "Framing must precede drywall.",
        }
    ],
    "next_step": "Consider how parallel tasks could shorten the schedule.",
}

VALID_BODY = {
    "response_text": (
        "The drywall cannot go up until framing and electrical rough-in are "
        "done, so starting it early would cause rework and delays."
    ),
    "learning_objective": "Explain how task dependencies affect sequencing.",
    "criteria": ["Identifies a dependency", "Explains impact on flow"],
}


def output_text_envelope(text):
    """Responses API envelope using the top-level convenience field."""
    return {"id": "resp_1", "object": "response", "output_text": text}


def nested_envelope(text):
    """Responses API envelope with the text only inside output/content."""
    return {
        "id": "resp_2",
        "object": "response",
        "output": [
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text}],
            }
        ],
    }


def make_settings(**overrides) -> Settings:
    values = {
        "openai_api_key": API_KEY,
        "openai_responses_url": RESPONSES_URL,
        "allowed_origins": [PROD_ORIGIN],
        "allow_loopback_origins": True,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(settings):
    """TestClient with lifespan, so the upstream client is created and closed."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def post_feedback(client):
    """POST a JSON body from the production origin."""

    def _post(body=None, origin=PROD_ORIGIN, raw=None):
        headers = {"Content-Type": "application/json"}
        if origin is not None:
            headers["Origin"] = origin
        content = raw if raw is not None else json.dumps(
            VALID_BODY if body is None else body
        )
        return client.post("/", content=content, headers=headers)

    return _post
