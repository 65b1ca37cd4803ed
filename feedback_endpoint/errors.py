"""Errors raised while handling a feedback request."""

from typing import Any


class FeedbackError(Exception):
    """A terminal request failure with the JSON body to send back."""

    def __init__(self, status_code: int, payload: dict[str, Any]) -> None:
        super().__init__(payload.get("error", "Feedback request failed"))
        self.status_code = status_code
        self.payload = payload


class UpstreamHTTPError(Exception):
    """The provider answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Upstream returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body
