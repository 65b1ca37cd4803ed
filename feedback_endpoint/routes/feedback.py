"""Feedback endpoint: evaluates a learner response via the Responses API."""

import json
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedback_endpoint.clients.openai_responses import ResponsesClient
from feedback_endpoint.config import Settings
from feedback_endpoint.errors import FeedbackError, UpstreamHTTPError
from feedback_endpoint.extraction import (
    ENVELOPE_PREVIEW_CHARS,
    RAW_PREVIEW_CHARS,
    compact_json,
    extract_output_text,
    parse_model_json,
    verdict_issues,
)
from feedback_endpoint.origins import cors_headers, is_allowed_origin
from feedback_endpoint.prompts import build_user_prompt
from feedback_endpoint.schemas.verdict import Submission

router = APIRouter()
logger = logging.getLogger(__name__)

DETAIL_PREVIEW_CHARS = 300


def _request_origin(request: Request, settings: Settings) -> tuple[str, str | None]:
    """Raw ``Origin`` header and the validated origin (None if rejected)."""
    raw = request.headers.get("origin", "")
    return raw, is_allowed_origin(
        raw, settings.allowed_origins, settings.allow_loopback_origins
    )


def _render(value: Any) -> str:
    """Strings as-is, anything else as JSON text (null, true, {"a": 1})."""
    return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)


def _as_text(value: Any) -> str:
    if not value:
        return ""
    return _render(value).strip()


def validate_submission(body: Any, settings: Settings) -> Submission:
    """Coerce and bound-check a decoded request body.

    Raises FeedbackError(400) with the first failing rule.
    """
    if not isinstance(body, dict):
        body = {}
    response_text = _as_text(body.get("response_text"))
    learning_objective = _as_text(body.get("learning_objective"))
    criteria = body.get("criteria")
    if not isinstance(criteria, list):
        criteria = []
    criteria = [_render(c) for c in criteria]

    if not (
        settings.min_response_chars
        <= len(response_text)
        <= settings.max_response_chars
    ):
        raise FeedbackError(400, {"error": "Response length out of range"})
    if not learning_objective:
        raise FeedbackError(400, {"error": "Missing learning_objective"})

    return Submission(
        response_text=response_text,
        learning_objective=learning_objective,
        criteria=criteria,
    )


async def _read_submission(request: Request, settings: Settings) -> Submission:
    try:
        body = await request.json()
    except ValueError:
        raise FeedbackError(400, {"error": "Invalid JSON"})
    return validate_submission(body, settings)


async def _call_upstream(
    client: ResponsesClient, submission: Submission, settings: Settings
) -> httpx.Response:
    user_prompt = build_user_prompt(
        submission.learning_objective,
        submission.criteria,
        submission.response_text,
        focus=settings.evaluation_focus,
    )
    try:
        return await client.create(settings.system_prompt, user_prompt)
    except UpstreamHTTPError as e:
        raise FeedbackError(
            502,
            {"error": "OpenAI error", "detail": e.body[:DETAIL_PREVIEW_CHARS]},
        )
    except httpx.RequestError as e:
        logger.warning("Responses API unreachable: %s", type(e).__name__)
        detail = f"{type(e).__name__}: {e}"
        raise FeedbackError(
            502,
            {"error": "OpenAI unreachable", "detail": detail[:DETAIL_PREVIEW_CHARS]},
        )


def _parse_verdict(resp: httpx.Response, settings: Settings) -> Any:
    """Pull the model's JSON out of a successful upstream response."""
    try:
        envelope = resp.json()
    except ValueError:
        logger.warning("Responses API returned a non-JSON envelope")
        raise FeedbackError(
            500,
            {
                "error": "Model returned non-JSON",
                "raw": "",
                "openai_response_preview": resp.text[:ENVELOPE_PREVIEW_CHARS],
            },
        )

    text = extract_output_text(envelope)
    try:
        parsed = parse_model_json(text)
    except ValueError:
        logger.warning("Model returned non-JSON text (%d chars)", len(text))
        raise FeedbackError(
            500,
            {
                "error": "Model returned non-JSON",
                "raw": text[:RAW_PREVIEW_CHARS],
                "openai_response_preview": compact_json(envelope)[
                    :ENVELOPE_PREVIEW_CHARS
                ],
            },
        )

    issues = verdict_issues(parsed)
    if issues:
        logger.warning("Model verdict does not match schema: %s", "; ".join(issues))
        if settings.strict_verdict_schema:
            raise FeedbackError(
                500,
                {
                    "error": "Model returned invalid verdict",
                    "issues": issues,
                    "raw": text[:RAW_PREVIEW_CHARS],
                },
            )
    return parsed


@router.options("/")
async def preflight(request: Request) -> Response:
    """CORS preflight. Headers are only attached for allowed origins."""
    _, origin = _request_origin(request, request.app.state.settings)
    return Response(status_code=204, headers=cors_headers(origin))


@router.post("/")
async def submit_feedback(request: Request) -> Response:
    """Evaluate a learner response and relay the model's verdict."""
    settings: Settings = request.app.state.settings
    raw_origin, origin = _request_origin(request, settings)
    if origin is None:
        logger.warning("Rejected request from origin %r", raw_origin)
        return JSONResponse(
            {"error": "Origin not allowed", "origin": raw_origin}, status_code=403
        )

    try:
        submission = await _read_submission(request, settings)
        if not settings.openai_api_key:
            logger.error("OPENAI_API_KEY is not configured")
            raise FeedbackError(500, {"error": "Missing OPENAI_API_KEY"})
        resp = await _call_upstream(
            request.app.state.responses_client, submission, settings
        )
        verdict = _parse_verdict(resp, settings)
    except FeedbackError as e:
        return JSONResponse(
            e.payload, status_code=e.status_code, headers=cors_headers(origin)
        )

    return JSONResponse(verdict, headers=cors_headers(origin))


async def method_not_allowed_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Plain-text 405 for every method a route does not accept, without CORS."""
    if exc.status_code == 405:
        return PlainTextResponse("Method not allowed", status_code=405)
    return await http_exception_handler(request, exc)
