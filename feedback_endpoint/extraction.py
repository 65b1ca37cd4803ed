"""Locate and parse the model's JSON text inside a Responses API envelope."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from feedback_endpoint.schemas.verdict import Verdict

logger = logging.getLogger(__name__)

RAW_PREVIEW_CHARS = 400
ENVELOPE_PREVIEW_CHARS = 800


def _from_output_text(envelope: Any) -> str | None:
    """Top-level ``output_text`` convenience field."""
    text = envelope.get("output_text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


def _from_output_items(envelope: Any) -> str | None:
    """First non-blank ``output[*].content[*].text``."""
    output = envelope.get("output")
    for item in output if isinstance(output, list) else []:
        content = item.get("content") if isinstance(item, dict) else None
        for part in content if isinstance(content, list) else []:
            text = part.get("text") if isinstance(part, dict) else None
            if isinstance(text, str) and text.strip():
                return text.strip()
    return None


# Tried in order; the first non-empty result wins
EXTRACTION_STRATEGIES: tuple[Callable[[Any], str | None], ...] = (
    _from_output_text,
    _from_output_items,
)


def extract_output_text(envelope: Any) -> str:
    """Return the model's text from either envelope shape, or ``""``."""
    for strategy in EXTRACTION_STRATEGIES:
        try:
            text = strategy(envelope)
        except (AttributeError, TypeError, KeyError):
            logger.debug("Extraction strategy %s failed", strategy.__name__)
            continue
        if text:
            return text
    return ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_model_json(text: str) -> Any:
    """Parse model text as strict JSON (NaN/Infinity are rejected).

    Raises ValueError (``json.JSONDecodeError`` included) on failure.
    """
    return json.loads(text, parse_constant=_reject_constant)


def compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def verdict_issues(payload: Any) -> list[str]:
    """Schema problems with a parsed verdict; an empty list means it conforms."""
    try:
        Verdict.model_validate(payload)
    except ValidationError as e:
        return [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
    return []
