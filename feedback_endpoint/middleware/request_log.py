"""Request logging middleware: one timing record per feedback request."""

import json
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

FEEDBACK_PATH = "/"


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, status and timing for requests to the feedback path.

    Bodies are never read: learner text and credentials stay out of the log.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path != FEEDBACK_PATH:
            response: Response = await call_next(request)
            return response

        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start

        entry = {
            "path": FEEDBACK_PATH,
            "method": request.method,
            "status_code": response.status_code,
            "elapsed_seconds": round(elapsed, 3),
            "has_origin": "origin" in request.headers,
        }
        logger.info("feedback_request %s", json.dumps(entry))
        return response
