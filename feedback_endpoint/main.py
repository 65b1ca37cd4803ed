"""Feedback endpoint FastAPI application with a lifespan-managed upstream client."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from feedback_endpoint.clients.openai_responses import ResponsesClient
from feedback_endpoint.config import Settings, settings
from feedback_endpoint.middleware.request_log import RequestLogMiddleware
from feedback_endpoint.routes.feedback import method_not_allowed_handler
from feedback_endpoint.routes.feedback import router as feedback_router
from feedback_endpoint.routes.health import router as health_router

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the application. Tests pass their own Settings."""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = ResponsesClient(
            api_key=app_settings.openai_api_key,
            url=app_settings.openai_responses_url,
            model=app_settings.openai_model,
            json_mode=app_settings.openai_json_mode,
            timeout=app_settings.upstream_timeout_seconds,
        )
        app.state.responses_client = client
        if not app_settings.openai_api_key:
            logger.warning("OPENAI_API_KEY not set; feedback requests will fail")
        logger.info(
            "Feedback endpoint started: model=%s, %d allowed origin(s), loopback=%s",
            app_settings.openai_model,
            len(app_settings.allowed_origins),
            app_settings.allow_loopback_origins,
        )
        yield
        await client.close()
        logger.info("Feedback endpoint shutdown, client closed")

    # CORS is answered per request by the feedback route, not CORSMiddleware
    app = FastAPI(title="Learner Feedback Endpoint", lifespan=lifespan)
    app.state.settings = app_settings
    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

    app.include_router(health_router)
    app.include_router(feedback_router)
    return app


app = create_app()
