"""Feedback endpoint configuration: loaded from environment variables / .env file."""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from feedback_endpoint.prompts import DEFAULT_EVALUATION_FOCUS, EVALUATOR_SYSTEM_PROMPT


class Settings(BaseSettings):
    # OpenAI
    openai_api_key: str = ""
    openai_responses_url: str = "https://api.openai.com/v1/responses"
    openai_model: str = "gpt-4.1-mini"
    openai_json_mode: bool = True
    upstream_timeout_seconds: float = 60.0

    # Origin allow-list (exact matches) plus loopback on any port for development
    allowed_origins: list[str] = ["https://jiang53y.github.io"]
    allow_loopback_origins: bool = True

    # Input bounds
    min_response_chars: int = 10
    max_response_chars: int = 2000

    # Prompt configuration
    system_prompt: str = EVALUATOR_SYSTEM_PROMPT
    evaluation_focus: list[str] = list(DEFAULT_EVALUATION_FOCUS)

    # Reject model output that does not match the verdict schema
    strict_verdict_schema: bool = False

    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


settings = Settings()
