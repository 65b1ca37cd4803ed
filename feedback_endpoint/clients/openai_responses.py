"""OpenAI Responses API client for verdict generation."""

import logging
from typing import Any

import httpx
from pydantic import SecretStr

from feedback_endpoint.errors import UpstreamHTTPError

logger = logging.getLogger(__name__)

RESPONSES_URL = "https://api.openai.com/v1/responses"


class ResponsesClient:
    """Single-shot calls to the Responses API. No retries, no streaming."""

    def __init__(
        self,
        api_key: str = "",
        url: str = RESPONSES_URL,
        model: str = "gpt-4.1-mini",
        json_mode: bool = True,
        timeout: float = 60.0,
    ) -> None:
        self._api_key = SecretStr(api_key)
        self.url = url
        self.model = model
        self.json_mode = json_mode
        self.http = httpx.AsyncClient(timeout=timeout)

    def build_payload(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "input": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if self.json_mode:
            payload["text"] = {"format": {"type": "json_object"}}
        return payload

    async def create(self, system_prompt: str, user_prompt: str) -> httpx.Response:
        """POST one system/user instruction pair.

        Raises UpstreamHTTPError on a non-2xx status; transport failures
        surface as ``httpx.RequestError``.
        """
        resp = await self.http.post(
            self.url,
            headers={
                "Authorization": f"Bearer {self._api_key.get_secret_value()}",
                "Content-Type": "application/json",
            },
            json=self.build_payload(system_prompt, user_prompt),
        )
        if not resp.is_success:
            logger.warning("Responses API returned HTTP %s", resp.status_code)
            raise UpstreamHTTPError(resp.status_code, resp.text)
        return resp

    async def close(self) -> None:
        await self.http.aclose()
