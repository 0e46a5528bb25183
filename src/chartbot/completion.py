"""
Chat completion client: send_message(text) returns the assistant text.

Each call is a single-turn request: a system prompt picked from the query type,
then the user's text. Conversation history is not sent.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from chartbot.errors import CompletionError
from chartbot.models.completion import ChatCompletionRequest, ChatCompletionResponse, CompletionMessage
from chartbot.prompts import categorize, system_prompt
from chartbot.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, HttpClient

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "mistral-large-latest"
COMPLETIONS_PATH = "/v1/chat/completions"


class CompletionClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._http = HttpClient(base_url=base_url, token=api_key, timeout=timeout, transport=transport)

    def build_request(self, text: str) -> ChatCompletionRequest:
        query_type = categorize(text)
        return ChatCompletionRequest(
            model=self._model,
            messages=[
                CompletionMessage(role="system", content=system_prompt(query_type)),
                CompletionMessage(role="user", content=text),
            ],
        )

    async def send_message(self, text: str) -> str:
        """Send one user message and return the assistant's reply text."""
        if not self._api_key:
            raise CompletionError("No API key configured. Run `chartbot auth login`.", code="missing_api_key")

        request = self.build_request(text)
        logger.debug("POST %s model=%s (%d chars)", COMPLETIONS_PATH, self._model, len(text))
        raw = await self._http.post(COMPLETIONS_PATH, request.model_dump())

        try:
            response = ChatCompletionResponse.model_validate(raw)
        except ValidationError:
            raise CompletionError("Failed to parse response", code="parse_error")
        if not response.choices:
            raise CompletionError("Failed to parse response", code="parse_error")

        if response.usage:
            logger.debug("Completion used %d tokens", response.usage.total_tokens)
        return response.choices[0].message.content

    async def close(self) -> None:
        await self._http.close()
