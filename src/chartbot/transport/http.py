"""
REST HTTP client for the chat-completion provider.
"""

from typing import Any, Optional

import httpx

from chartbot.errors import CompletionError

DEFAULT_BASE_URL = "https://api.mistral.ai"
DEFAULT_TIMEOUT_S = 60.0


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "chartbot/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def post(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        try:
            resp = await self._client.post(path, json=body, headers=self._auth_headers())
        except httpx.HTTPError as e:
            raise CompletionError(f"Request to {path} failed: {e}", code="transport_error")
        if resp.status_code >= 400:
            raise CompletionError(
                f"HTTP {resp.status_code}: {resp.text[:200]}",
                code="http_error",
                details={"status_code": resp.status_code},
            )
        try:
            return resp.json()
        except ValueError:
            raise CompletionError("Failed to parse response", code="parse_error")

    async def close(self) -> None:
        await self._client.aclose()
