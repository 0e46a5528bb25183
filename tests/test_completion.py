"""Chat completion client against a mocked HTTP transport."""

import json

import httpx
import pytest

from chartbot.completion import COMPLETIONS_PATH, CompletionClient
from chartbot.errors import CompletionError
from chartbot.prompts import CODE_PROMPT, INFORMATIVE_PROMPT


def completion_body(content: str) -> dict:
    return {
        "id": "cmpl-1",
        "model": "mistral-large-latest",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def make_client(handler, api_key: str = "test-key") -> CompletionClient:
    return CompletionClient(api_key=api_key, base_url="https://llm.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_message_returns_first_choice():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=completion_body("Paris."))

    client = make_client(handler)
    assert await client.send_message("Who painted the Mona Lisa?") == "Paris."
    await client.close()

    request = seen[0]
    assert request.method == "POST"
    assert request.url == f"https://llm.test{COMPLETIONS_PATH}"
    assert request.headers["Authorization"] == "Bearer test-key"
    body = json.loads(request.content)
    assert body["model"] == "mistral-large-latest"
    assert body["messages"] == [
        {"role": "system", "content": INFORMATIVE_PROMPT},
        {"role": "user", "content": "Who painted the Mona Lisa?"},
    ]


@pytest.mark.asyncio
async def test_code_query_uses_code_prompt():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=completion_body("ok"))

    client = make_client(handler)
    await client.send_message("write a function to add numbers")
    await client.close()
    assert bodies[0]["messages"][0]["content"] == CODE_PROMPT


@pytest.mark.asyncio
async def test_missing_api_key_fails_without_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = make_client(handler, api_key="")
    with pytest.raises(CompletionError) as exc:
        await client.send_message("hi")
    assert exc.value.code == "missing_api_key"
    await client.close()


@pytest.mark.asyncio
async def test_http_error_status():
    client = make_client(lambda request: httpx.Response(401, json={"message": "Unauthorized"}))
    with pytest.raises(CompletionError) as exc:
        await client.send_message("hi")
    assert exc.value.code == "http_error"
    assert exc.value.details == {"status_code": 401}
    assert "HTTP 401" in str(exc.value)
    await client.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, json={"choices": []}),
    httpx.Response(200, json={"unexpected": True}),
    httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": None}}]}),
    httpx.Response(200, text="<html>gateway</html>"),
])
async def test_malformed_response(response):
    client = make_client(lambda request: response)
    with pytest.raises(CompletionError) as exc:
        await client.send_message("hi")
    assert exc.value.code == "parse_error"
    assert str(exc.value) == "Failed to parse response"
    await client.close()


@pytest.mark.asyncio
async def test_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(CompletionError) as exc:
        await client.send_message("hi")
    assert exc.value.code == "transport_error"
    await client.close()
