"""
Chartbot / AsyncChartbot — main clients.

One instance per running application: it owns the chat store, the completion
client and the chat engine that ties them together.
"""

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx

from chartbot.chat import ChatEngine
from chartbot.completion import DEFAULT_MODEL, CompletionClient
from chartbot.models.content import ParsedContent
from chartbot.models.session import ChatSession, Message
from chartbot.parser import parse
from chartbot.storage import DEFAULT_DATA_DIR, FileStorage, KeyValueStore
from chartbot.store import ChatStore
from chartbot.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S


class AsyncChartbot:
    """Async chat client (primary)."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        storage: Optional[KeyValueStore] = None,
        data_dir: Union[str, Path, None] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if storage is None:
            storage = FileStorage(data_dir or DEFAULT_DATA_DIR)
        self.store = ChatStore(storage)
        self.completion = CompletionClient(
            api_key=api_key, model=model, base_url=base_url, timeout=timeout, transport=transport,
        )
        self._engine = ChatEngine(self.store, self.completion)

    @property
    def waiting(self) -> bool:
        return self._engine.waiting

    @property
    def selected_session(self) -> Optional[ChatSession]:
        return self.store.selected_session

    async def send(self, text: str, session_id: Optional[str] = None) -> Optional[Message]:
        """Send a message to a session (default: the selected one) and return the reply."""
        return await self._engine.send(text, session_id)

    def new_chat(self) -> ChatSession:
        return self.store.create_new_chat()

    def select_chat(self, session_id: str) -> bool:
        return self.store.select_chat(session_id)

    def rename_chat(self, session_id: str, title: str) -> bool:
        return self.store.update_chat_title(session_id, title)

    def delete_chat(self, session: Union[ChatSession, str]) -> bool:
        return self.store.delete_chat(session)

    def on_change(self, handler: Callable[[ChatStore], None]) -> Callable[[], None]:
        """Register a store listener. Returns a cleanup function."""
        return self.store.add_listener(handler)

    @staticmethod
    def render(message: Message) -> ParsedContent:
        """Split a message into prose and code segments for display."""
        return parse(message.content)

    async def close(self) -> None:
        await self.completion.close()


class Chartbot:
    """Sync wrapper around AsyncChartbot. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncChartbot(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def store(self) -> ChatStore:
        return self._async.store

    @property
    def completion(self) -> CompletionClient:
        return self._async.completion

    @property
    def selected_session(self) -> Optional[ChatSession]:
        return self._async.selected_session

    def send(self, text: str, session_id: Optional[str] = None) -> Optional[Message]:
        return self._run(self._async.send(text, session_id))

    def new_chat(self) -> ChatSession:
        return self._async.new_chat()

    def select_chat(self, session_id: str) -> bool:
        return self._async.select_chat(session_id)

    def rename_chat(self, session_id: str, title: str) -> bool:
        return self._async.rename_chat(session_id, title)

    def delete_chat(self, session: Union[ChatSession, str]) -> bool:
        return self._async.delete_chat(session)

    def on_change(self, handler: Callable[[ChatStore], None]) -> Callable[[], None]:
        return self._async.on_change(handler)

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    render = staticmethod(AsyncChartbot.render)
