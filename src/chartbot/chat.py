"""
Chat engine. Runs one conversation turn against the store and the completion client.

Flow for send():
- the trimmed user text is appended to the target session
- the completion client is awaited (the only suspension point)
- the reply, or an inline error message, is appended as the assistant turn
"""

import logging
from typing import Optional, Protocol

from chartbot.models.session import Message
from chartbot.store import ChatStore

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Sorry, I encountered an error: "


class Completer(Protocol):
    async def send_message(self, text: str) -> str: ...


class ChatEngine:
    def __init__(self, store: ChatStore, completer: Completer):
        self._store = store
        self._completer = completer
        self._pending = 0

    @property
    def waiting(self) -> bool:
        """True while a completion request is outstanding."""
        return self._pending > 0

    async def send(self, text: str, session_id: Optional[str] = None) -> Optional[Message]:
        """Send user text and return the assistant message that was appended.

        Returns None without touching the store when the text is blank or there
        is no session to send to.
        """
        content = text.strip()
        sid = session_id or self._store.selected_id
        if not content or not sid or self._store.get(sid) is None:
            return None

        self._store.add_message(Message(content=content, is_user=True), sid)

        self._pending += 1
        try:
            reply = await self._completer.send_message(content)
        except Exception as e:
            logger.warning("Completion failed for session %s: %s", sid, e, exc_info=True)
            reply = f"{ERROR_PREFIX}{e}"
        finally:
            self._pending -= 1

        assistant = Message(content=reply, is_user=False)
        self._store.add_message(assistant, sid)
        return assistant
