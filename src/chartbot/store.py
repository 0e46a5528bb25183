"""
Chat session store: the single source of truth for chat history.

Holds the list of sessions and which one is selected, and writes the whole list
back to a KeyValueStore after every mutation. Lost writes are logged; the
in-memory list stays authoritative for the rest of the process.

Sessions handed out by the store are deep copies. Change them through the
store's mutators, never in place.
"""

import logging
import threading
from typing import Callable, Iterator, Optional, Union

from pydantic import TypeAdapter, ValidationError

from chartbot.errors import StorageError
from chartbot.models.session import ChatSession, Message
from chartbot.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_KEY = "saved_chats"
DEFAULT_TITLE = "New Chat"

_sessions_adapter = TypeAdapter(list[ChatSession])

StoreListener = Callable[["ChatStore"], None]


class ChatStore:
    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_KEY):
        self._storage = storage
        self._key = key
        self._lock = threading.RLock()
        self._sessions: list[ChatSession] = []
        self._selected_id: Optional[str] = None
        self._listeners: list[StoreListener] = []
        self.load()
        self.ensure_active_chat()

    # -- queries ---------------------------------------------------------

    @property
    def sessions(self) -> list[ChatSession]:
        """Snapshots of the sessions in display order (newest first on load)."""
        with self._lock:
            return [s.model_copy(deep=True) for s in self._sessions]

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected_session(self) -> Optional[ChatSession]:
        with self._lock:
            if self._selected_id is None:
                return None
            return self.get(self._selected_id)

    def get(self, session_id: str) -> Optional[ChatSession]:
        with self._lock:
            session = self._find(session_id)
            return session.model_copy(deep=True) if session is not None else None

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[ChatSession]:
        return iter(self.sessions)

    # -- change notification ---------------------------------------------

    def add_listener(self, handler: StoreListener) -> Callable[[], None]:
        """Call handler(store) after every mutation. Returns a cleanup function."""
        self._listeners.append(handler)

        def remove() -> None:
            try:
                self._listeners.remove(handler)
            except ValueError:
                pass
        return remove

    # -- lifecycle -------------------------------------------------------

    def load(self) -> None:
        """Replace in-memory sessions with the persisted list.

        A missing or undecodable blob falls back to one fresh default session.
        """
        with self._lock:
            try:
                data = self._storage.get(self._key)
            except (OSError, StorageError) as e:
                logger.warning("Could not read saved chats: %s", e)
                data = None

            decoded: Optional[list[ChatSession]] = None
            if data is not None:
                try:
                    decoded = _sessions_adapter.validate_json(data)
                except ValidationError as e:
                    logger.warning("Discarding unreadable saved chats (%d errors)", e.error_count())

            if decoded is None:
                self._insert_new_chat()
                self._save()
            else:
                self._sessions = sorted(decoded, key=lambda s: s.created_at, reverse=True)
                self._selected_id = self._sessions[0].id if self._sessions else None
                logger.debug("Loaded %d chats", len(self._sessions))
        self._notify()

    def ensure_active_chat(self) -> None:
        """Restore the invariants: at least one session, and a selection."""
        with self._lock:
            created = not self._sessions
            changed = self._restore_active()
            if created:
                self._save()
        if changed:
            self._notify()

    # -- mutations -------------------------------------------------------

    def create_new_chat(self) -> ChatSession:
        with self._lock:
            session = self._insert_new_chat()
            self._save()
            snapshot = session.model_copy(deep=True)
        self._notify()
        return snapshot

    def select_chat(self, session_id: str) -> bool:
        with self._lock:
            if self._find(session_id) is None:
                logger.debug("select_chat: unknown session %s", session_id)
                return False
            self._selected_id = session_id
        self._notify()
        return True

    def delete_chat(self, session: Union[ChatSession, str]) -> bool:
        session_id = session.id if isinstance(session, ChatSession) else session
        with self._lock:
            remaining = [s for s in self._sessions if s.id != session_id]
            if len(remaining) == len(self._sessions):
                logger.debug("delete_chat: unknown session %s", session_id)
                return False
            self._sessions = remaining

            if self._selected_id == session_id:
                self._selected_id = self._sessions[0].id if self._sessions else None

            self._restore_active()
            self._save()
        self._notify()
        return True

    def update_chat_title(self, session_id: str, new_title: str) -> bool:
        with self._lock:
            session = self._find(session_id)
            if session is None:
                logger.debug("update_chat_title: unknown session %s", session_id)
                return False
            trimmed = new_title.strip()
            session.title = trimmed or DEFAULT_TITLE
            self._save()
        self._notify()
        return True

    def add_message(self, message: Message, session_id: str) -> bool:
        with self._lock:
            session = self._find(session_id)
            if session is None:
                logger.debug("add_message: unknown session %s", session_id)
                return False
            session.messages.append(message)
            self._save()
        self._notify()
        return True

    # -- persistence -----------------------------------------------------

    def dump(self) -> bytes:
        """Serialize every session to the persisted JSON form."""
        with self._lock:
            return _sessions_adapter.dump_json(self._sessions, by_alias=True)

    def _save(self) -> None:
        try:
            self._storage.set(self._key, self.dump())
        except (ValueError, OSError, StorageError):
            logger.exception("Failed to persist %d chats; keeping in-memory state", len(self._sessions))

    # -- internals (caller holds the lock) --------------------------------

    def _insert_new_chat(self) -> ChatSession:
        # Numbering follows the current count, so numbers can repeat after deletes.
        session = ChatSession(title=f"{DEFAULT_TITLE} {len(self._sessions) + 1}")
        self._sessions.insert(0, session)
        self._selected_id = session.id
        return session

    def _restore_active(self) -> bool:
        if not self._sessions:
            self._insert_new_chat()
            return True
        if self._selected_id is None:
            self._selected_id = self._sessions[0].id
            return True
        return False

    def _find(self, session_id: str) -> Optional[ChatSession]:
        for session in self._sessions:
            if session.id == session_id:
                return session
        return None

    def _notify(self) -> None:
        for handler in list(self._listeners):
            handler(self)
