"""
chartbot — local chat history + LLM chat-completion client.

Persists conversations to a key-value store, forwards user text to a
chat-completion endpoint, and splits replies into prose and code segments.
"""

from chartbot.client import Chartbot, AsyncChartbot
from chartbot.store import ChatStore
from chartbot.storage import FileStorage, MemoryStorage
from chartbot.completion import CompletionClient
from chartbot.errors import ChartbotError, CompletionError, StorageError, ConfigError
from chartbot.models.session import ChatSession, Message
from chartbot.models.content import CodeSegment, ParsedContent
from chartbot.parser import parse

__version__ = "0.1.0"
__all__ = [
    "Chartbot",
    "AsyncChartbot",
    "ChatStore",
    "FileStorage",
    "MemoryStorage",
    "CompletionClient",
    "ChartbotError",
    "CompletionError",
    "StorageError",
    "ConfigError",
    "ChatSession",
    "Message",
    "CodeSegment",
    "ParsedContent",
    "parse",
]
