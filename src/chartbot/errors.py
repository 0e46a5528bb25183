"""
Chartbot error types.
"""

from typing import Any, Optional


class ChartbotError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class CompletionError(ChartbotError):
    """The chat-completion endpoint could not be reached or returned something unusable."""

    def __init__(self, message: str, code: str = "completion_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class StorageError(ChartbotError):
    def __init__(self, message: str, code: str = "storage_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class ConfigError(ChartbotError):
    def __init__(self, message: str):
        super().__init__("config_error", message)
