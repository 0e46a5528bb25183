"""Basic unit tests for the chartbot package."""

from chartbot import (
    AsyncChartbot,
    Chartbot,
    ChartbotError,
    CompletionError,
    StorageError,
    ConfigError,
    Message,
    ChatSession,
    __version__,
)
from chartbot.prompts import QueryType


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert Chartbot is not None
    assert AsyncChartbot is not None


def test_error_hierarchy():
    assert issubclass(CompletionError, ChartbotError)
    assert issubclass(StorageError, ChartbotError)
    assert issubclass(ConfigError, ChartbotError)


def test_error_attributes():
    err = ChartbotError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    err_with_details = CompletionError("bad gateway", code="http_error", details={"status_code": 502})
    assert err_with_details.code == "http_error"
    assert err_with_details.details == {"status_code": 502}

    assert CompletionError("x").code == "completion_error"
    assert ConfigError("no key").code == "config_error"


def test_query_type_constants():
    assert QueryType.CODE == "code"
    assert QueryType.INFORMATIVE == "informative"


def test_message_serializes_with_aliases():
    msg = Message(id="m1", content="hi", is_user=True)
    assert msg.model_dump(by_alias=True) == {"id": "m1", "content": "hi", "isUser": True}
    assert Message.model_validate({"id": "m1", "content": "hi", "isUser": True}) == msg


def test_session_defaults():
    a = ChatSession(title="New Chat 1")
    b = ChatSession(title="New Chat 2")
    assert a.id != b.id
    assert a.messages == []
    assert a.created_at.tzinfo is not None
    assert "createdAt" in a.model_dump(by_alias=True)
