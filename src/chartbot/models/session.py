"""
Session models — persisted chat history.

Serialized with camelCase aliases (createdAt, isUser) so the stored blob keeps
the original on-device record shape.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """One turn in a conversation. Immutable once constructed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    content: str
    is_user: bool = Field(alias="isUser")


class ChatSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=_new_id)
    title: str
    created_at: datetime = Field(default_factory=_utc_now, alias="createdAt")
    messages: list[Message] = Field(default_factory=list)

    @field_validator("created_at", mode="after")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Naive timestamps would not compare against aware ones when sorting.
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)
