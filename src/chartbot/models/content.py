"""
Parsed message content, derived from Message.content and never stored.
"""

from pydantic import BaseModel, ConfigDict


class CodeSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str
    code: str
    explanation: str = ""


class ParsedContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    segments: list[CodeSegment] = []

    @property
    def contains_code(self) -> bool:
        return bool(self.segments)
