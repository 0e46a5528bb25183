"""
Chat-completion wire models — POST /v1/chat/completions.

Only the fields the client reads are modelled; anything else in the provider's
response is ignored.
"""

from typing import Optional
from pydantic import BaseModel


class CompletionMessage(BaseModel):
    role: str  # "system" | "user" | "assistant"
    content: str


class ChatCompletionRequest(BaseModel):
    model: str
    messages: list[CompletionMessage]


class CompletionChoice(BaseModel):
    index: int = 0
    message: CompletionMessage
    finish_reason: Optional[str] = None


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatCompletionResponse(BaseModel):
    id: Optional[str] = None
    model: Optional[str] = None
    choices: list[CompletionChoice] = []
    usage: Optional[Usage] = None
