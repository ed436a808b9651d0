"""Chat domain models."""
from dataclasses import dataclass, field
from typing import Any, Literal

from .document import ChatSource

ChatRole = Literal["user", "assistant"]


@dataclass
class ChatMessage:
    """Chat message supplied by the caller."""
    role: ChatRole
    content: str


@dataclass
class ChatResponse:
    """Answer with the sources it was grounded on."""
    answer: str
    sources: list[ChatSource] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "answer": self.answer,
            "sources": [s.to_dict() for s in self.sources],
        }
