"""Grounded prompt assembly."""

import re
from typing import Sequence

from ..models.chat import ChatMessage
from ..models.document import ChatSource

HISTORY_LIMIT = 6

SYSTEM_INSTRUCTIONS = """You are a DevVerse assistant for a technical blog.
Answer using only the sources provided.
Cite sources with brackets like [1] immediately after each claim they support.
If the sources do not contain the answer, say you do not have enough information.
Finish with a Sources section listing each citation as [n] Title - URL."""

_SOURCES_SECTION = re.compile(
    r"^[ \t>#*_]*Sources[*_]*:[*_]*.*\Z", re.IGNORECASE | re.MULTILINE | re.DOTALL
)


def strip_sources_section(text: str) -> str:
    """Remove a trailing "Sources:" section from an earlier answer."""
    return _SOURCES_SECTION.sub("", text).strip()


def format_history(history: Sequence[ChatMessage], limit: int = HISTORY_LIMIT) -> str:
    """Format the most recent messages as a role-labeled transcript."""
    if not history:
        return ""

    lines = []
    for message in list(history)[-limit:]:
        if message.role == "user":
            lines.append(f"User: {message.content.strip()}")
        else:
            lines.append(f"Assistant: {strip_sources_section(message.content)}")

    return "Conversation:\n" + "\n".join(lines)


def format_sources(sources: Sequence[ChatSource]) -> str:
    """Format sources as a numbered listing."""
    return "\n\n".join(
        f"[{i}] {s.title}\nURL: {s.url}\nSnippet: {s.snippet or 'No snippet available.'}"
        for i, s in enumerate(sources, 1)
    )


def build_prompt(
    question: str,
    history: Sequence[ChatMessage],
    sources: Sequence[ChatSource],
) -> str:
    """Build the grounded prompt.

    Order: instructions, conversation, question, numbered sources. Callers
    never pass an empty source list; the chat service answers those itself.

    Args:
        question: User question.
        history: Earlier turns, oldest first.
        sources: Retrieved sources, most relevant first.

    Returns:
        Prompt text.
    """
    parts = [
        SYSTEM_INSTRUCTIONS,
        format_history(history),
        f"Question: {question}",
        "Sources:\n" + format_sources(sources),
    ]
    return "\n\n".join(p for p in parts if p)
