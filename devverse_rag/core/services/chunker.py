"""Paragraph-respecting document chunker."""

import re

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def split_long_text(text: str, max_length: int) -> list[str]:
    """Pack whole words into pieces of at most ``max_length`` characters.

    A single word longer than ``max_length`` becomes its own piece.
    """
    chunks = []
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > max_length:
            if current:
                chunks.append(current)
            current = word
        else:
            current = candidate

    if current:
        chunks.append(current)

    return chunks


class DocumentChunker:
    """Split article bodies into disjoint, order-preserving chunks."""

    def __init__(self, max_length: int = 1200):
        """Initialize chunker.

        Args:
            max_length: Maximum chunk length in characters.
        """
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self._max_length = max_length

    @property
    def max_length(self) -> int:
        return self._max_length

    def chunk(self, body: str) -> list[str]:
        """Split text into chunks on blank-line paragraph boundaries.

        Paragraphs are packed greedily into a buffer; a paragraph that does
        not fit flushes the buffer. Paragraphs longer than the limit on their
        own are split by words and emitted directly.

        Args:
            body: Document body.

        Returns:
            List of chunks.
        """
        chunks: list[str] = []
        current = ""

        for para in _PARAGRAPH_BREAK.split(body or ""):
            para = para.strip()
            if not para:
                continue

            candidate = f"{current}\n\n{para}" if current else para
            if len(candidate) <= self._max_length:
                current = candidate
                continue

            if current:
                chunks.append(current)
                current = ""

            if len(para) > self._max_length:
                chunks.extend(split_long_text(para, self._max_length))
            else:
                current = para

        if current:
            chunks.append(current)

        return chunks
