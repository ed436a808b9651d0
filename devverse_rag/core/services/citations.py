"""Citation enforcement for generated answers."""

import re
from typing import Sequence

from ..models.document import ChatSource

_CITATION = re.compile(r"\[\d+\]")
_SOURCES_HEADING = re.compile(r"Sources:", re.IGNORECASE)


def has_citations(answer: str) -> bool:
    return bool(_CITATION.search(answer))


def has_sources_section(answer: str) -> bool:
    return bool(_SOURCES_HEADING.search(answer))


def format_source_list(sources: Sequence[ChatSource]) -> str:
    return "\n".join(f"[{i}] {s.title} - {s.url}" for i, s in enumerate(sources, 1))


def finalize(answer: str, sources: Sequence[ChatSource]) -> str:
    """Guarantee a parseable source list on answers backed by sources.

    An answer that already has an inline ``[n]`` citation and a
    "Sources:" heading is returned untouched. Otherwise every retrieved
    source is appended, cited or not.

    Args:
        answer: Raw model answer.
        sources: Sources the prompt was built from.

    Returns:
        Final answer text.
    """
    if not sources:
        return answer

    if has_citations(answer) and has_sources_section(answer):
        return answer

    return f"{answer}\n\nSources:\n{format_source_list(sources)}"
