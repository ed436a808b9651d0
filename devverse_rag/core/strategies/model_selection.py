"""Chat model eligibility."""
from typing import Iterable

from ..models.model import ModelDescriptor


def is_chat_model(
    descriptor: ModelDescriptor,
    family: str = "gemini",
    excluded_cost_tiers: Iterable[str] = ("pro",),
) -> bool:
    """Whether a listed model may serve chat generation.

    Args:
        descriptor: Model descriptor.
        family: Required model family.
        excluded_cost_tiers: Cost tiers never used for chat.

    Returns:
        True if the model is eligible.
    """
    return (
        descriptor.supports_generation
        and not descriptor.is_embedding_model
        and descriptor.family == family
        and descriptor.cost_tier not in set(excluded_cost_tiers)
    )


def select_chat_models(
    descriptors: Iterable[ModelDescriptor],
    family: str = "gemini",
    excluded_cost_tiers: Iterable[str] = ("pro",),
) -> list[str]:
    """Eligible model names, in listing order."""
    excluded = tuple(excluded_cost_tiers)
    return [
        d.name
        for d in descriptors
        if d.name and is_chat_model(d, family, excluded)
    ]
