"""Generative model descriptors."""
from dataclasses import dataclass


@dataclass(frozen=True)
class ModelDescriptor:
    """Structured view of one entry from the model listing endpoint."""
    name: str
    supports_generation: bool
    is_embedding_model: bool
    cost_tier: str
    family: str
