# tcmchart/narrative/__init__.py
from .gateway import (
    GenerationInProgressError,
    NarrativeGateway,
    NarrativeGenerationError,
    NarrativeKind,
    PLACEHOLDERS,
)

__all__ = [
    "GenerationInProgressError",
    "NarrativeGateway",
    "NarrativeGenerationError",
    "NarrativeKind",
    "PLACEHOLDERS",
]
