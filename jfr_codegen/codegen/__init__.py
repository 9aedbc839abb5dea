"""
JFR events code generation module.

Generates event classes, the event type registry and model classes
from a JFR metadata document.
"""

from .core import (
    ArtifactPlanner,
    DirectoryFiler,
    Document,
    GenerationDriver,
    GenerationError,
    GenerationResult,
    GeneratorConfig,
    MemoryFiler,
    generate,
    load_config,
    to_screaming_snake_case,
)

__all__ = [
    "ArtifactPlanner",
    "DirectoryFiler",
    "Document",
    "GenerationDriver",
    "GenerationError",
    "GenerationResult",
    "GeneratorConfig",
    "MemoryFiler",
    "generate",
    "load_config",
    "to_screaming_snake_case",
]
