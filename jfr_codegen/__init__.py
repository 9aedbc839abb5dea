"""
JFR events source generator.

Renders Java event classes, an event type registry and model classes
from a JFR metadata document.
"""

from .codegen import (
    DirectoryFiler,
    GenerationDriver,
    GenerationError,
    GenerationResult,
    GeneratorConfig,
    MemoryFiler,
    generate,
    load_config,
    to_screaming_snake_case,
)
from .utils import load_document

__version__ = "0.1.0"

__all__ = [
    "DirectoryFiler",
    "GenerationDriver",
    "GenerationError",
    "GenerationResult",
    "GeneratorConfig",
    "MemoryFiler",
    "generate",
    "load_config",
    "load_document",
    "to_screaming_snake_case",
]
