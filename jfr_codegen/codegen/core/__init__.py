"""
Core code generation components.

Document model, artifact planning, template rendering, output slots
and the driver that ties them together.
"""

from .errors import EmitError, GenerationError, ParseError, PlanningError, RenderError
from .naming import NamingCase, convert_case, to_screaming_snake_case
from .schema import (
    PRIMITIVE_TYPES,
    ArtifactKind,
    ArtifactPlan,
    Document,
    Event,
    Type,
    is_primitive,
)
from .config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
    resolve_locator,
)
from .templates import TemplateEngine, create_template_engine
from .filer import DirectoryFiler, Filer, MemoryFiler, OutputSlot
from .planner import ArtifactPlanner, plan
from .generator import GenerationDriver, GenerationResult, generate

__all__ = [
    # Errors
    "GenerationError",
    "ParseError",
    "PlanningError",
    "EmitError",
    "RenderError",
    # Naming
    "NamingCase",
    "convert_case",
    "to_screaming_snake_case",
    # Document model
    "PRIMITIVE_TYPES",
    "ArtifactKind",
    "ArtifactPlan",
    "Document",
    "Event",
    "Type",
    "is_primitive",
    # Configuration
    "ConfigError",
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
    "resolve_locator",
    # Templates and output
    "TemplateEngine",
    "create_template_engine",
    "Filer",
    "DirectoryFiler",
    "MemoryFiler",
    "OutputSlot",
    # Pipeline
    "ArtifactPlanner",
    "plan",
    "GenerationDriver",
    "GenerationResult",
    "generate",
]
