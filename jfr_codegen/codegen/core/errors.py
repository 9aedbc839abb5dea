"""
Error kinds raised by the generation pipeline.

Every step of a run raises one of these; none are recovered locally.
"""


class GenerationError(Exception):
    """Base exception for code generation errors."""

    pass


class ParseError(GenerationError):
    """The input document is unreachable or malformed."""

    pass


class PlanningError(GenerationError):
    """The parsed document is structurally invalid."""

    pass


class EmitError(GenerationError):
    """An output slot could not be created or written."""

    pass


class RenderError(GenerationError):
    """A template failed to evaluate."""

    def __init__(self, template_name: str, message: str):
        self.template_name = template_name
        super().__init__(f"Failed to render template {template_name}: {message}")
