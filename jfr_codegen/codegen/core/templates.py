"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with the filters the bundled Java templates rely on.
"""

from functools import partial
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from ...logging_config import get_logger
from .config import DEFAULT_REGISTRY_NAME
from .errors import GenerationError, RenderError
from .naming import NamingCase, convert_case, sanitize_identifier

logger = get_logger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

_BOXED_TYPES = {
    "boolean": "Boolean",
    "byte": "Byte",
    "char": "Character",
    "double": "Double",
    "float": "Float",
    "int": "Integer",
    "long": "Long",
    "short": "Short",
    "string": "String",
    "String": "String",
}

_DURATION_CONTENT_TYPES = {"timespan", "millis", "nanos"}
_INSTANT_CONTENT_TYPES = {"timestamp", "epochmillis"}

_CASE_FILTERS = {
    "screaming_snake": NamingCase.SCREAMING_SNAKE,
    "snake_case": NamingCase.SNAKE_CASE,
    "camel_case": NamingCase.CAMEL_CASE,
    "pascal_case": NamingCase.PASCAL_CASE,
}


class TextSink(Protocol):
    def write(self, text: str) -> None: ...


class TemplateEngine:
    """Wrapper for a Jinja2 environment configured for source generation."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        encoding: str = "utf-8",
        globals: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files (bundled templates by default)
            encoding: Encoding of the template files
            globals: Values visible to every template (e.g. ``registry_name``)
        """
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.encoding = encoding
        self._env = self._setup_environment()
        self._env.globals["registry_name"] = DEFAULT_REGISTRY_NAME
        self._env.globals.update(globals or {})

    def _setup_environment(self) -> Environment:
        """Setup Jinja2 environment; undefined values and loop targets raise."""
        env = Environment(
            loader=FileSystemLoader(str(self.template_dir), encoding=self.encoding),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        for filter_name, case in _CASE_FILTERS.items():
            env.filters[filter_name] = partial(convert_case, target_case=case)
        env.filters["java_type"] = java_type
        env.filters["java_identifier"] = sanitize_identifier

        logger.debug("Template engine configured for %s", self.template_dir)
        return env

    def render(self, template_name: str, context: Dict[str, Any], sink: TextSink) -> None:
        """
        Render a template into a sink, chunk by chunk.

        Args:
            template_name: Name of template file
            context: Variables to pass to template
            sink: Object with a ``write(text)`` method

        Raises:
            RenderError: If the template cannot be loaded or evaluated
        """
        try:
            template = self._env.get_template(template_name)
            for chunk in template.generate(**context):
                sink.write(chunk)
        except GenerationError:
            raise
        except Exception as e:
            raise RenderError(template_name, str(e)) from e

    def render_to_string(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        chunks = []

        class _Collector:
            def write(self, text: str) -> None:
                chunks.append(text)

        self.render(template_name, context, _Collector())
        return "".join(chunks)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False


def java_type(field: Any, package: str = "") -> str:
    """
    Map a JFR field to the Java type used for its attribute.

    Args:
        field: Field mapping (``type``, optional ``contentType``/``array``)
            or a bare type name
        package: Events package, used to qualify model types

    Returns:
        Java type name
    """
    if isinstance(field, str):
        type_name, content_type, array = field, None, False
    else:
        type_name = field["type"]
        content_type = field.get("contentType")
        array = bool(field.get("array", False))

    if content_type in _DURATION_CONTENT_TYPES and type_name == "long":
        result = "java.time.Duration"
    elif content_type in _INSTANT_CONTENT_TYPES and type_name == "long":
        result = "java.time.Instant"
    elif type_name in _BOXED_TYPES:
        result = _BOXED_TYPES[type_name]
    elif package:
        result = f"{package}.model.{type_name}"
    else:
        result = type_name

    if array:
        return f"java.util.List<{result}>"
    return result


def create_template_engine(
    template_dir: Optional[Path] = None,
    encoding: str = "utf-8",
    registry_name: str = DEFAULT_REGISTRY_NAME,
) -> TemplateEngine:
    """Create a template engine for one generation run."""
    return TemplateEngine(template_dir, encoding, globals={"registry_name": registry_name})
