"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings, and
resolving where the input document is read from.
"""

import json
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

# Unsubstituted build property passed when no document location is set.
LOCATOR_PLACEHOLDER = "${jfrDocUrl}"

# Older builds pass the property under its misspelt name.
LOCATOR_PLACEHOLDERS = (LOCATOR_PLACEHOLDER, "${jrfDocUrl}")

DEFAULT_REGISTRY_NAME = "JfrEventTypes"

# Relative to the working directory of the build.
DEFAULT_DOCUMENT_PATH = Path("jfr_codegen") / "resources" / "jdk21-events.json"

_PACKAGE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")

# JSON value type accepted for each known setting
_FIELD_TYPES = {
    "package_name": str,
    "registry_name": str,
    "event_template": str,
    "registry_template": str,
    "type_template": str,
    "template_dir": str,
    "output_dir": str,
    "file_extension": str,
    "encoding": str,
    "timeout": int,
    "custom": dict,
}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for the events generator."""

    # Target package
    package_name: str = "org.moditect.jfrunit.events"
    registry_name: str = DEFAULT_REGISTRY_NAME

    # Templates
    event_template: str = "event.java.j2"
    registry_template: str = "event-types.java.j2"
    type_template: str = "type.java.j2"
    template_dir: Optional[str] = None

    # Output settings
    output_dir: str = "src/main/java"
    file_extension: str = ".java"
    encoding: str = "utf-8"

    # Input settings
    timeout: int = 30

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)
        base_config["custom"] = dict(base_config["custom"])

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        # null means "use the default", same as an omitted key
        return {key: value for key, value in config.items() if value is not None}

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                self._check_type(key, value)
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        config = GeneratorConfig(**config_args)
        self._check_names(config)
        return config

    def _check_type(self, key: str, value: Any) -> None:
        """Reject a known setting whose value has the wrong type."""
        if key == "template_dir" and value is None:
            return
        expected = _FIELD_TYPES[key]
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigError(
                f"Setting '{key}' must be of type {expected.__name__}, "
                f"got {type(value).__name__}: {value!r}"
            )

    def _check_names(self, config: GeneratorConfig) -> None:
        """Package and registry names are emitted into Java sources verbatim."""
        if not _PACKAGE_PATTERN.match(config.package_name):
            raise ConfigError(f"Invalid package name: {config.package_name!r}")
        if not config.registry_name.isidentifier():
            raise ConfigError(f"Invalid registry name: {config.registry_name!r}")

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.file_extension and not config.file_extension.startswith("."):
            warnings.append(f"File extension should start with '.': {config.file_extension}")

        if not isinstance(config.timeout, int) or config.timeout <= 0:
            warnings.append(f"Timeout must be positive: {config.timeout}")

        return warnings


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    ``null`` values in the file are treated like missing keys.

    Args:
        custom_config: Custom configuration overrides (``None`` values are ignored)
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)


def resolve_locator(locator: Optional[str]) -> str:
    """
    Resolve where the input document is read from.

    An empty locator or an unsubstituted placeholder falls back to the
    bundled sample document under the current working directory.

    Args:
        locator: Path or URL supplied by the caller

    Returns:
        Locator to load the document from
    """
    if not locator or locator in LOCATOR_PLACEHOLDERS:
        resolved = str(Path.cwd() / DEFAULT_DOCUMENT_PATH)
        logger.info("Using docs from %s", resolved)
        return resolved
    return locator
