"""
Document model for code generation.

Holds the parsed event/type description. Events and types only expose
their ``name``; everything else is kept as an opaque metadata bag that
is handed to the templates verbatim.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .errors import ParseError

# Field type names that never get a model artifact.
PRIMITIVE_TYPES: FrozenSet[str] = frozenset(
    {
        "boolean",
        "byte",
        "char",
        "double",
        "float",
        "int",
        "long",
        "short",
        "string",
        "String",
    }
)


def is_primitive(type_name: str) -> bool:
    """Check whether a field type name is a primitive."""
    return type_name in PRIMITIVE_TYPES


@dataclass(frozen=True)
class Entity:
    """A named entry of the document with its metadata bag."""

    name: str
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        if key == "name":
            return self.name
        return self.metadata[key]

    def __contains__(self, key: object) -> bool:
        return key == "name" or key in self.metadata

    def get(self, key: str, default: Any = None) -> Any:
        """Get a metadata value, falling back to ``default``."""
        if key == "name":
            return self.name
        return self.metadata.get(key, default)

    @property
    def field_list(self) -> List[Mapping[str, Any]]:
        """Fields declared in the metadata (empty if the key is absent)."""
        return list(self.metadata.get("fields", []))

    @classmethod
    def from_dict(cls, data: Any, kind: str = "entity"):
        """
        Build an entity from a decoded JSON object.

        Args:
            data: Decoded JSON object, must carry a string ``name``
            kind: Label used in error messages

        Returns:
            Entity instance

        Raises:
            ParseError: If the object has no usable name
        """
        if not isinstance(data, Mapping):
            raise ParseError(f"Expected an object for {kind}, got {type(data).__name__}")

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise ParseError(f"{kind.capitalize()} without a string 'name': {data!r}")

        metadata = {key: value for key, value in data.items() if key != "name"}
        return cls(name=name, metadata=metadata)


@dataclass(frozen=True)
class Event(Entity):
    """One observable event record definition."""

    pass


@dataclass(frozen=True)
class Type(Entity):
    """One reusable field type definition."""

    @property
    def primitive(self) -> bool:
        return is_primitive(self.name)


@dataclass(frozen=True)
class Document:
    """Top-level parsed input document."""

    version: str = ""
    distribution: str = ""
    events: Optional[List[Event]] = None
    types: Optional[List[Type]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Document":
        """
        Build a document from decoded JSON, ignoring unknown keys.

        Missing ``events``/``types`` stay ``None`` so the planner can
        reject them; any other structural problem is a parse error.

        Args:
            data: Decoded JSON document

        Returns:
            Parsed Document

        Raises:
            ParseError: If the document shape is invalid
        """
        if not isinstance(data, Mapping):
            raise ParseError(
                f"Document must be a JSON object, got {type(data).__name__}"
            )

        return cls(
            version=_as_text(data.get("version")),
            distribution=_as_text(data.get("distribution")),
            events=_entity_list(data, "events", Event),
            types=_entity_list(data, "types", Type),
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _entity_list(data: Mapping[str, Any], key: str, entity_cls) -> Optional[list]:
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ParseError(f"'{key}' must be a list, got {type(raw).__name__}")
    kind = key[:-1]
    return [entity_cls.from_dict(item, kind) for item in raw]


class ArtifactKind(Enum):
    """Kinds of generated artifacts."""

    EVENT = "event"
    REGISTRY = "registry"
    TYPE = "type"


@dataclass(frozen=True)
class ArtifactPlan:
    """One artifact to render: where it goes and how to render it."""

    kind: ArtifactKind
    qualified_name: str
    template_name: str
    bindings: Dict[str, Any]
