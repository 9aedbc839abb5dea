"""
Artifact planning.

Decides which sources a document produces and how each one is rendered.
"""

from typing import List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .errors import PlanningError
from .schema import ArtifactKind, ArtifactPlan, Document

logger = get_logger(__name__)


class ArtifactPlanner:
    """Turns a document into an ordered list of artifacts."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()

    @property
    def package(self) -> str:
        return self.config.package_name

    def plan(self, document: Document) -> List[ArtifactPlan]:
        """
        Plan all artifacts of a document.

        Events come first, then the registry, then the model types; each
        group keeps the document order.

        Args:
            document: Parsed document

        Returns:
            Ordered artifact plan

        Raises:
            PlanningError: If events or types are missing, or two
                artifacts would share a qualified name
        """
        if document.events is None:
            raise PlanningError("Document has no 'events' collection")
        if document.types is None:
            raise PlanningError("Document has no 'types' collection")

        entries = self.plan_events(document)
        entries.append(self.plan_registry(document))
        entries.extend(self.plan_types(document))

        self._check_unique(entries)

        logger.debug(
            "Planned %d artifacts for %d events and %d types",
            len(entries),
            len(document.events),
            len(document.types),
        )
        return entries

    def plan_events(self, document: Document) -> List[ArtifactPlan]:
        """One artifact per event, no filtering."""
        return [
            ArtifactPlan(
                kind=ArtifactKind.EVENT,
                qualified_name=f"{self.package}.{event.name}",
                template_name=self.config.event_template,
                bindings={"package": self.package, "event": event},
            )
            for event in document.events
        ]

    def plan_registry(self, document: Document) -> ArtifactPlan:
        """The aggregate registry over all events."""
        return ArtifactPlan(
            kind=ArtifactKind.REGISTRY,
            qualified_name=f"{self.package}.{self.config.registry_name}",
            template_name=self.config.registry_template,
            bindings={"package": self.package, "events": document.events},
        )

    def plan_types(self, document: Document) -> List[ArtifactPlan]:
        """One artifact per non-primitive type."""
        entries = []
        for type_ in document.types:
            if type_.primitive:
                logger.debug("Skipping primitive type %s", type_.name)
                continue
            entries.append(
                ArtifactPlan(
                    kind=ArtifactKind.TYPE,
                    qualified_name=f"{self.package}.model.{type_.name}",
                    template_name=self.config.type_template,
                    bindings={"package": self.package, "type": type_},
                )
            )
        return entries

    def _check_unique(self, entries: List[ArtifactPlan]) -> None:
        seen = set()
        for entry in entries:
            if entry.qualified_name in seen:
                raise PlanningError(
                    f"Duplicate artifact {entry.qualified_name} "
                    f"(duplicate {entry.kind.value} name in document?)"
                )
            seen.add(entry.qualified_name)


def plan(
    document: Document, config: Optional[GeneratorConfig] = None
) -> List[ArtifactPlan]:
    """Plan the artifacts of a document with the given configuration."""
    return ArtifactPlanner(config).plan(document)
