"""Shared fixtures for the jfr_codegen test suite."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jfr_codegen.codegen.core import (
    Document,
    Event,
    GeneratorConfig,
    MemoryFiler,
    Type,
)

PACKAGE = "org.moditect.jfrunit.events"


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

@pytest.fixture
def document_data() -> dict:
    """Return a small decoded events document."""
    return {
        "version": "21",
        "distribution": "openjdk",
        "generatedBy": "jfr metadata",
        "events": [
            {
                "name": "ThreadSleep",
                "label": "Java Thread Sleep",
                "category": ["Java Application"],
                "fields": [
                    {
                        "name": "startTime",
                        "type": "long",
                        "label": "Start Time",
                        "contentType": "timestamp",
                    },
                    {
                        "name": "time",
                        "type": "long",
                        "label": "Sleep Time",
                        "contentType": "millis",
                    },
                ],
            },
        ],
        "types": [
            {"name": "int"},
            {
                "name": "GCCause",
                "label": "GC Cause",
                "fields": [{"name": "cause", "type": "String", "label": "Cause"}],
            },
        ],
    }


@pytest.fixture
def document(document_data) -> Document:
    """Return the parsed form of ``document_data``."""
    return Document.from_dict(document_data)


@pytest.fixture
def document_file(tmp_path: Path, document_data) -> Path:
    """Write ``document_data`` to a JSON file and return its path."""
    path = tmp_path / "events.json"
    path.write_text(json.dumps(document_data), encoding="utf-8")
    return path


def make_document(event_names=(), type_names=()) -> Document:
    """Build a document from bare event and type names."""
    return Document(
        version="21",
        distribution="openjdk",
        events=[Event(name) for name in event_names],
        types=[Type(name) for name in type_names],
    )


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

@pytest.fixture
def config() -> GeneratorConfig:
    return GeneratorConfig()


@pytest.fixture
def memory_filer() -> MemoryFiler:
    return MemoryFiler()
