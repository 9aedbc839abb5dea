"""Tests for the generation driver.

Tests cover:
1. End-to-end generation into memory and into a directory
2. Locator resolution (explicit, empty, placeholder)
3. Failure handling per step (parse, plan, emit, render)
4. Run summary
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

import jfr_codegen
from jfr_codegen.codegen.core import (
    DirectoryFiler,
    EmitError,
    GenerationDriver,
    GenerationError,
    GeneratorConfig,
    MemoryFiler,
    ParseError,
    PlanningError,
    RenderError,
    create_template_engine,
    generate,
)
from jfr_codegen.codegen.core import generator as generator_module
from jfr_codegen.codegen.core.config import DEFAULT_DOCUMENT_PATH, LOCATOR_PLACEHOLDER
from jfr_codegen.codegen.core.templates import DEFAULT_TEMPLATE_DIR

from .conftest import PACKAGE

BUNDLED_DOCUMENT = Path(jfr_codegen.__file__).parent / "resources" / "jdk21-events.json"


def _write(tmp_path: Path, data, name: str = "doc.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------

class TestGenerate:
    def test_end_to_end_into_memory(self, document_file, memory_filer):
        result = generate(str(document_file), memory_filer)

        expected = [
            f"{PACKAGE}.ThreadSleep",
            f"{PACKAGE}.JfrEventTypes",
            f"{PACKAGE}.model.GCCause",
        ]
        assert result.artifacts == expected
        assert sorted(memory_filer.sources) == sorted(expected)
        assert f"{PACKAGE}.model.int" not in memory_filer.sources

        assert "public class ThreadSleep" in memory_filer.get(f"{PACKAGE}.ThreadSleep")
        assert "THREAD_SLEEP" in memory_filer.get(f"{PACKAGE}.JfrEventTypes")
        assert "public class GCCause" in memory_filer.get(f"{PACKAGE}.model.GCCause")

    def test_into_directory(self, document_file, tmp_path):
        out = tmp_path / "generated"

        generate(str(document_file), DirectoryFiler(out))

        base = out / "org" / "moditect" / "jfrunit" / "events"
        assert (base / "ThreadSleep.java").exists()
        assert (base / "JfrEventTypes.java").exists()
        assert (base / "model" / "GCCause.java").exists()
        assert not (base / "model" / "int.java").exists()

    def test_file_url_locator(self, document_file, memory_filer):
        result = generate(document_file.as_uri(), memory_filer)
        assert result.artifact_count == 3

    def test_bundled_document_renders(self, memory_filer):
        result = generate(str(BUNDLED_DOCUMENT), memory_filer)

        assert result.version == "21"
        assert result.distribution == "openjdk"
        assert result.event_count == 3
        assert f"{PACKAGE}.model.Thread" in result.artifacts
        assert "String" in result.skipped_types

    def test_idempotent_artifact_names(self, document_file):
        first, second = MemoryFiler(), MemoryFiler()

        names_first = generate(str(document_file), first).artifacts
        names_second = generate(str(document_file), second).artifacts

        assert names_first == names_second
        assert first.sources == second.sources

    def test_custom_package(self, document_file, memory_filer):
        config = GeneratorConfig(package_name="org.example.jfr", registry_name="AllEvents")

        result = GenerationDriver(config, memory_filer).run(str(document_file))

        assert result.artifacts[1] == "org.example.jfr.AllEvents"
        registry = memory_filer.get("org.example.jfr.AllEvents")
        assert "public final class AllEvents" in registry
        assert registry.startswith("package org.example.jfr;")

    def test_empty_collections(self, tmp_path, memory_filer):
        path = _write(tmp_path, {"version": "21", "events": [], "types": []})

        result = generate(str(path), memory_filer)

        assert result.artifacts == [f"{PACKAGE}.JfrEventTypes"]


class TestSummary:
    def test_result_counts(self, document_file, memory_filer):
        result = generate(str(document_file), memory_filer)

        assert result.event_count == 1
        assert result.type_count == 1
        assert result.skipped_types == ["int"]
        assert result.destination == "memory"
        assert result.artifact_count == 3


# ---------------------------------------------------------------------------
# Template engine per run
# ---------------------------------------------------------------------------

class TestEnginePerRun:
    @pytest.fixture
    def built_engines(self, monkeypatch):
        engines = []

        def _create(*args, **kwargs):
            engine = create_template_engine(*args, **kwargs)
            engines.append(engine)
            return engine

        monkeypatch.setattr(generator_module, "create_template_engine", _create)
        return engines

    def test_each_run_builds_a_new_engine(self, document_file, built_engines):
        driver = GenerationDriver(filer=MemoryFiler())

        driver.run(str(document_file))
        driver.filer = MemoryFiler()
        driver.run(str(document_file))

        assert len(built_engines) == 2
        assert built_engines[0] is not built_engines[1]

    def test_config_change_applies_to_next_run(self, document_file, built_engines):
        driver = GenerationDriver(filer=MemoryFiler())
        driver.run(str(document_file))

        driver.config = GeneratorConfig(registry_name="AllEvents")
        driver.filer = MemoryFiler()
        driver.run(str(document_file))

        registry = driver.filer.get(f"{PACKAGE}.AllEvents")
        assert "public final class AllEvents" in registry

    def test_injected_engine_is_reused(self, document_file, built_engines):
        engine = create_template_engine()
        driver = GenerationDriver(filer=MemoryFiler(), template_engine=engine)

        driver.run(str(document_file))

        assert driver.configure() is engine
        assert built_engines == []


# ---------------------------------------------------------------------------
# Locator resolution
# ---------------------------------------------------------------------------

class TestDefaultLocator:
    @pytest.fixture
    def workspace(self, tmp_path, monkeypatch):
        target = tmp_path / DEFAULT_DOCUMENT_PATH
        target.parent.mkdir(parents=True)
        shutil.copy(BUNDLED_DOCUMENT, target)
        monkeypatch.chdir(tmp_path)
        return tmp_path

    @pytest.mark.parametrize("locator", [None, "", LOCATOR_PLACEHOLDER, "${jrfDocUrl}"])
    def test_falls_back_to_bundled_document(self, workspace, locator):
        filer = MemoryFiler()

        result = GenerationDriver(filer=filer).run(locator)

        assert result.event_count == 3

    def test_missing_default_document(self, tmp_path, monkeypatch, memory_filer):
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ParseError):
            generate(None, memory_filer)


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestFailures:
    def test_missing_events_writes_nothing(self, tmp_path, memory_filer):
        path = _write(tmp_path, {"version": "21", "types": [{"name": "GCCause"}]})

        with pytest.raises(PlanningError):
            generate(str(path), memory_filer)

        assert memory_filer.sources == {}
        assert memory_filer.created == []

    def test_malformed_json(self, tmp_path, memory_filer):
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")

        with pytest.raises(ParseError) as excinfo:
            generate(str(path), memory_filer)

        assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)
        assert memory_filer.sources == {}

    def test_missing_file(self, tmp_path, memory_filer):
        with pytest.raises(ParseError, match="File not found"):
            generate(str(tmp_path / "absent.json"), memory_filer)

    def test_render_failure_aborts_run(self, tmp_path, document_file, memory_filer):
        templates = tmp_path / "templates"
        shutil.copytree(DEFAULT_TEMPLATE_DIR, templates)
        (templates / "event-types.java.j2").write_text(
            "package {{ package }};\n{% for e in events %}{{ e.nope }}{% endfor %}",
            encoding="utf-8",
        )
        config = GeneratorConfig(template_dir=str(templates))

        with pytest.raises(RenderError):
            GenerationDriver(config, memory_filer).run(str(document_file))

        # the event rendered before the failure stays, the type is never reached
        assert f"{PACKAGE}.ThreadSleep" in memory_filer.sources
        assert f"{PACKAGE}.model.GCCause" not in memory_filer.sources

    def test_failed_slot_is_closed(self, tmp_path, document_file, memory_filer):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "event.java.j2").write_text(
            "package {{ package }};\n{{ event.undefinedThing }}", encoding="utf-8"
        )
        config = GeneratorConfig(template_dir=str(templates))

        with pytest.raises(RenderError):
            GenerationDriver(config, memory_filer).run(str(document_file))

        assert list(memory_filer.sources) == [f"{PACKAGE}.ThreadSleep"]

    def test_emit_failure(self, tmp_path, document_file):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(EmitError):
            generate(str(document_file), DirectoryFiler(blocker))

    def test_duplicate_slot_from_filer(self, document_file, memory_filer):
        memory_filer.create_source_file(f"{PACKAGE}.ThreadSleep").close()

        with pytest.raises(EmitError):
            generate(str(document_file), memory_filer)

    def test_requires_filer(self, document_file):
        with pytest.raises(GenerationError, match="No filer"):
            GenerationDriver().run(str(document_file))

    def test_errors_share_base(self):
        for error in (ParseError, PlanningError, EmitError):
            assert issubclass(error, GenerationError)
        assert issubclass(RenderError, GenerationError)
