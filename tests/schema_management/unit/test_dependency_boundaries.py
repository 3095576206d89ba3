"""Boundary tests for schema_management internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_schema_core_does_not_import_host_modules() -> None:
    core_dir = _project_root() / "src" / "schema_editor" / "schema_management"
    forbidden_import_fragments = (
        "schema_editor.schema_repository",
        "schema_editor.configuration",
        "schema_editor.cli",
        "import json",
        "import yaml",
    )

    for module_path in sorted(core_dir.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"
