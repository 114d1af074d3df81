"""Tests for repo_init.templates (catalog lookup)."""

from __future__ import annotations

import pytest

from repo_init.templates import (
    TEMPLATE_CATALOG,
    ProjectType,
    describe_project_types,
    parse_project_type,
    resolve_template,
)


def test_catalog_keys_are_exactly_the_project_types():
    assert set(TEMPLATE_CATALOG) == set(ProjectType)


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        TEMPLATE_CATALOG[ProjectType.GO] = ("nope",)  # type: ignore[index]


@pytest.mark.parametrize("name", list(ProjectType))
def test_every_type_has_entries(name: ProjectType):
    entries = resolve_template(name)
    assert entries
    assert all(isinstance(e, str) and e for e in entries)


def test_resolve_by_string():
    assert resolve_template("rust") == ("target/", "Cargo.lock", "*.rs.bk", "*.pdb")


def test_resolve_by_enum_matches_string():
    assert resolve_template(ProjectType.PYTHON) == resolve_template("python")


@pytest.mark.parametrize("name", ["", "pyth", "Python", "javascript", "node.js", "reactnative"])
def test_unknown_returns_none(name: str):
    assert resolve_template(name) is None


def test_parse_trims_whitespace():
    assert parse_project_type("  vue ") is ProjectType.VUE


def test_python_template_contents():
    entries = resolve_template("python")
    assert "__pycache__/" in entries
    assert "*$py.class" in entries
    assert ".venv" in entries


def test_describe_lists_every_type():
    lines = describe_project_types()
    assert len(lines) == len(ProjectType)
    assert any(line.startswith("unity") and "Unity" in line for line in lines)
