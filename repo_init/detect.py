"""Infer candidate project types from the files in a directory.

Detection runs against a one-shot ``DetectionEvidence`` snapshot.  Rules are a
priority-ordered table; each rule looks at the snapshot and contributes at
most one ``ProjectType``.  An empty result is normal and means the caller
should ask the operator.
"""

from __future__ import annotations

import dataclasses
import fnmatch
from collections.abc import Callable
from pathlib import Path

from .core import logger
from .templates import ProjectType

PACKAGE_MANIFEST = "package.json"

# Checked in order; first marker found in package.json wins.
JS_FRAMEWORK_MARKERS: tuple[tuple[str, ProjectType], ...] = (
    ('"react"', ProjectType.REACT),
    ('"vue"', ProjectType.VUE),
    ('"@angular/', ProjectType.ANGULAR),
)


@dataclasses.dataclass(frozen=True)
class DetectionEvidence:
    """Read-only snapshot of the top level of a directory."""

    files: frozenset[str]
    dirs: frozenset[str]
    package_json: str | None = None

    @classmethod
    def collect(cls, directory: Path) -> DetectionEvidence:
        files: set[str] = set()
        dirs: set[str] = set()
        for entry in directory.iterdir():
            if entry.is_dir():
                dirs.add(entry.name)
            elif entry.is_file():
                files.add(entry.name)

        package_json = None
        if PACKAGE_MANIFEST in files:
            try:
                package_json = (directory / PACKAGE_MANIFEST).read_text(
                    encoding="utf-8", errors="replace",
                )
            except OSError as exc:
                logger.debug(f"Could not read {PACKAGE_MANIFEST}: {exc}")
                package_json = ""

        return cls(frozenset(files), frozenset(dirs), package_json)

    def has_file(self, pattern: str) -> bool:
        if any(ch in pattern for ch in "*?["):
            return any(fnmatch.fnmatchcase(name, pattern) for name in self.files)
        return pattern in self.files

    def has_dir(self, name: str) -> bool:
        return name in self.dirs


Rule = Callable[[DetectionEvidence], ProjectType | None]


def _js_flavor(evidence: DetectionEvidence) -> ProjectType | None:
    if evidence.package_json is None:
        return None
    for marker, project_type in JS_FRAMEWORK_MARKERS:
        if marker in evidence.package_json:
            return project_type
    return ProjectType.NODE


def _any_file(project_type: ProjectType, *patterns: str) -> Rule:
    def rule(evidence: DetectionEvidence) -> ProjectType | None:
        if any(evidence.has_file(p) for p in patterns):
            return project_type
        return None

    return rule


def _all_dirs(project_type: ProjectType, *names: str) -> Rule:
    def rule(evidence: DetectionEvidence) -> ProjectType | None:
        if all(evidence.has_dir(n) for n in names):
            return project_type
        return None

    return rule


RULES: tuple[Rule, ...] = (
    _js_flavor,
    _any_file(ProjectType.PYTHON, "requirements.txt", "setup.py", "pyproject.toml", "Pipfile"),
    _any_file(ProjectType.JAVA, "pom.xml", "build.gradle", "build.gradle.kts"),
    _any_file(ProjectType.CSHARP, "*.csproj", "*.sln", "global.json"),
    _any_file(ProjectType.GO, "go.mod", "go.sum"),
    _any_file(ProjectType.RUST, "Cargo.toml"),
    _any_file(ProjectType.PHP, "composer.json"),
    _any_file(ProjectType.RUBY, "Gemfile"),
    _any_file(ProjectType.FLUTTER, "pubspec.yaml"),
    _all_dirs(ProjectType.UNITY, "Assets", "ProjectSettings"),
)


def evaluate_rules(evidence: DetectionEvidence, rules: tuple[Rule, ...] = RULES) -> list[ProjectType]:
    detected: list[ProjectType] = []
    for rule in rules:
        project_type = rule(evidence)
        if project_type is not None and project_type not in detected:
            detected.append(project_type)
    return detected


def detect_project_types(directory: Path) -> list[ProjectType]:
    """Return candidate types for *directory*; the first one is recommended."""
    return evaluate_rules(DetectionEvidence.collect(directory))
