"""Validate, compose and append .gitignore entries."""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Sequence
from pathlib import Path

from .core import logger

FORBIDDEN_CHARS = frozenset("<>|")


def is_valid_entry(entry: str) -> bool:
    """Accept bare names, globs and ``dir/`` patterns; reject partial paths."""
    if not entry:
        return False
    if any(ch in FORBIDDEN_CHARS for ch in entry):
        return False
    if "/" in entry and not entry.endswith("/"):
        return False
    return True


class GitignoreChoice(enum.Enum):
    ACCEPT = "accept"
    CUSTOM = "custom"
    ADD = "add"
    SKIP = "skip"


def parse_choice(text: str) -> GitignoreChoice | None:
    """Map the operator's answer to a choice. Empty input means accept."""
    answer = text.strip().lower()
    if not answer:
        return GitignoreChoice.ACCEPT
    try:
        return GitignoreChoice(answer)
    except ValueError:
        return None


def propose_entries(general: Iterable[str], template: Iterable[str] | None = None) -> list[str]:
    proposed = list(general)
    if template:
        proposed.extend(template)
    return proposed


def choose_entries(
    proposed: Sequence[str],
    choice: GitignoreChoice,
    extra_text: str = "",
) -> list[str] | None:
    """Apply *choice* and split the result into candidate entries.

    Returns ``None`` when the operator skipped .gitignore setup.
    """
    if choice is GitignoreChoice.SKIP:
        return None
    if choice is GitignoreChoice.CUSTOM:
        return extra_text.split()
    candidates = " ".join(proposed).split()
    if choice is GitignoreChoice.ADD:
        candidates.extend(extra_text.split())
    return candidates


@dataclasses.dataclass
class AppendResult:
    added: list[str] = dataclasses.field(default_factory=list)
    duplicates: list[str] = dataclasses.field(default_factory=list)
    invalid: list[str] = dataclasses.field(default_factory=list)
    lines: list[str] = dataclasses.field(default_factory=list)


def ensure_gitignore(path: Path) -> bool:
    """Create an empty *path* if absent. Returns ``True`` when it was created."""
    if path.exists():
        return False
    path.touch()
    return True


def append_entries(path: Path, candidates: Iterable[str]) -> AppendResult:
    """Append each valid, not-yet-present candidate to the gitignore at *path*.

    Creates the file if absent.  Preserves original line endings (CRLF/LF).
    Existing lines are never rewritten or reordered, and a pattern is
    appended at most once, so repeated calls are idempotent.
    The returned ``lines`` hold the file content after the append.
    """
    raw = b""
    if path.exists():
        raw = path.read_bytes()

    # Detect line ending style from existing content.
    eol = "\r\n" if b"\r\n" in raw else "\n"

    text = raw.decode("utf-8", errors="replace")
    existing_lines = {line.rstrip("\r\n") for line in text.splitlines()}

    result = AppendResult(lines=text.splitlines())
    accepted: set[str] = set()
    for entry in candidates:
        if not is_valid_entry(entry):
            logger.warning(f"Skipping invalid entry: {entry}")
            result.invalid.append(entry)
        elif entry in existing_lines or entry in accepted:
            logger.warning(f"Skipping duplicate entry: {entry}")
            result.duplicates.append(entry)
        else:
            accepted.add(entry)
            result.added.append(entry)

    if not result.added:
        return result

    parts: list[str] = []

    # Ensure trailing newline on existing content.
    if text and not text.endswith("\n"):
        parts.append(eol)

    for entry in result.added:
        parts.append(entry + eol)

    with open(path, "ab") as f:
        f.write("".join(parts).encode("utf-8"))
    result.lines.extend(result.added)
    return result
