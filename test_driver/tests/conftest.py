"""Shared fixtures for repo-init tests."""

from __future__ import annotations

import dataclasses
import io
import logging
import textwrap
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest

from repo_init import core
from repo_init.core import ProcessResult


@dataclasses.dataclass
class Call:
    cmd: list[str]
    cwd: Path | None = None
    input_text: str | None = None
    env: Mapping[str, str] | None = None

    @property
    def args(self) -> list[str]:
        """Arguments after the executable, with leading ``-c key=value`` pairs removed."""
        rest = self.cmd[1:]
        while len(rest) >= 2 and rest[0] == "-c":
            rest = rest[2:]
        return rest


class FakeRunner:
    """Stand-in for ``core.run_process`` that records calls.

    *responses* maps an argument prefix (tuple) to a ``ProcessResult`` or to
    a callable receiving the ``Call``.  Unmatched commands succeed.
    """

    def __init__(self, responses: dict[tuple[str, ...], Any] | None = None) -> None:
        self.responses = responses or {}
        self.calls: list[Call] = []

    def __call__(
        self,
        cmd: list[str],
        cwd: Path | None = None,
        input_text: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        call = Call(list(cmd), cwd, input_text, env)
        self.calls.append(call)
        for prefix, response in self.responses.items():
            if tuple(call.args[: len(prefix)]) == prefix:
                return response(call) if callable(response) else response
        return ProcessResult(0)

    def subcommands(self) -> list[str]:
        return [c.args[0] for c in self.calls if c.args]

    def find(self, *prefix: str) -> list[Call]:
        return [c for c in self.calls if tuple(c.args[: len(prefix)]) == prefix]


class Answers:
    """Scripted replacement for ``click.prompt``; answers are consumed in order."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, text: str, **kwargs: Any) -> str:
        self.prompts.append(text)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {text}")
        return self.answers.pop(0)


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    def _make(responses: dict[tuple[str, ...], Any] | None = None) -> FakeRunner:
        return FakeRunner(responses)

    return _make


@pytest.fixture
def make_project(tmp_path: Path):
    """Factory that creates a directory populated with the given files.

    Usage::

        project = make_project({"package.json": '{"dependencies": {"react": "18"}}'})
    """
    _counter = 0

    def _make(files: dict[str, str] | None = None, dirs: list[str] | None = None) -> Path:
        nonlocal _counter
        project = tmp_path / f"project_{_counter}"
        project.mkdir()
        _counter += 1
        for name, content in (files or {}).items():
            path = project / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        for name in dirs or []:
            (project / name).mkdir(parents=True, exist_ok=True)
        return project

    return _make


@pytest.fixture(autouse=True)
def _clear_executable_cache():
    core.find_executable.cache_clear()
    yield
    core.find_executable.cache_clear()


@pytest.fixture
def capture_logs():
    """Capture repo_init logger output into a StringIO buffer.

    The logger has propagate=False and its own StreamHandler that points
    at the original sys.stderr fd, so capsys/capfd/caplog cannot see it.
    This fixture adds a temporary StringIO handler.
    """
    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger = logging.getLogger("repo_init")
    logger.addHandler(handler)
    yield buf
    logger.removeHandler(handler)
