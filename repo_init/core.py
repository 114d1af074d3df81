"""Core plumbing: logging, process execution, executable lookup, config loading."""

from __future__ import annotations

import contextlib
import dataclasses
import logging
import os
import shutil
import subprocess
import sys
from collections.abc import Generator, Mapping
from functools import cache
from pathlib import Path
from typing import Any

import click
import yaml
from colorama import Fore, Style


# ── Logging ──────────────────────────────────────────────────────────

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


def _level_color(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return Fore.RED
    if levelno >= logging.WARNING:
        return Fore.YELLOW
    if levelno >= SUCCESS:
        return Fore.GREEN
    return Fore.CYAN


class ToolFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = _level_color(record.levelno)
        message = record.getMessage()
        return f"{color}[{record.levelname.lower()}]{Style.RESET_ALL} {message}"


logger = logging.getLogger("repo_init")
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(ToolFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False


def log_success(message: str) -> None:
    logger.log(SUCCESS, message)


def _is_ci() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


@contextlib.contextmanager
def log_section(title: str) -> Generator[None, None, None]:
    """Foldable CI section or styled terminal header."""
    if _is_ci():
        print(f"::group::{title}", flush=True)
    else:
        logger.info(f"── {title} ──")
    try:
        yield
    finally:
        if _is_ci():
            print("::endgroup::", flush=True)


def print_subprocess_line(line: str) -> None:
    text = line.rstrip()
    print(f"{Style.DIM}{text}{Style.RESET_ALL}")


# ── Process Execution ────────────────────────────────────────────────


@dataclasses.dataclass(frozen=True)
class ProcessResult:
    """Outcome of one external command. ``returncode`` is the only success signal."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_process(
    cmd: list[str],
    cwd: Path | None = None,
    input_text: str | None = None,
    env: Mapping[str, str] | None = None,
) -> ProcessResult:
    """Run *cmd* to completion and capture its output.

    *env* entries are layered over the current environment.  A missing
    executable is reported as exit code 127, the way a shell would.
    """
    run_env = None
    if env:
        run_env = {**os.environ, **env}
    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            input=input_text,
            env=run_env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as exc:
        return ProcessResult(returncode=127, stderr=str(exc))
    return ProcessResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


@cache
def find_executable(name: str) -> str | None:
    """Find *name* on the system PATH. Returns ``None`` if not found."""
    return shutil.which(name)


def require_executable(name: str, *, hint: str = "") -> str:
    """Find *name* or exit with a helpful error.

    Returns the executable path on success.  On failure calls
    ``sys.exit(1)`` after logging which dependency is missing.
    """
    exe = find_executable(name)
    if exe is not None:
        return exe

    logger.error(f"Missing required dependency: {name}")
    logger.error(hint or "Please install missing dependencies and try again.")
    sys.exit(1)


# ── Config Loading ───────────────────────────────────────────────────

CONFIG_FILENAME = "config.yaml"


def default_config_path() -> Path:
    return Path(click.get_app_dir("repo-init")) / CONFIG_FILENAME


def load_config(path: Path) -> dict[str, Any]:
    """Load a YAML config file. A missing or empty file yields ``{}``."""
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{path.name} must contain a top-level mapping.")
    return data


def _require_str(config: dict[str, Any], key: str, default: str) -> str:
    value = config.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise TypeError(f"Config key '{key}' must be a non-empty string.")
    return value


@dataclasses.dataclass(frozen=True)
class Settings:
    """User-tunable defaults, read from the YAML config."""

    general_ignore: tuple[str, ...] = (".env", "*.log", ".DS_Store", ".vscode", ".idea")
    default_branch: str = "main"
    commit_message: str = "Initial commit"
    credential_helper: str | None = "libsecret"
    remote_name: str = "origin"
    cheatsheet_name: str = "GIT_CHEATSHEET.md"

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> Settings:
        known = {f.name for f in dataclasses.fields(cls)}
        for key in config:
            if key not in known:
                logger.debug(f"Ignoring unknown config key: {key}")

        defaults = cls()
        general = config.get("general_ignore", list(defaults.general_ignore))
        if not isinstance(general, list) or not all(isinstance(e, str) for e in general):
            raise TypeError("Config key 'general_ignore' must be a list of strings.")

        helper = config.get("credential_helper", defaults.credential_helper)
        if helper is not None and not isinstance(helper, str):
            raise TypeError("Config key 'credential_helper' must be a string or null.")

        return cls(
            general_ignore=tuple(general),
            default_branch=_require_str(config, "default_branch", defaults.default_branch),
            commit_message=_require_str(config, "commit_message", defaults.commit_message),
            credential_helper=helper or None,
            remote_name=_require_str(config, "remote_name", defaults.remote_name),
            cheatsheet_name=_require_str(config, "cheatsheet_name", defaults.cheatsheet_name),
        )


@dataclasses.dataclass(frozen=True)
class RunOptions:
    """Immutable options threaded through one initialization run."""

    target_dir: Path
    explain: bool = False
    tutorial: bool = False
    settings: Settings = dataclasses.field(default_factory=Settings)
