"""Remote URL validation, branch names and the add-remote-and-push sequence."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Callable
from typing import Any

import click

from .core import log_success, logger
from .credentials import SecretStore, resolve_credentials
from .git import Git, GitError

# (form, full-url pattern); the host is the first group.
_URL_FORMS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("https", re.compile(r"https?://([^/]+)/.+\.git")),
    ("scp", re.compile(r"git@([^:]+):.+\.git")),
    ("ssh", re.compile(r"ssh://git@([^/]+)/.+\.git")),
)

_BRANCH_CHARS = re.compile(r"[a-zA-Z0-9._/-]+")


@dataclasses.dataclass(frozen=True)
class GitUrl:
    url: str
    form: str
    host: str


def classify_url(url: str) -> GitUrl | None:
    """Recognize https, ``git@host:path`` and ``ssh://git@host/`` URLs ending in ``.git``."""
    for form, pattern in _URL_FORMS:
        match = pattern.fullmatch(url)
        if match:
            return GitUrl(url=url, form=form, host=match.group(1))
    return None


def is_valid_branch_name(name: str) -> bool:
    if not _BRANCH_CHARS.fullmatch(name):
        return False
    if name.startswith((".", "-")):
        return False
    return ".." not in name


def setup_remote(
    git: Git,
    store: SecretStore,
    branch: str,
    remote_name: str = "origin",
    prompt: Callable[..., Any] = click.prompt,
) -> tuple[bool, GitUrl | None]:
    """Ask for a remote URL, resolve credentials, add the remote and push.

    Returns ``(ok, remote)``.  *ok* is ``True`` when the operator skipped the
    remote or the push succeeded; *remote* is the validated URL, if any.
    A remote that was added before a failed push is left in place.
    """
    url = prompt(
        "Enter remote repository URL (or press Enter to skip)",
        default="",
        show_default=False,
    ).strip()
    if not url:
        logger.info("No remote repository configured")
        return True, None

    remote = classify_url(url)
    if remote is None:
        logger.error("Invalid Git repository URL format")
        logger.error(
            "Expected formats: https://github.com/user/repo.git, "
            "git@github.com:user/repo.git or ssh://git@github.com/user/repo.git"
        )
        return False, None
    if not remote.host:
        logger.error("Could not extract hostname from URL")
        return False, None

    credentials = resolve_credentials(remote.host, store, prompt)
    if credentials is None:
        return False, remote

    logger.info(f"Adding remote repository: {remote.url}")
    try:
        git.add_remote(remote_name, remote.url)
    except GitError as exc:
        logger.error(f"Failed to add remote: {exc}")
        return False, remote

    logger.info(f"Pushing to remote repository (branch: {branch})...")
    try:
        git.push(remote_name, branch, credentials)
    except GitError as exc:
        logger.debug(str(exc))
        logger.error("Failed to push to remote repository")
        logger.error("Please check your credentials and repository access")
        logger.warning(
            f"Remote '{remote_name}' was kept. Remove it with "
            f"'git remote remove {remote_name}' before running again."
        )
        return False, remote

    log_success("Successfully pushed to remote repository")
    return True, remote
