"""Look up, prompt for and store per-host git credentials.

Storage is delegated to ``secret-tool`` (libsecret).  When it is not
installed every store operation degrades to "nothing stored".
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

import click

from .core import ProcessResult, find_executable, log_success, logger, run_process

SECRET_TOOL = "secret-tool"
USER_KEY = "git-user"
TOKEN_KEY = "git-token"


@dataclasses.dataclass(frozen=True)
class CredentialPair:
    username: str
    token: str = dataclasses.field(repr=False)


class SecretStore:
    """Wrapper around the ``secret-tool`` CLI."""

    def __init__(
        self,
        executable: str | None = None,
        runner: Callable[..., ProcessResult] = run_process,
    ) -> None:
        self.executable = executable
        self.runner = runner

    @classmethod
    def detect(cls, runner: Callable[..., ProcessResult] = run_process) -> SecretStore:
        return cls(find_executable(SECRET_TOOL), runner=runner)

    @property
    def available(self) -> bool:
        return self.executable is not None

    def lookup(self, key: str, host: str) -> str | None:
        if not self.available:
            return None
        result = self.runner([self.executable, "lookup", key, host])
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def store(self, label: str, key: str, host: str, value: str) -> bool:
        if not self.available:
            return False
        result = self.runner(
            [self.executable, "store", f"--label={label}", key, host],
            input_text=value,
        )
        return result.ok

    def load(self, host: str) -> CredentialPair | None:
        username = self.lookup(USER_KEY, host)
        token = self.lookup(TOKEN_KEY, host)
        if username and token:
            return CredentialPair(username, token)
        return None

    def save(self, host: str, credentials: CredentialPair) -> bool:
        if not self.available:
            logger.warning(f"Cannot store credentials - {SECRET_TOOL} not available")
            return False
        if (
            self.store(f"Git username for {host}", USER_KEY, host, credentials.username)
            and self.store(f"Git token for {host}", TOKEN_KEY, host, credentials.token)
        ):
            log_success(f"Stored credentials for {host} in keyring")
            return True
        logger.warning("Failed to store credentials in keyring")
        return False


def prompt_credentials(host: str, prompt: Callable[..., Any] = click.prompt) -> CredentialPair | None:
    logger.info(f"Enter credentials for {host}:")
    username = prompt("Username", default="", show_default=False).strip()
    token = prompt("Token/Password", default="", show_default=False, hide_input=True)
    if not username or not token:
        logger.error("Username and token are required")
        return None
    return CredentialPair(username, token)


def resolve_credentials(
    host: str,
    store: SecretStore,
    prompt: Callable[..., Any] = click.prompt,
) -> CredentialPair | None:
    """Stored credentials for *host* if complete, otherwise ask and remember them."""
    stored = store.load(host)
    if stored is not None:
        log_success(f"Using stored credentials for {host}")
        return stored

    credentials = prompt_credentials(host, prompt)
    if credentials is None:
        return None
    store.save(host, credentials)
    return credentials
