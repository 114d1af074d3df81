"""Educational notes printed before each step when explain mode is on."""

from __future__ import annotations

import shlex
import textwrap
from collections.abc import Sequence

import click
from colorama import Fore, Style

EXPLANATIONS: dict[str, tuple[str, str]] = {
    "credential_helper": (
        "Configuring a credential helper",
        "Git asks a credential helper for usernames and passwords instead of "
        "prompting every time. 'libsecret' stores them in your desktop keyring. "
        "This writes to your global ~/.gitconfig, so it applies to every repository.",
    ),
    "init": (
        "Creating the repository",
        "'git init' creates a hidden .git directory that holds the full history, "
        "branches and configuration. Your files are not tracked yet.",
    ),
    "detect": (
        "Detecting the project type",
        "Marker files such as package.json, pyproject.toml or Cargo.toml reveal "
        "which toolchain the project uses, which in turn decides which build "
        "outputs and caches should stay out of version control.",
    ),
    "gitignore": (
        "Writing .gitignore",
        "Each line of .gitignore is a pattern. Names ending in '/' match "
        "directories, '*' matches any run of characters and a leading '!' "
        "re-includes something an earlier pattern excluded. Ignored files never "
        "show up in 'git status' and cannot be added by accident.",
    ),
    "add": (
        "Staging files",
        "'git add .' copies the current content of every non-ignored file into "
        "the staging area (the index). The next commit records exactly what is "
        "staged.",
    ),
    "diff": (
        "Checking for staged changes",
        "'git diff --staged --quiet' prints nothing and exits 1 when something is "
        "staged, 0 when the staging area matches the last commit. Scripts use the "
        "exit code to ask 'is there anything to commit?'.",
    ),
    "commit": (
        "Creating the first commit",
        "A commit is a snapshot of the staging area plus a message, an author and "
        "a pointer to its parent. The first commit has no parent and starts the "
        "history of the current branch.",
    ),
    "symbolic_ref": (
        "Reading the current branch",
        "HEAD is a reference to the branch you are on. 'git symbolic-ref --short "
        "HEAD' prints that branch's short name.",
    ),
    "branch": (
        "Renaming the branch",
        "'git branch -M <name>' renames the current branch, overwriting any "
        "branch that already has that name. Most hosting services now default to "
        "'main'.",
    ),
    "remote": (
        "Adding a remote",
        "A remote is a named URL of another copy of the repository. By convention "
        "the primary one is called 'origin'. Adding it only stores the URL; "
        "nothing is transferred yet.",
    ),
    "push": (
        "Pushing to the remote",
        "'git push -u origin <branch>' uploads your commits and sets the remote "
        "branch as the upstream, so later a plain 'git push' or 'git pull' knows "
        "where to go. Credentials are handed to git for this single command only.",
    ),
}


class Explainer:
    """Prints an annotation for a step when enabled; silent otherwise."""

    def __init__(self, enabled: bool = False, width: int = 76) -> None:
        self.enabled = enabled
        self.width = width

    def note(self, topic: str, command: Sequence[str] | None = None) -> None:
        if not self.enabled or topic not in EXPLANATIONS:
            return
        title, body = EXPLANATIONS[topic]
        click.echo()
        click.echo(f"{Fore.MAGENTA}[explain]{Style.RESET_ALL} {Style.BRIGHT}{title}{Style.RESET_ALL}")
        for line in textwrap.wrap(body, self.width):
            click.echo(f"  {line}")
        if command:
            click.echo(f"  {Style.DIM}$ {shlex.join(command)}{Style.RESET_ALL}")
