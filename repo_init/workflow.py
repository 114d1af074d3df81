"""InitSession — one interactive repository initialization, start to finish."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from .core import (
    ProcessResult,
    RunOptions,
    log_section,
    log_success,
    logger,
    require_executable,
    run_process,
)
from .credentials import SECRET_TOOL, SecretStore
from .detect import detect_project_types
from .explain import Explainer
from .git import Git, GitError
from .gitignore import (
    GitignoreChoice,
    append_entries,
    choose_entries,
    ensure_gitignore,
    parse_choice,
    propose_entries,
)
from .remote import is_valid_branch_name, setup_remote
from .templates import ProjectType, describe_project_types, parse_project_type, resolve_template
from .tutorial import RunSummary, print_summary, write_cheatsheet

GITIGNORE = ".gitignore"
README = "README.md"


def validate_directory(target: Path) -> None:
    """Exit unless *target* is an existing, writable, not-yet-initialized directory."""
    if not target.is_dir():
        logger.error(f"Directory '{target}' does not exist")
        sys.exit(1)
    if (target / ".git").exists():
        logger.error(f"Directory '{target}' is already a Git repository")
        sys.exit(1)
    if not os.access(target, os.W_OK):
        logger.error(f"Directory '{target}' is not writable")
        sys.exit(1)


def _print_entries(entries: list[str] | tuple[str, ...]) -> None:
    for entry in entries:
        click.echo(f"  {entry}")


class InitSession:
    """Sequences the steps of one run.  Prompts go through *prompt*/*confirm*."""

    def __init__(
        self,
        options: RunOptions,
        runner: Callable[..., ProcessResult] = run_process,
        prompt: Callable[..., Any] = click.prompt,
        confirm: Callable[..., bool] = click.confirm,
    ) -> None:
        self.options = options
        self.settings = options.settings
        self.target = options.target_dir
        self.runner = runner
        self.prompt = prompt
        self.confirm = confirm
        self.explainer = Explainer(options.explain)
        self.summary = RunSummary()
        self.git: Git | None = None
        self.store: SecretStore | None = None

    # ── Steps ────────────────────────────────────────────────────────

    def check_requirements(self) -> None:
        git_exe = require_executable("git", hint="Please install git and try again.")
        self.git = Git(self.target, executable=git_exe, explainer=self.explainer, runner=self.runner)

        self.store = SecretStore.detect(runner=self.runner)
        if self.store.available:
            logger.info(f"Found {SECRET_TOOL} - credential storage available")
        else:
            logger.warning(f"{SECRET_TOOL} not found - credentials won't be stored")
            logger.info("To enable credential storage: sudo apt-get install libsecret-tools")

    def configure_credential_helper(self) -> None:
        helper = self.settings.credential_helper
        if not helper or not self.store.available:
            return
        if self.git.set_global_credential_helper(helper):
            log_success(f"Configured Git to use {helper} credential helper")
        else:
            logger.warning(f"Could not configure {helper} credential helper")

    def choose_project_type(self) -> ProjectType | None:
        self.explainer.note("detect")
        detected = detect_project_types(self.target)
        if detected:
            log_success(f"Detected project type(s): {' '.join(t.value for t in detected)}")
            return detected[0]

        logger.info("No specific project type detected")
        click.echo("Available project types:")
        _print_entries(describe_project_types())
        answer = self.prompt(
            "Enter project type for recommendations (or press Enter to skip)",
            default="",
            show_default=False,
        ).strip()
        if not answer:
            return None
        project_type = parse_project_type(answer)
        if project_type is None:
            logger.warning(f"Unknown project type: {answer}")
        return project_type

    def setup_gitignore(self) -> None:
        with log_section("Setting up .gitignore"):
            path = self.target / GITIGNORE
            if ensure_gitignore(path):
                log_success("Created new .gitignore file")
            else:
                logger.info("Using existing .gitignore file")

            project_type = self.choose_project_type()
            self.summary.project_type = project_type
            template = resolve_template(project_type) if project_type else None
            if template:
                logger.info(f"Recommended .gitignore entries for {project_type}:")
                _print_entries(template)

            proposed = propose_entries(self.settings.general_ignore, template)
            click.echo()
            if project_type:
                click.echo(f"Proposed entries (general + {project_type}):")
            else:
                click.echo("Proposed entries (general only):")
            _print_entries(proposed)

            click.echo()
            click.echo("Options:")
            click.echo("  [Enter] - Accept proposed entries")
            click.echo("  'custom' - Enter your own entries")
            click.echo("  'add' - Accept proposed + add custom entries")
            click.echo("  'skip' - Skip .gitignore setup")
            answer = self.prompt("Choice", default="", show_default=False)

            choice = parse_choice(answer)
            if choice is None:
                logger.warning("Invalid choice, using proposed entries")
                choice = GitignoreChoice.ACCEPT

            extra = ""
            if choice is GitignoreChoice.CUSTOM:
                extra = self.prompt("Enter custom entries (space-separated)", default="", show_default=False)
                logger.info("Using custom .gitignore entries")
            elif choice is GitignoreChoice.ADD:
                extra = self.prompt("Enter additional entries (space-separated)", default="", show_default=False)
                logger.info("Using proposed + additional .gitignore entries")
            elif choice is GitignoreChoice.SKIP:
                logger.info("Skipping .gitignore setup")
            else:
                logger.info("Using proposed .gitignore entries")

            candidates = choose_entries(proposed, choice, extra)
            if candidates is None:
                self.summary.steps.append("Skipped .gitignore setup")
                return

            self.explainer.note("gitignore")
            result = append_entries(path, candidates)
            if result.added:
                log_success(f"Added {len(result.added)} entries to .gitignore")
                logger.info("Final .gitignore content:")
                _print_entries(result.lines)
            else:
                logger.warning("No valid entries to add")
            self.summary.steps.append(f"Wrote {len(result.added)} patterns to .gitignore")

    def stage_files(self) -> None:
        logger.info("Staging files...")
        self.git.add_all()
        if self.git.has_staged_changes():
            return

        logger.warning("No files to commit after applying .gitignore")
        logger.info("Consider creating a README.md or other files")
        if not self.confirm("Create a basic README.md?", default=False):
            logger.error("No files to commit. Exiting.")
            sys.exit(1)

        (self.target / README).write_text(
            f"# {self.target.resolve().name}\n"
            "## Description\n"
            "Add your project description here.\n",
            encoding="utf-8",
        )
        self.git.add(README)
        self.summary.steps.append("Created a starter README.md")

    def prompt_branch_name(self) -> str:
        logger.info("Setting up initial branch...")
        answer = self.prompt(
            f"Enter initial branch name (default: {self.settings.default_branch})",
            default="",
            show_default=False,
        ).strip()
        name = answer or self.settings.default_branch
        if not is_valid_branch_name(name):
            logger.error(f"Invalid branch name: {name}")
            logger.error("Branch names cannot start with . or -, and cannot contain consecutive dots")
            sys.exit(1)
        return name

    def setup_branch(self) -> str:
        name = self.prompt_branch_name()
        if self.git.current_branch() != name:
            logger.info(f"Setting branch name to: {name}")
            self.git.rename_branch(name)
        else:
            logger.info(f"Using current branch: {name}")
        self.summary.branch = name
        self.summary.steps.append(f"Named the branch '{name}'")
        return name

    def write_tutorial(self) -> None:
        cheatsheet = write_cheatsheet(
            self.target,
            self.settings.cheatsheet_name,
            self.summary.project_type,
            self.summary.branch or self.settings.default_branch,
        )
        log_success(f"Wrote {cheatsheet.name}")
        print_summary(self.summary, cheatsheet)

    # ── Orchestration ───────────────────────────────────────────────

    def run(self) -> None:
        logger.info(f"Initializing Git repository in: {self.target}")
        self.check_requirements()
        validate_directory(self.target)
        self.configure_credential_helper()

        try:
            logger.info("Initializing Git repository...")
            self.git.init()
            self.summary.steps.append("Created an empty repository (.git/)")

            self.setup_gitignore()
            self.stage_files()

            logger.info("Creating initial commit...")
            self.git.commit(self.settings.commit_message)
            self.summary.steps.append(f"Committed everything as '{self.settings.commit_message}'")

            branch = self.setup_branch()
        except GitError as exc:
            logger.error(str(exc))
            sys.exit(1)

        ok, remote = setup_remote(
            self.git,
            self.store,
            branch,
            remote_name=self.settings.remote_name,
            prompt=self.prompt,
        )
        if remote is not None:
            self.summary.remote_url = remote.url
        if not ok:
            sys.exit(1)
        if remote is not None:
            self.summary.steps.append(f"Pushed '{branch}' to {remote.url}")

        log_success(f"Git repository successfully initialized in {self.target}!")
        if self.options.tutorial:
            self.write_tutorial()
