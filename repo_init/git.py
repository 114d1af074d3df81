"""Thin wrapper over the git binary."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from .core import ProcessResult, print_subprocess_line, run_process
from .credentials import CredentialPair
from .explain import Explainer

Runner = Callable[..., ProcessResult]

USERNAME_ENV = "REPO_INIT_GIT_USERNAME"
TOKEN_ENV = "REPO_INIT_GIT_TOKEN"

# Answers git's credential protocol from the child environment so the secret
# never appears in argv.
INLINE_CREDENTIAL_HELPER = (
    f'!f() {{ echo "username=${{{USERNAME_ENV}}}"; echo "password=${{{TOKEN_ENV}}}"; }}; f'
)


class GitError(Exception):
    """A git command exited non-zero."""

    def __init__(self, args: Sequence[str], result: ProcessResult) -> None:
        self.command = list(args)
        self.result = result
        message = f"'git {' '.join(args)}' failed with exit code {result.returncode}"
        detail = result.stderr.strip()
        if detail:
            message += f": {detail[:500]}"
        super().__init__(message)


class Git:
    """Runs git subcommands inside one working directory."""

    def __init__(
        self,
        repo_dir: Path,
        executable: str = "git",
        explainer: Explainer | None = None,
        runner: Runner = run_process,
    ) -> None:
        self.repo_dir = repo_dir
        self.executable = executable
        self.explainer = explainer or Explainer()
        self.runner = runner

    def _run(
        self,
        topic: str,
        args: Sequence[str],
        *,
        check: bool = True,
        echo: bool = True,
        prefix: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        self.explainer.note(topic, ["git", *args])
        cmd = [self.executable, *prefix, *args]
        result = self.runner(cmd, cwd=self.repo_dir, env=env)
        if echo:
            for line in result.stdout.splitlines():
                print_subprocess_line(line)
        if check and not result.ok:
            raise GitError(args, result)
        return result

    def init(self) -> None:
        self._run("init", ["init"])

    def add_all(self) -> None:
        self._run("add", ["add", "."])

    def has_staged_changes(self) -> bool:
        result = self._run("diff", ["diff", "--staged", "--quiet"], check=False, echo=False)
        if result.returncode not in (0, 1):
            raise GitError(["diff", "--staged", "--quiet"], result)
        return result.returncode == 1

    def add(self, path: str) -> None:
        self._run("add", ["add", path])

    def commit(self, message: str) -> None:
        self._run("commit", ["commit", "-m", message])

    def current_branch(self) -> str:
        """Short name of HEAD, or ``""`` when it cannot be determined."""
        result = self._run("symbolic_ref", ["symbolic-ref", "--short", "HEAD"], check=False, echo=False)
        if not result.ok:
            return ""
        return result.stdout.strip()

    def rename_branch(self, name: str) -> None:
        self._run("branch", ["branch", "-M", name])

    def add_remote(self, name: str, url: str) -> None:
        self._run("remote", ["remote", "add", name, url])

    def push(self, remote: str, branch: str, credentials: CredentialPair | None = None) -> None:
        prefix: list[str] = []
        env: dict[str, str] | None = None
        if credentials is not None:
            # An empty value first clears helpers inherited from the global config.
            prefix = ["-c", "credential.helper=", "-c", f"credential.helper={INLINE_CREDENTIAL_HELPER}"]
            env = {USERNAME_ENV: credentials.username, TOKEN_ENV: credentials.token}
        self._run("push", ["push", "-u", remote, branch], echo=False, prefix=prefix, env=env)

    def set_global_credential_helper(self, helper: str) -> bool:
        result = self._run(
            "credential_helper",
            ["config", "--global", "credential.helper", helper],
            check=False,
            echo=False,
        )
        return result.ok
