"""Cheat sheet generation and the end-of-run walkthrough for tutorial mode."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import click
from colorama import Fore, Style

from .templates import DESCRIPTIONS, ProjectType

_GENERAL_SECTIONS = """\
## Everyday workflow

```bash
git status                  # what changed, what is staged
git add <file>              # stage a file (git add . stages everything)
git commit -m "message"     # record the staged snapshot
git log --oneline --graph   # compact history
git diff                    # unstaged changes
git diff --staged           # staged changes
```

## Branches

```bash
git switch -c feature/x     # create and switch to a new branch
git switch main             # go back to main
git merge feature/x         # merge a branch into the current one
git branch -d feature/x     # delete a merged branch
```

## Remotes

```bash
git remote -v               # list remotes
git pull                    # fetch and integrate upstream changes
git push                    # upload commits to the upstream branch
git push -u origin <branch> # first push of a new branch
git remote remove origin    # forget a remote (e.g. after a failed setup)
```

## Undoing things

```bash
git restore <file>          # discard unstaged changes
git restore --staged <file> # unstage, keep the changes
git commit --amend          # fix the last commit message or content
git revert <commit>         # new commit that undoes <commit>
git rm --cached <file>      # stop tracking a file that is now ignored
```
"""

_JS_SECTION = """\
```bash
npm install                 # restores node_modules/ (ignored)
git add package.json package-lock.json
```

Commit the lockfile so everyone installs the same versions. Build output
(`dist/`, `build/`) and `node_modules/` are regenerated and stay ignored.
"""

_PROJECT_SECTIONS: dict[ProjectType, str] = {
    ProjectType.NODE: _JS_SECTION,
    ProjectType.REACT: _JS_SECTION + "\nKeep secrets in `.env.local`; it is ignored.\n",
    ProjectType.VUE: _JS_SECTION,
    ProjectType.ANGULAR: _JS_SECTION + "\nThe `.angular/` cache is ignored.\n",
    ProjectType.PYTHON: """\
```bash
python -m venv .venv        # virtual environment (ignored)
pip freeze > requirements.txt
git add requirements.txt pyproject.toml
```

Never commit `__pycache__/`, virtual environments or `.env` files.
""",
    ProjectType.JAVA: """\
```bash
git add pom.xml             # or build.gradle / gradlew
git add gradle/wrapper/gradle-wrapper.jar
```

`target/` and `build/` are ignored; the Gradle wrapper jar is re-included.
""",
    ProjectType.CSHARP: """\
```bash
dotnet restore
git add *.sln *.csproj
```

`bin/`, `obj/` and `.vs/` are ignored.
""",
    ProjectType.GO: """\
```bash
go mod tidy
git add go.mod go.sum
```

Commit both `go.mod` and `go.sum`; `vendor/` is ignored.
""",
    ProjectType.RUST: """\
```bash
cargo build
git add Cargo.toml
```

`target/` is ignored. For binaries consider committing `Cargo.lock`.
""",
    ProjectType.PHP: """\
```bash
composer install
git add composer.json composer.lock
```

`vendor/` and local `.env` files are ignored.
""",
    ProjectType.RUBY: """\
```bash
bundle install
git add Gemfile
```

`.bundle/` and `vendor/bundle/` are ignored.
""",
    ProjectType.FLUTTER: """\
```bash
flutter pub get
git add pubspec.yaml pubspec.lock
```

`build/` and `.dart_tool` caches are regenerated; keep them out of history.
""",
    ProjectType.UNITY: """\
```bash
git lfs install             # large binary assets
git add Assets/ ProjectSettings/ Packages/
```

`Library/`, `Temp/` and `Logs/` are regenerated by the editor and ignored.
""",
}


def render_cheatsheet(project_name: str, project_type: ProjectType | None, branch: str) -> str:
    lines = [
        f"# Git cheat sheet for {project_name}",
        "",
        f"Default branch: `{branch}`",
        "",
        _GENERAL_SECTIONS,
    ]
    if project_type is not None:
        lines.append(f"## {DESCRIPTIONS[project_type]}")
        lines.append("")
        lines.append(_PROJECT_SECTIONS[project_type])
    return "\n".join(lines).rstrip("\n") + "\n"


def write_cheatsheet(
    directory: Path,
    filename: str,
    project_type: ProjectType | None,
    branch: str,
) -> Path:
    path = directory / filename
    path.write_text(render_cheatsheet(directory.resolve().name, project_type, branch), encoding="utf-8")
    return path


@dataclasses.dataclass
class RunSummary:
    """What one run did, for the closing walkthrough."""

    project_type: ProjectType | None = None
    branch: str = ""
    remote_url: str = ""
    steps: list[str] = dataclasses.field(default_factory=list)


def print_summary(summary: RunSummary, cheatsheet: Path | None = None) -> None:
    click.echo()
    click.echo(f"{Style.BRIGHT}{Fore.GREEN}What just happened{Style.RESET_ALL}")
    for i, step in enumerate(summary.steps, 1):
        click.echo(f"  {i}. {step}")

    click.echo()
    click.echo(f"{Style.BRIGHT}{Fore.GREEN}Next steps{Style.RESET_ALL}")
    click.echo("  git status                      # check the working tree")
    click.echo("  git add <file> && git commit    # record your next change")
    if summary.remote_url:
        click.echo("  git push                        # upload new commits")
    else:
        click.echo("  git remote add origin <url>     # connect a hosted copy")
        click.echo(f"  git push -u origin {summary.branch or 'main'}")
    if cheatsheet is not None:
        click.echo()
        click.echo(f"  A cheat sheet was written to {cheatsheet.name}.")
