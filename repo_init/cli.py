"""Entry point: click command, config loading, exit-code mapping."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import yaml

from .core import RunOptions, Settings, default_config_path, load_config, logger
from .workflow import InitSession


def _load_settings(config_path: str | None) -> Settings:
    path = Path(config_path) if config_path else default_config_path()
    try:
        return Settings.from_config(load_config(path))
    except (TypeError, yaml.YAMLError) as exc:
        logger.error(f"Invalid config {path}: {exc}")
        sys.exit(1)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=(
        "\b\nExamples:\n"
        "  repo-init                    # Initialize in current directory\n"
        "  repo-init /path/to/project   # Initialize in specific directory\n"
        "  repo-init -e -t .            # Explain each step, write a cheat sheet"
    ),
)
@click.argument("directory", default=".", type=click.Path(file_okay=True, dir_okay=True, path_type=Path))
@click.option("-e", "--explain", is_flag=True, help="Explain each git command before running it")
@click.option("-t", "--tutorial", is_flag=True, help="Write GIT_CHEATSHEET.md and print a walkthrough at the end")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML config file (default: per-user config directory)",
)
def cli(directory: Path, explain: bool, tutorial: bool, config_path: str | None) -> None:
    """Initialize a Git repository with .gitignore setup and optional remote configuration.

    DIRECTORY is the target directory (default: current directory).
    """
    options = RunOptions(
        target_dir=directory,
        explain=explain,
        tutorial=tutorial,
        settings=_load_settings(config_path),
    )
    InitSession(options).run()


def main(argv: list[str] | None = None) -> None:
    """Console entry point.  Usage errors exit 1, not click's default 2."""
    from colorama import init as colorama_init
    colorama_init()

    try:
        code = cli.main(args=argv, prog_name="repo-init", standalone_mode=False)
    except click.UsageError as exc:
        exc.show()
        if exc.ctx is not None:
            click.echo(exc.ctx.get_help(), err=True)
        sys.exit(1)
    except click.ClickException as exc:
        exc.show()
        sys.exit(1)
    except click.Abort:
        click.echo("\nAborted!", err=True)
        sys.exit(1)
    sys.exit(code if isinstance(code, int) else 0)


if __name__ == "__main__":
    main()
