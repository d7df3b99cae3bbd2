"""skillwright CLI - main entry point.

Commands:
- init: write an example configuration
- plan: preview the language decision for a task
- scaffold: write a skeleton test scaffold
- build: plan, scaffold, implement, test and document a skill
- test: run a skill's scaffold
- validate: check a skill directory
- list: list generated skills
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from skillwright import __version__
from skillwright.commands import (
    build_command,
    init_command,
    list_command,
    plan_command,
    scaffold_command,
    test_command,
    validate_command,
)
from skillwright.display import print_error
from skillwright.exceptions import SkillwrightError

app = typer.Typer(
    help="skillwright - test-first authoring of small command-line skills.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"skillwright {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _run(command, *args, **kwargs) -> None:  # type: ignore[no-untyped-def]
    """Call a command, turning SkillwrightError into a message and exit 1."""
    try:
        command(*args, **kwargs)
    except SkillwrightError as e:
        print_error(e.message)
        raise typer.Exit(1) from None


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Log progress (-v info, -vv debug)."),
    ] = 0,
) -> None:
    """skillwright - test-first authoring of small command-line skills."""
    _configure_logging(verbose)


@app.command()
def init() -> None:
    """Write .skillwright/config.yaml with the default settings.

    Examples:
        skillwright init
    """
    _run(init_command)


@app.command()
def plan(
    task: Annotated[str, typer.Argument(help="Task description")],
) -> None:
    """Show which language and recipe a task would get.

    Examples:
        skillwright plan "count words in a file"
        skillwright plan "list open ports"
    """
    _run(plan_command, task)


@app.command()
def scaffold(
    name: Annotated[str, typer.Argument(help="Skill name (lowercase, hyphens)")],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Parent directory (default: cwd)")
    ] = None,
    with_defaults: Annotated[
        bool, typer.Option("--with-defaults", help="Include the --help and error assertions")
    ] = False,
) -> None:
    """Write a skeleton test.sh for a new skill.

    Examples:
        skillwright scaffold my-skill
        skillwright scaffold my-skill --with-defaults -o skills/
    """
    _run(scaffold_command, name, output, with_defaults)


@app.command()
def build(
    name: Annotated[str, typer.Argument(help="Skill name (lowercase, hyphens)")],
    task: Annotated[
        Optional[str],
        typer.Option("--task", "-t", help="What the skill should do (will prompt if not provided)"),
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Parent directory (default: cwd)")
    ] = None,
    max_attempts: Annotated[
        Optional[int],
        typer.Option("--max-attempts", "-n", help="Implementation attempts, 1-3 (default: config or 3)"),
    ] = None,
    implementer: Annotated[
        Optional[str],
        typer.Option("--implementer", "-i", help="template (offline) or llm (Anthropic API)"),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Replace an existing skill's generated files")
    ] = False,
) -> None:
    """Build a skill: plan, scaffold, implement, test, document.

    Exit code 0 on success, 1 on error, 2 when assertions still fail after
    the last attempt.

    Examples:
        skillwright build word-count --task "count words in a file"
        skillwright build list-ports --task "list open ports" --max-attempts 2
    """
    _run(build_command, name, task, output, max_attempts, implementer, force)


@app.command("test")
def test_cmd(
    skill_dir: Annotated[Path, typer.Argument(help="Skill directory containing test.sh")],
    timeout: Annotated[
        Optional[int], typer.Option("--timeout", help="Seconds before the scaffold is killed")
    ] = None,
) -> None:
    """Run a skill's test scaffold and show each assertion.

    Examples:
        skillwright test word-count
    """
    _run(test_command, skill_dir, timeout)


@app.command()
def validate(
    skill_dir: Annotated[Path, typer.Argument(help="Skill directory")],
) -> None:
    """Check a skill's file set, size ceiling and SKILL.md header.

    Examples:
        skillwright validate word-count
    """
    _run(validate_command, skill_dir)


@app.command("list")
def list_cmd(
    directory: Annotated[
        Optional[Path], typer.Argument(help="Directory to search (default: cwd)")
    ] = None,
) -> None:
    """List generated skills.

    Examples:
        skillwright list
        skillwright list skills/
    """
    _run(list_command, directory)


if __name__ == "__main__":
    app()
