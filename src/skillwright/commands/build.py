"""Build command implementation - run the whole pipeline for one skill."""

from pathlib import Path

import click
import typer

from skillwright.builder.entrypoint import build_skill
from skillwright.display import print_build_result, print_test_trace


def build_command(
    name: str,
    task: str | None,
    output_dir: Path | None,
    max_attempts: int | None,
    implementer: str | None,
    force: bool,
) -> None:
    """Build a skill and exit with the build's status code.

    Exit Codes:
        0: Success, docs written
        1: Failed (error during the build)
        2: Blocked (attempt budget exhausted with failing assertions)
    """
    if not task:
        task = click.prompt("Task", type=str)

    result = build_skill(
        name,
        task,
        output_dir=output_dir,
        max_attempts=max_attempts,
        implementer=implementer,
        force=force,
    )

    if result.result is not None:
        print_test_trace(result.result)
    print_build_result(result)
    raise typer.Exit(result.exit_code())
