"""Test command implementation - run a skill's scaffold."""

import asyncio
from pathlib import Path

import typer

from skillwright.builder.config import load_builder_config
from skillwright.builder.runner import run_scaffold
from skillwright.core.schemas import ArtifactRole
from skillwright.display import print_test_trace
from skillwright.exceptions import SkillNotFoundError


def test_command(skill_dir: Path, timeout: int | None = None) -> None:
    """Run test.sh in ``skill_dir`` and print the trace.

    Exit Codes:
        0: Every assertion passed
        1: At least one assertion failed, or the scaffold did not finish
    """
    if not (skill_dir / ArtifactRole.TEST_SCAFFOLD.filename).is_file():
        raise SkillNotFoundError(str(skill_dir))

    if timeout is None:
        timeout = load_builder_config().budgets.test_timeout_seconds

    result = asyncio.run(run_scaffold(skill_dir, timeout=timeout))
    print_test_trace(result)
    raise typer.Exit(0 if result.all_passed else 1)


# Not a pytest test despite the name.
test_command.__test__ = False  # type: ignore[attr-defined]
