"""Validate command implementation - skill structural validation."""

from pathlib import Path

import typer

from skillwright.builder.config import load_builder_config
from skillwright.display import console
from skillwright.validation import validate_skill


def validate_command(skill_dir: Path) -> None:
    """Validate a skill directory.

    Exit Codes:
        0: Validation passed
        1: Validation failed (errors found)
    """
    config = load_builder_config()
    result = validate_skill(skill_dir, max_bytes=config.artifacts.max_bytes)
    result.print(console)
    raise typer.Exit(0 if result.success else 1)
