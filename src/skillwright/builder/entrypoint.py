"""Builder entrypoint - main entry function for the skillwright build command."""

import asyncio
from pathlib import Path

from skillwright.builder.config import load_builder_config, merge_cli_overrides
from skillwright.builder.loop import BuildResult, build_loop
from skillwright.emitters.implementation import Implementer, make_implementer


def build_skill(
    name: str,
    task: str,
    *,
    output_dir: Path | None = None,
    max_attempts: int | None = None,
    implementer: str | None = None,
    force: bool = False,
    project_root: Path | None = None,
    implementer_override: Implementer | None = None,
) -> BuildResult:
    """Build a skill end to end.

    Configuration comes from .skillwright/config.yaml under ``project_root``
    with CLI overrides applied on top.

    Args:
        name: Skill name
        task: Task description
        output_dir: Parent directory for the skill (defaults to cwd)
        max_attempts: CLI override for the attempt budget (1-3)
        implementer: CLI override for the implementer kind
        force: Replace builder-owned files in an existing skill directory
        project_root: Directory holding .skillwright/ (defaults to cwd)
        implementer_override: Ready-made implementer, bypassing configuration

    Returns:
        BuildResult; ``exit_code()`` gives 0/1/2

    Example:
        skillwright build word-count --task "count words in a file"
        skillwright build list-ports --task "list open ports" --max-attempts 2
    """
    root = project_root or Path.cwd()
    config = load_builder_config(root)
    config = merge_cli_overrides(config, max_attempts=max_attempts, implementer=implementer)

    return asyncio.run(
        build_loop(
            name,
            task,
            output_dir or Path.cwd(),
            config,
            implementer=implementer_override or make_implementer(config.implementer),
            builds_dir=root / ".skillwright" / "builds",
            force=force,
        )
    )
