"""Plan command implementation."""

from pathlib import Path

from skillwright.builder.config import load_builder_config
from skillwright.display import print_decision
from skillwright.planner import Planner
from skillwright.recipes import find_recipe


def plan_command(task: str, project_root: Path | None = None) -> None:
    """Show the language decision and recipe for a task without writing anything."""
    config = load_builder_config(project_root)
    decision = Planner(config.planner).plan(task)
    print_decision(task, decision, find_recipe(task, decision.language))
