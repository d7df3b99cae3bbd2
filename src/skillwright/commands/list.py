"""List command implementation."""

from pathlib import Path

from skillwright.discovery import discover_skills
from skillwright.display import print_skill_list


def list_command(root: Path | None = None) -> None:
    root = root or Path.cwd()
    print_skill_list(discover_skills(root), root)
