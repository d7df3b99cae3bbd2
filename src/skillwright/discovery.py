"""Skill discovery.

Finds generated skills under a directory by their SKILL.md files and reads
the metadata header of each.
"""

import logging
from pathlib import Path
from typing import Any, NamedTuple

import yaml

from skillwright.core.schemas import ArtifactRole

logger = logging.getLogger(__name__)


class FrontmatterError(ValueError):
    """SKILL.md has no parseable metadata header."""


def read_frontmatter(content: str) -> dict[str, Any]:
    """Parse the YAML block between the leading ``---`` fences.

    Raises:
        FrontmatterError: If the block is missing or is not a YAML mapping
    """
    if not content.startswith("---\n"):
        raise FrontmatterError("missing frontmatter (---)")

    parts = content.split("---\n", 2)
    if len(parts) < 3:
        raise FrontmatterError("unterminated frontmatter")

    try:
        data = yaml.safe_load(parts[1])
    except yaml.YAMLError as e:
        raise FrontmatterError(f"invalid YAML frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise FrontmatterError("frontmatter is not a mapping")
    return data


class SkillInfo(NamedTuple):
    """A generated skill found on disk."""

    name: str
    description: str
    version: str
    path: Path

    @property
    def has_logic_module(self) -> bool:
        return (self.path / ArtifactRole.LOGIC_MODULE.filename).exists()


def discover_skills(root: Path | None = None) -> list[SkillInfo]:
    """Find skills below ``root`` (defaults to cwd), sorted by name.

    Directories whose SKILL.md lacks a valid header are skipped with a
    warning.
    """
    root = root or Path.cwd()
    if not root.is_dir():
        return []

    skills: list[SkillInfo] = []
    for skill_file in sorted(root.rglob(ArtifactRole.PRIMARY_DOC.filename)):
        try:
            frontmatter = read_frontmatter(skill_file.read_text(encoding="utf-8"))
        except (OSError, FrontmatterError) as e:
            logger.warning("Skipping %s: %s", skill_file, e)
            continue

        if "name" not in frontmatter:
            logger.warning("%s missing 'name' in frontmatter", skill_file)
            continue

        skills.append(
            SkillInfo(
                name=str(frontmatter["name"]),
                description=str(frontmatter.get("description", "")),
                version=str(frontmatter.get("version", "-")),
                path=skill_file.parent,
            )
        )

    skills.sort(key=lambda s: s.name)
    return skills
