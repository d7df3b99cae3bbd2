"""Skill name rules."""

import re

from skillwright.exceptions import InvalidSkillNameError

MAX_NAME_LENGTH = 64
NAME_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def check_skill_name(name: str) -> tuple[bool, str]:
    """Check a skill name; returns (valid, reason)."""
    if not name:
        return False, "name is empty"
    if len(name) > MAX_NAME_LENGTH:
        return False, f"name exceeds {MAX_NAME_LENGTH} characters"
    if name.startswith("-") or name.endswith("-"):
        return False, "name cannot start or end with a hyphen"
    if "--" in name:
        return False, "name cannot contain consecutive hyphens"
    if not NAME_RE.match(name):
        return False, "name must be lowercase letters, digits and single hyphens"
    return True, ""


def validate_skill_name(name: str) -> str:
    """Return ``name`` unchanged or raise InvalidSkillNameError."""
    valid, reason = check_skill_name(name)
    if not valid:
        raise InvalidSkillNameError(name, reason)
    return name
