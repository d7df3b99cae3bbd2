"""Skill directory validator.

Checks a generated skill for the expected file set, the size ceiling,
executable scripts and a complete SKILL.md header.
"""

from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console

from skillwright.core.naming import check_skill_name
from skillwright.core.schemas import DOC_ROLES, MAX_ARTIFACT_BYTES, ArtifactRole
from skillwright.discovery import FrontmatterError, read_frontmatter
from skillwright.emitters.docs import MAX_DESCRIPTION_LENGTH

REQUIRED_FRONTMATTER = ("name", "description", "version", "license")
REQUIRED_SECTIONS = ("Purpose", "Quick Start", "Usage Examples", "Options", "Exit Codes", "Validation")


class ValidationResult(BaseModel):
    """Result of skill validation.

    Attributes:
        success: Whether validation passed
        errors: List of errors that must be fixed
        warnings: List of warnings that should be addressed
    """

    success: bool = Field(..., description="Whether validation passed")
    errors: list[str] = Field(default_factory=list, description="Errors that must be fixed")
    warnings: list[str] = Field(
        default_factory=list, description="Warnings that should be addressed"
    )

    def format(self) -> str:
        """Format validation result for display with Rich."""
        lines: list[str] = []

        if self.success:
            lines.append("[green]✓[/green] Validation passed")
        else:
            lines.append("[red]✗[/red] Validation failed")

        if self.errors:
            lines.append("\n[red bold]Errors:[/red bold]")
            for error in self.errors:
                lines.append(f"  [red]•[/red] {error}")

        if self.warnings:
            lines.append("\n[yellow bold]Warnings:[/yellow bold]")
            for warning in self.warnings:
                lines.append(f"  [yellow]•[/yellow] {warning}")

        return "\n".join(lines)

    def print(self, console: Console | None = None) -> None:
        (console or Console()).print(self.format())


class SkillValidator:
    """Validates a generated skill directory."""

    def __init__(self, max_bytes: int = MAX_ARTIFACT_BYTES) -> None:
        self.max_bytes = max_bytes

    def validate(self, skill_dir: Path) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        if not skill_dir.is_dir():
            return ValidationResult(success=False, errors=[f"Not a directory: {skill_dir}"])

        # File set
        required = [ArtifactRole.TEST_SCAFFOLD, ArtifactRole.ENTRY_POINT]
        required += [role for role in ArtifactRole if role in DOC_ROLES]
        for role in required:
            if not (skill_dir / role.filename).exists():
                errors.append(f"Missing {role.filename}")

        # Size ceiling
        for role in ArtifactRole:
            path = skill_dir / role.filename
            if path.exists() and path.stat().st_size > self.max_bytes:
                errors.append(
                    f"{role.filename} is {path.stat().st_size} bytes, limit is {self.max_bytes}"
                )

        for role in ArtifactRole:
            path = skill_dir / role.filename
            if role.executable and path.exists() and not path.stat().st_mode & 0o111:
                warnings.append(f"{role.filename} should be executable (chmod +x {role.filename})")

        primary = skill_dir / ArtifactRole.PRIMARY_DOC.filename
        if primary.exists():
            self._validate_primary_doc(primary, skill_dir.name, errors, warnings)

        return ValidationResult(success=not errors, errors=errors, warnings=warnings)

    def _validate_primary_doc(
        self, path: Path, dir_name: str, errors: list[str], warnings: list[str]
    ) -> None:
        content = path.read_text(encoding="utf-8")
        try:
            frontmatter = read_frontmatter(content)
        except FrontmatterError as e:
            errors.append(f"SKILL.md: {e}")
            return

        for key in REQUIRED_FRONTMATTER:
            if not frontmatter.get(key):
                errors.append(f"SKILL.md: missing required field: {key}")

        name = frontmatter.get("name")
        if name:
            valid, reason = check_skill_name(str(name))
            if not valid:
                errors.append(f"SKILL.md: {reason}")
            if name != dir_name:
                warnings.append(f"Name '{name}' does not match directory '{dir_name}'")

        description = str(frontmatter.get("description") or "")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            errors.append(
                f"SKILL.md: description exceeds {MAX_DESCRIPTION_LENGTH} characters ({len(description)})"
            )

        for section in REQUIRED_SECTIONS:
            if f"\n## {section}\n" not in content:
                warnings.append(f"SKILL.md: missing section '{section}'")


def validate_skill(skill_dir: Path, max_bytes: int = MAX_ARTIFACT_BYTES) -> ValidationResult:
    return SkillValidator(max_bytes=max_bytes).validate(skill_dir)
