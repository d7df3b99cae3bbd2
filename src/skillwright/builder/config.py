"""Builder configuration schema and loading."""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from skillwright.core.schemas import MAX_ARTIFACT_BYTES
from skillwright.exceptions import ConfigurationError

RETRY_CEILING = 3


class BudgetConfig(BaseModel):
    """Budget limits for the implement-test loop."""

    max_attempts: int = Field(
        default=RETRY_CEILING,
        ge=1,
        le=RETRY_CEILING,
        description="Implementation attempts before the build is reported as blocked",
    )
    test_timeout_seconds: int = Field(
        default=60, gt=0, description="Timeout for one run of the test scaffold"
    )


class ArtifactsConfig(BaseModel):
    """Generated artifact settings."""

    max_bytes: int = Field(
        default=MAX_ARTIFACT_BYTES,
        gt=0,
        le=MAX_ARTIFACT_BYTES,
        description="Size ceiling for every generated file",
    )
    version: str = Field(default="1.0.0", description="Version written to SKILL.md and CHANGELOG.md")
    license: str = Field(default="MIT", description="License written to SKILL.md")


class PlannerConfig(BaseModel):
    """Extra keywords merged into the planner's built-in sets."""

    data_keywords: list[str] = Field(default_factory=list)
    shell_keywords: list[str] = Field(default_factory=list)
    platform_keywords: list[str] = Field(default_factory=list)


class ImplementerConfig(BaseModel):
    """Which implementer writes and revises the skill code."""

    kind: str = Field(default="template", pattern="^(template|llm)$")
    model: str = Field(default="claude-sonnet-4-20250514")
    max_tokens: int = Field(default=8192, gt=0)


class BuilderConfig(BaseModel):
    """Complete builder configuration.

    Loaded from .skillwright/config.yaml under 'builder:' section.
    CLI flags override config values with precedence:
    1. CLI flags (highest)
    2. .skillwright/config.yaml
    3. Defaults (lowest)
    """

    budgets: BudgetConfig = Field(default_factory=BudgetConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    implementer: ImplementerConfig = Field(default_factory=ImplementerConfig)


def config_path_for(project_root: Path) -> Path:
    return project_root / ".skillwright" / "config.yaml"


def load_builder_config(project_root: Path | None = None) -> BuilderConfig:
    """Load builder configuration from .skillwright/config.yaml.

    Args:
        project_root: Project root directory (contains .skillwright/). Defaults to cwd.

    Returns:
        BuilderConfig with values from file or defaults

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path = config_path_for(project_root)

    if not config_path.exists():
        return BuilderConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Invalid config in {config_path}: expected a mapping")

    builder_section = raw_config.get("builder") or {}

    try:
        return BuilderConfig.model_validate(builder_section)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid builder config in {config_path}: {e}") from e


def merge_cli_overrides(
    config: BuilderConfig,
    max_attempts: int | None = None,
    implementer: str | None = None,
    test_timeout_seconds: int | None = None,
) -> BuilderConfig:
    """Merge CLI flag overrides into config.

    Args:
        config: Base configuration from file
        max_attempts: CLI override for the attempt budget
        implementer: CLI override for the implementer kind
        test_timeout_seconds: CLI override for the scaffold timeout

    Returns:
        New BuilderConfig with overrides applied

    Raises:
        ConfigurationError: If an override is out of bounds
    """
    data = config.model_dump()

    if max_attempts is not None:
        data["budgets"]["max_attempts"] = max_attempts

    if test_timeout_seconds is not None:
        data["budgets"]["test_timeout_seconds"] = test_timeout_seconds

    if implementer is not None:
        data["implementer"]["kind"] = implementer

    try:
        return BuilderConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid option: {e}") from e


def save_example_builder_config(output_path: Path) -> None:
    """Save example builder configuration to file.

    Args:
        output_path: Path to write example config.yaml
    """
    example = {
        "builder": {
            "budgets": {
                "max_attempts": RETRY_CEILING,
                "test_timeout_seconds": 60,
            },
            "artifacts": {
                "max_bytes": MAX_ARTIFACT_BYTES,
                "version": "1.0.0",
                "license": "MIT",
            },
            "planner": {
                "data_keywords": [],
                "shell_keywords": [],
                "platform_keywords": [],
            },
            "implementer": {
                "kind": "template",
                "model": "claude-sonnet-4-20250514",
                "max_tokens": 8192,
            },
        }
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(example, f, default_flow_style=False, sort_keys=False)
