"""Scaffold command implementation - write a skeleton test.sh."""

from pathlib import Path

from skillwright.core.naming import validate_skill_name
from skillwright.core.schemas import ArtifactRole, ArtifactSet
from skillwright.display import print_success
from skillwright.emitters.scaffold import default_assertions, emit_scaffold
from skillwright.exceptions import SkillAlreadyExistsError


def scaffold_command(name: str, output_dir: Path | None = None, with_defaults: bool = False) -> Path:
    """Write ``<output>/<name>/test.sh``.

    Without ``with_defaults`` the scaffold has no assertions and reports
    ``0/0 passed``. An existing test.sh is never overwritten.

    Returns:
        Path of the written scaffold
    """
    validate_skill_name(name)
    skill_dir = (output_dir or Path.cwd()) / name
    path = skill_dir / ArtifactRole.TEST_SCAFFOLD.filename
    if path.exists():
        raise SkillAlreadyExistsError(str(path))

    artifacts = ArtifactSet()
    assertions = default_assertions() if with_defaults else []
    artifacts.set(ArtifactRole.TEST_SCAFFOLD, emit_scaffold(name, assertions=assertions))
    artifacts.seal_scaffold()
    artifacts.write_to(skill_dir)

    print_success(f"Wrote {path} ({len(assertions)} assertions)")
    return path
