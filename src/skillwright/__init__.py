"""skillwright - test-first authoring of small command-line skills.

Plans a language, emits a sealed bash test scaffold, implements against it
with a bounded revision loop, and writes documentation only for skills
whose every assertion passes.
"""

from skillwright.exceptions import (
    ArtifactError,
    ArtifactTooLargeError,
    ConfigurationError,
    DocumentationBlockedError,
    ImplementationError,
    InvalidSkillNameError,
    ScaffoldModifiedError,
    ScaffoldSealedError,
    SkillAlreadyExistsError,
    SkillError,
    SkillNotFoundError,
    SkillwrightError,
    TestRunError,
)

__version__ = "0.1.0"

__all__ = [
    # Base exception
    "SkillwrightError",
    # Configuration
    "ConfigurationError",
    # Skill
    "SkillError",
    "InvalidSkillNameError",
    "SkillAlreadyExistsError",
    "SkillNotFoundError",
    # Artifacts
    "ArtifactError",
    "ArtifactTooLargeError",
    "ScaffoldSealedError",
    "ScaffoldModifiedError",
    # Pipeline
    "ImplementationError",
    "TestRunError",
    "DocumentationBlockedError",
]
