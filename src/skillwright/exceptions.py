"""skillwright exception hierarchy.

Provides a unified exception hierarchy for the skillwright CLI and pipeline.
This enables:
- User-friendly error messages in the CLI
- Programmatic error handling in library usage
- Clear distinction between user errors and internal bugs

Usage:
    from skillwright.exceptions import DocumentationBlockedError, SkillwrightError

    try:
        emit_docs(name, task, decision, recipe, result)
    except DocumentationBlockedError as e:
        print(f"Docs blocked: {e.failed} failing assertions")
    except SkillwrightError as e:
        print(f"skillwright error: {e}")
"""


class SkillwrightError(Exception):
    """Base exception for all skillwright errors.

    All skillwright-specific exceptions inherit from this class, allowing
    callers to catch all of them with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration Errors


class ConfigurationError(SkillwrightError):
    """Error in skillwright configuration.

    Raised when config.yaml is invalid or contains values outside
    the allowed bounds.
    """

    pass


# Skill Errors


class SkillError(SkillwrightError):
    """Base class for skill-related errors."""

    pass


class InvalidSkillNameError(SkillError):
    """Skill name does not follow the naming rules."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid skill name '{name}': {reason}")


class SkillAlreadyExistsError(SkillError):
    """Skill directory already exists.

    Raised when building into a non-empty directory without --force.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Skill already exists: {path} (use --force to overwrite)")


class SkillNotFoundError(SkillError):
    """Skill directory or its test scaffold is missing."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Skill not found: {path}")


# Artifact Errors


class ArtifactError(SkillwrightError):
    """Base class for generated-artifact errors."""

    pass


class ArtifactTooLargeError(ArtifactError):
    """Artifact content exceeds the size ceiling."""

    def __init__(self, filename: str, size: int, limit: int) -> None:
        self.filename = filename
        self.size = size
        self.limit = limit
        super().__init__(f"Artifact '{filename}' is {size} bytes, limit is {limit} bytes")


class ScaffoldSealedError(ArtifactError):
    """Attempt to replace the test scaffold after it was sealed.

    The scaffold is the contract: once emitted, only the implementation
    may change to satisfy it.
    """

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Cannot modify '{filename}': the test scaffold is sealed")


class ScaffoldModifiedError(ArtifactError):
    """Test scaffold on disk no longer matches the emitted one."""

    def __init__(self, path: str, expected: str, actual: str) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Test scaffold {path} was modified after emission "
            f"(expected: {expected[:12]}..., actual: {actual[:12]}...)"
        )


# Pipeline Errors


class ImplementationError(SkillwrightError):
    """Implementer produced unusable output."""

    pass


class TestRunError(SkillwrightError):
    """Test scaffold could not be executed at all."""

    __test__ = False


class DocumentationBlockedError(SkillwrightError):
    """Documentation requested for an implementation that has not passed its tests."""

    def __init__(self, passed: int, failed: int, total: int) -> None:
        self.passed = passed
        self.failed = failed
        self.total = total
        super().__init__(
            f"Documentation blocked: {passed}/{total} passed, {failed} failing. "
            "Docs are only written for fully tested skills."
        )
