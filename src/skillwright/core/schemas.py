"""Pydantic schemas for skillwright plans, assertions and generated artifacts."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from skillwright.exceptions import ArtifactError, ArtifactTooLargeError, ScaffoldSealedError

MAX_ARTIFACT_BYTES = 100 * 1024

TMP_PREFIX = "{tmp}/"


class Language(str, Enum):
    """Implementation language chosen by the planner."""

    PYTHON = "python"
    BASH = "bash"


class LanguageDecision(BaseModel):
    """Planner output, consumed by both emitters."""

    model_config = ConfigDict(frozen=True)

    language: Language
    rationale: str
    platform_branches: bool = False
    matched_keywords: tuple[str, ...] = ()


class AssertionKind(str, Enum):
    """Kinds of checks supported by the test scaffold."""

    CONTAINS = "contains"
    EXIT_CODE = "exit_code"


class AssertionGroup(str, Enum):
    """Fixed assertion groups, declared in scaffold order."""

    HAPPY_PATH = "happy_path"
    EDGE_CASES = "edge_cases"
    ERROR_HANDLING = "error_handling"
    HELP = "help"

    @property
    def label(self) -> str:
        return _GROUP_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "AssertionGroup | None":
        for group, group_label in _GROUP_LABELS.items():
            if group_label.lower() == label.strip().lower():
                return group
        return None


_GROUP_LABELS = {
    AssertionGroup.HAPPY_PATH: "Happy path",
    AssertionGroup.EDGE_CASES: "Edge cases",
    AssertionGroup.ERROR_HANDLING: "Error handling",
    AssertionGroup.HELP: "Help",
}


class Assertion(BaseModel):
    """A single check run by the test scaffold against the entry point.

    Arguments starting with ``{tmp}/`` are resolved inside the scaffold's
    temporary directory, so file fixtures can be referenced.
    """

    model_config = ConfigDict(frozen=True)

    description: str
    kind: AssertionKind
    expected: int | str
    args: tuple[str, ...] = ()
    group: AssertionGroup = AssertionGroup.HAPPY_PATH

    @model_validator(mode="before")
    @classmethod
    def _coerce_expected(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "kind" not in data or "expected" not in data:
            return data
        kind = AssertionKind(data["kind"])
        data = dict(data)
        if kind == AssertionKind.CONTAINS:
            data["expected"] = str(data["expected"])
        else:
            try:
                data["expected"] = int(data["expected"])
            except (TypeError, ValueError) as e:
                raise ValueError(f"exit_code assertions need an integer, got {data['expected']!r}") from e
        return data

    @classmethod
    def contains(
        cls,
        description: str,
        expected: str,
        *args: str,
        group: AssertionGroup = AssertionGroup.HAPPY_PATH,
    ) -> "Assertion":
        """Output of ``entry-point args...`` (stdout and stderr) must contain ``expected``."""
        return cls(
            description=description,
            kind=AssertionKind.CONTAINS,
            expected=expected,
            args=args,
            group=group,
        )

    @classmethod
    def exit_code(
        cls,
        description: str,
        expected: int,
        *args: str,
        group: AssertionGroup = AssertionGroup.HAPPY_PATH,
    ) -> "Assertion":
        """``entry-point args...`` must exit with status ``expected``."""
        return cls(
            description=description,
            kind=AssertionKind.EXIT_CODE,
            expected=expected,
            args=args,
            group=group,
        )


class Fixture(BaseModel):
    """A file written into the scaffold's temporary directory before assertions run."""

    model_config = ConfigDict(frozen=True)

    name: str
    content: str

    @field_validator("name")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        if not re.match(r"^[A-Za-z0-9._-]+$", value) or value in (".", ".."):
            raise ValueError(f"Fixture name must be a plain file name, got {value!r}")
        return value


class ArtifactRole(str, Enum):
    """Fixed roles of the files making up a generated skill."""

    TEST_SCAFFOLD = "test_scaffold"
    ENTRY_POINT = "entry_point"
    LOGIC_MODULE = "logic_module"
    PRIMARY_DOC = "primary_doc"
    POINTER_DOC = "pointer_doc"
    CHANGELOG = "changelog"

    @property
    def filename(self) -> str:
        return _ROLE_FILENAMES[self]

    @property
    def executable(self) -> bool:
        return self in (ArtifactRole.TEST_SCAFFOLD, ArtifactRole.ENTRY_POINT)

    @classmethod
    def from_filename(cls, filename: str) -> "ArtifactRole | None":
        for role, name in _ROLE_FILENAMES.items():
            if name == filename:
                return role
        return None


_ROLE_FILENAMES = {
    ArtifactRole.TEST_SCAFFOLD: "test.sh",
    ArtifactRole.ENTRY_POINT: "run.sh",
    ArtifactRole.LOGIC_MODULE: "skill.py",
    ArtifactRole.PRIMARY_DOC: "SKILL.md",
    ArtifactRole.POINTER_DOC: "README.md",
    ArtifactRole.CHANGELOG: "CHANGELOG.md",
}

IMPLEMENTATION_ROLES = frozenset({ArtifactRole.ENTRY_POINT, ArtifactRole.LOGIC_MODULE})
DOC_ROLES = frozenset({ArtifactRole.PRIMARY_DOC, ArtifactRole.POINTER_DOC, ArtifactRole.CHANGELOG})


def content_digest(content: str) -> str:
    """SHA256 hex digest of text content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


class ArtifactSet:
    """Mapping from artifact role to file content.

    Every write is checked against the size ceiling. Once
    ``seal_scaffold()`` is called the test scaffold is frozen and
    ``update_implementation()`` is the only way to change code.

    Usage:
        artifacts = ArtifactSet()
        artifacts.set(ArtifactRole.TEST_SCAFFOLD, scaffold)
        artifacts.seal_scaffold()
        artifacts.update_implementation({ArtifactRole.ENTRY_POINT: entry})
        artifacts.write_to(skill_dir)
    """

    def __init__(self, max_bytes: int = MAX_ARTIFACT_BYTES) -> None:
        self.max_bytes = max_bytes
        self._contents: dict[ArtifactRole, str] = {}
        self._scaffold_digest: str | None = None

    def _check_size(self, role: ArtifactRole, content: str) -> None:
        size = len(content.encode("utf-8"))
        if size > self.max_bytes:
            raise ArtifactTooLargeError(role.filename, size, self.max_bytes)

    def set(self, role: ArtifactRole, content: str) -> None:
        """Store content for a role."""
        if role == ArtifactRole.TEST_SCAFFOLD and self.sealed:
            raise ScaffoldSealedError(role.filename)
        self._check_size(role, content)
        self._contents[role] = content

    def get(self, role: ArtifactRole) -> str | None:
        return self._contents.get(role)

    def __getitem__(self, role: ArtifactRole) -> str:
        return self._contents[role]

    def __contains__(self, role: object) -> bool:
        return role in self._contents

    def __len__(self) -> int:
        return len(self._contents)

    def items(self) -> Iterator[tuple[ArtifactRole, str]]:
        """Iterate (role, content) pairs in role declaration order."""
        for role in ArtifactRole:
            if role in self._contents:
                yield role, self._contents[role]

    @property
    def sealed(self) -> bool:
        return self._scaffold_digest is not None

    @property
    def scaffold_digest(self) -> str | None:
        return self._scaffold_digest

    def seal_scaffold(self) -> str:
        """Freeze the test scaffold and return its digest."""
        if ArtifactRole.TEST_SCAFFOLD not in self._contents:
            raise ArtifactError("Cannot seal: no test scaffold has been emitted")
        if self._scaffold_digest is None:
            self._scaffold_digest = content_digest(self._contents[ArtifactRole.TEST_SCAFFOLD])
        return self._scaffold_digest

    def update_implementation(self, files: Mapping[ArtifactRole, str]) -> None:
        """Replace implementation artifacts.

        All files are checked before anything is stored, so a rejected
        update leaves the set unchanged.
        """
        for role, content in files.items():
            if role == ArtifactRole.TEST_SCAFFOLD:
                raise ScaffoldSealedError(role.filename)
            if role not in IMPLEMENTATION_ROLES:
                raise ArtifactError(f"'{role.filename}' is not an implementation artifact")
            self._check_size(role, content)
        self._contents.update(files)

    def drop(self, role: ArtifactRole) -> None:
        """Remove an implementation artifact (e.g. a logic module no longer used)."""
        if role not in IMPLEMENTATION_ROLES:
            raise ArtifactError(f"'{role.filename}' is not an implementation artifact")
        self._contents.pop(role, None)

    def write_to(self, directory: Path, roles: set[ArtifactRole] | None = None) -> list[Path]:
        """Write artifacts to ``directory``; scripts are made executable.

        Args:
            directory: Skill directory (created if missing)
            roles: Only write these roles (all present roles if None)

        Returns:
            Paths written, in role order
        """
        directory.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for role, content in self.items():
            if roles is not None and role not in roles:
                continue
            path = directory / role.filename
            path.write_text(content, encoding="utf-8")
            if role.executable:
                path.chmod(0o755)
            written.append(path)
        return written


class AssertionOutcome(BaseModel):
    """Pass/fail outcome of one scaffold assertion."""

    group: AssertionGroup | None = None
    description: str
    passed: bool
    detail: str = ""


class TestRunResult(BaseModel):
    """Result of one execution of the test scaffold."""

    __test__ = False

    passed: int = 0
    failed: int = 0
    total: int = 0
    outcomes: list[AssertionOutcome] = Field(default_factory=list)
    exit_code: int = 0
    output: str = ""
    duration_seconds: float = 0.0

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and self.exit_code == 0

    @property
    def failures(self) -> list[AssertionOutcome]:
        return [o for o in self.outcomes if not o.passed]

    def summary(self) -> str:
        return f"{self.passed}/{self.total} passed"
