"""Tests for skillwright data model: assertions, fixtures and artifact sets."""

import os
import typing
from pathlib import Path

import pytest
from pydantic import ValidationError

from skillwright.core.schemas import (
    MAX_ARTIFACT_BYTES,
    ArtifactRole,
    ArtifactSet,
    Assertion,
    AssertionGroup,
    AssertionKind,
    AssertionOutcome,
    Fixture,
    Language,
    LanguageDecision,
    TestRunResult,
    content_digest,
)
from skillwright.exceptions import ArtifactError, ArtifactTooLargeError, ScaffoldSealedError


def test_assertion_constructors():
    """Test contains/exit_code helpers set kind, expected type and group."""
    contains = Assertion.contains("prints 3", "3", "{tmp}/a.txt")
    assert contains.kind == AssertionKind.CONTAINS
    assert contains.expected == "3"
    assert contains.args == ("{tmp}/a.txt",)
    assert contains.group == AssertionGroup.HAPPY_PATH

    exit_code = Assertion.exit_code("missing exits 1", 1, group=AssertionGroup.ERROR_HANDLING)
    assert exit_code.kind == AssertionKind.EXIT_CODE
    assert exit_code.expected == 1
    assert exit_code.args == ()


def test_assertion_expected_is_coerced_by_kind():
    """Test expected values follow the assertion kind."""
    assertion = Assertion(description="d", kind="exit_code", expected="2")
    assert assertion.expected == 2

    assertion = Assertion(description="d", kind="contains", expected=3)
    assert assertion.expected == "3"


def test_exit_code_assertion_rejects_text():
    with pytest.raises(ValidationError):
        Assertion(description="d", kind="exit_code", expected="zero")


def test_assertion_is_frozen():
    assertion = Assertion.contains("d", "x")
    with pytest.raises(ValidationError):
        assertion.expected = "y"


def test_group_labels_round_trip():
    """Test group order and labels used in the scaffold headers."""
    assert [g.label for g in AssertionGroup] == [
        "Happy path",
        "Edge cases",
        "Error handling",
        "Help",
    ]
    assert AssertionGroup.from_label("Error handling") == AssertionGroup.ERROR_HANDLING
    assert AssertionGroup.from_label(" help ") == AssertionGroup.HELP
    assert AssertionGroup.from_label("Unknown") is None


@pytest.mark.parametrize("name", ["../escape.txt", "dir/file.txt", "", ".."])
def test_fixture_name_must_be_plain(name):
    with pytest.raises(ValidationError):
        Fixture(name=name, content="x")


def test_artifact_role_filenames():
    assert ArtifactRole.TEST_SCAFFOLD.filename == "test.sh"
    assert ArtifactRole.LOGIC_MODULE.filename == "skill.py"
    assert ArtifactRole.from_filename("CHANGELOG.md") == ArtifactRole.CHANGELOG
    assert ArtifactRole.from_filename("notes.txt") is None
    assert ArtifactRole.ENTRY_POINT.executable
    assert not ArtifactRole.PRIMARY_DOC.executable


def test_language_decision_is_frozen():
    decision = LanguageDecision(language=Language.BASH, rationale="r")
    with pytest.raises(ValidationError):
        decision.language = Language.PYTHON


def test_artifact_size_ceiling():
    """Test every write is checked against the 100 KB ceiling."""
    artifacts = ArtifactSet()
    artifacts.set(ArtifactRole.ENTRY_POINT, "x" * MAX_ARTIFACT_BYTES)

    with pytest.raises(ArtifactTooLargeError) as exc_info:
        artifacts.set(ArtifactRole.ENTRY_POINT, "x" * (MAX_ARTIFACT_BYTES + 1))
    assert exc_info.value.filename == "run.sh"
    assert exc_info.value.limit == MAX_ARTIFACT_BYTES


def test_artifact_size_counts_utf8_bytes():
    artifacts = ArtifactSet(max_bytes=4)
    artifacts.set(ArtifactRole.PRIMARY_DOC, "éé")
    with pytest.raises(ArtifactTooLargeError):
        artifacts.set(ArtifactRole.PRIMARY_DOC, "ééé")


def test_sealed_scaffold_cannot_be_replaced():
    """Test the scaffold is immutable after sealing."""
    artifacts = ArtifactSet()
    artifacts.set(ArtifactRole.TEST_SCAFFOLD, "#!/usr/bin/env bash\n")
    digest = artifacts.seal_scaffold()

    assert artifacts.sealed
    assert digest == content_digest("#!/usr/bin/env bash\n")
    assert artifacts.seal_scaffold() == digest

    with pytest.raises(ScaffoldSealedError):
        artifacts.set(ArtifactRole.TEST_SCAFFOLD, "echo changed\n")
    with pytest.raises(ScaffoldSealedError):
        artifacts.update_implementation({ArtifactRole.TEST_SCAFFOLD: "echo changed\n"})

    assert artifacts[ArtifactRole.TEST_SCAFFOLD] == "#!/usr/bin/env bash\n"


def test_seal_requires_scaffold():
    with pytest.raises(ArtifactError):
        ArtifactSet().seal_scaffold()


def test_update_implementation_is_all_or_nothing():
    """Test a rejected update leaves earlier files untouched."""
    artifacts = ArtifactSet()
    artifacts.update_implementation({ArtifactRole.ENTRY_POINT: "v1"})

    with pytest.raises(ArtifactError):
        artifacts.update_implementation(
            {ArtifactRole.ENTRY_POINT: "v2", ArtifactRole.PRIMARY_DOC: "# doc"}
        )

    assert artifacts[ArtifactRole.ENTRY_POINT] == "v1"
    assert ArtifactRole.PRIMARY_DOC not in artifacts


def test_write_to_makes_scripts_executable(tmp_path: Path):
    artifacts = ArtifactSet()
    artifacts.set(ArtifactRole.TEST_SCAFFOLD, "#!/usr/bin/env bash\n")
    artifacts.set(ArtifactRole.ENTRY_POINT, "#!/usr/bin/env bash\n")
    artifacts.set(ArtifactRole.LOGIC_MODULE, "print('hi')\n")

    written = artifacts.write_to(tmp_path / "skill")

    assert [p.name for p in written] == ["test.sh", "run.sh", "skill.py"]
    assert os.access(tmp_path / "skill" / "test.sh", os.X_OK)
    assert os.access(tmp_path / "skill" / "run.sh", os.X_OK)
    assert not os.access(tmp_path / "skill" / "skill.py", os.X_OK)


def test_write_to_selected_roles(tmp_path: Path):
    artifacts = ArtifactSet()
    artifacts.set(ArtifactRole.TEST_SCAFFOLD, "scaffold")
    artifacts.set(ArtifactRole.ENTRY_POINT, "entry")

    artifacts.write_to(tmp_path, {ArtifactRole.ENTRY_POINT})

    assert (tmp_path / "run.sh").exists()
    assert not (tmp_path / "test.sh").exists()


def test_write_to_roles_annotation_is_the_builtin_set():
    """Test the ArtifactSet.set method does not leak into write_to annotations."""
    hints = typing.get_type_hints(ArtifactSet.write_to)

    assert hints["roles"] == (set[ArtifactRole] | None)


def test_test_run_result_properties():
    result = TestRunResult(
        passed=1,
        failed=1,
        total=2,
        outcomes=[
            AssertionOutcome(description="a", passed=True),
            AssertionOutcome(description="b", passed=False, detail="expected 3"),
        ],
        exit_code=1,
    )
    assert not result.all_passed
    assert [o.description for o in result.failures] == ["b"]
    assert result.summary() == "1/2 passed"


def test_nonzero_exit_is_never_all_passed():
    assert not TestRunResult(passed=0, failed=0, total=0, exit_code=1).all_passed
    assert TestRunResult(passed=0, failed=0, total=0, exit_code=0).all_passed
