"""Tests for the doc emitter."""

from datetime import date

import pytest

from skillwright.core.schemas import ArtifactRole, TestRunResult
from skillwright.discovery import read_frontmatter
from skillwright.emitters.docs import emit_docs, ensure_tested, one_line
from skillwright.exceptions import DocumentationBlockedError
from skillwright.recipes import LIST_PORTS, WORD_COUNT


def test_docs_blocked_on_failures(python_decision, failing_result):
    """Test no docs are produced while any assertion fails."""
    with pytest.raises(DocumentationBlockedError) as exc_info:
        emit_docs("word-count", "count words", python_decision, WORD_COUNT, failing_result)

    assert exc_info.value.failed == 1
    assert exc_info.value.total == 2


def test_docs_blocked_on_empty_run(python_decision):
    """Test a 0/0 run is not enough to document a skill."""
    with pytest.raises(DocumentationBlockedError):
        emit_docs("word-count", "count words", python_decision, WORD_COUNT, TestRunResult())


def test_docs_blocked_on_nonzero_exit():
    with pytest.raises(DocumentationBlockedError):
        ensure_tested(TestRunResult(passed=3, failed=0, total=3, exit_code=1))


def test_primary_doc_frontmatter_and_section_order(python_decision, passing_result):
    docs = emit_docs(
        "word-count",
        "count words in a file",
        python_decision,
        WORD_COUNT,
        passing_result,
        version="2.0.0",
        license="Apache-2.0",
    )

    assert set(docs) == {ArtifactRole.PRIMARY_DOC, ArtifactRole.POINTER_DOC, ArtifactRole.CHANGELOG}

    primary = docs[ArtifactRole.PRIMARY_DOC]
    frontmatter = read_frontmatter(primary)
    assert frontmatter["name"] == "word-count"
    assert frontmatter["version"] == "2.0.0"
    assert frontmatter["license"] == "Apache-2.0"
    assert "count words in a file" in frontmatter["description"]

    headings = [line for line in primary.splitlines() if line.startswith("## ")]
    assert headings == [
        "## Purpose",
        "## Quick Start",
        "## Usage Examples",
        "## Options",
        "## Exit Codes",
        "## Validation",
    ]


def test_primary_doc_tables(python_decision, passing_result):
    primary = emit_docs(
        "word-count", "count words", python_decision, WORD_COUNT, passing_result
    )[ArtifactRole.PRIMARY_DOC]

    assert "| Option | Description |" in primary
    assert "| `-h`, `--help` |" in primary
    assert "| Code | Meaning |" in primary
    assert "| 0 | Success (including --help) |" in primary
    assert "2/2 passed" in primary
    assert "| Happy path | 1 | 1 |" in primary
    assert "skill.py" in primary


def test_platform_note_for_platform_skills(bash_decision, passing_result):
    primary = emit_docs(
        "list-ports", "list open ports", bash_decision, LIST_PORTS, passing_result
    )[ArtifactRole.PRIMARY_DOC]

    assert "uname -s" in primary
    assert "`--dry-run`" in primary


def test_pointer_doc_and_changelog(python_decision, passing_result):
    docs = emit_docs(
        "word-count",
        "count words",
        python_decision,
        WORD_COUNT,
        passing_result,
        version="1.2.3",
        released=date(2026, 10, 19),
    )

    readme = docs[ArtifactRole.POINTER_DOC]
    assert readme.startswith("# word-count\n")
    assert "[SKILL.md](SKILL.md)" in readme

    changelog = docs[ArtifactRole.CHANGELOG]
    assert "## [1.2.3] - 2026-10-19" in changelog
    assert "2/2 passed" in changelog


def test_one_line():
    assert one_line("a\n  b\tc") == "a b c"
    assert one_line("x" * 20, limit=10) == "xxxxxxx..."
