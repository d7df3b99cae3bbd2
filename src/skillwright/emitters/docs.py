"""Doc emitter - SKILL.md, README.md and CHANGELOG.md for a tested skill.

Docs describe behavior the test scaffold has verified, so emitting them
requires a test run with zero failures.
"""

import logging
from datetime import date

from skillwright.core.schemas import (
    ArtifactRole,
    AssertionGroup,
    Language,
    LanguageDecision,
    TestRunResult,
)
from skillwright.exceptions import DocumentationBlockedError
from skillwright.markdown import CodeBlock, Document, Section, Table, escape_inline_code
from skillwright.recipes import Recipe

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 1024


def ensure_tested(result: TestRunResult) -> None:
    """Raise unless ``result`` is a clean run with at least one assertion."""
    if result.total == 0 or result.failed > 0 or result.passed != result.total or not result.all_passed:
        raise DocumentationBlockedError(result.passed, result.failed, result.total)


def one_line(text: str, limit: int = MAX_DESCRIPTION_LENGTH) -> str:
    line = " ".join(text.split())
    if len(line) <= limit:
        return line
    return line[: limit - 3] + "..."


def _purpose(task: str, decision: LanguageDecision, recipe: Recipe) -> Section:
    section = Section("Purpose")
    section.add_paragraph(f"{recipe.summary}.")
    section.add_paragraph(f"Built for the task: _{one_line(task)}_")

    if decision.language == Language.PYTHON:
        layout = (
            "Implemented in Python: `run.sh` answers `--help` and forwards every other "
            "invocation to `skill.py`."
        )
    else:
        layout = "Implemented in bash: `run.sh` holds all of the logic."
    section.add_paragraph(f"{layout} Language choice: {decision.rationale}.")

    if decision.platform_branches or recipe.platform_specific:
        section.add_paragraph(
            "Platform-specific commands are selected from `uname -s` "
            "(Linux and macOS are supported; other systems exit with an error)."
        )
    return section


def _quick_start(name: str, recipe: Recipe) -> Section:
    section = Section("Quick Start")
    code = CodeBlock("bash")
    code.add_line(f"cd {name}")
    code.add_line("./test.sh        # verify the skill on this machine")
    code.add_line("./run.sh --help  # show usage")
    if recipe.examples:
        code.add_line(recipe.examples[0][0])
    section.content.extend([code.render(), ""])
    return section


def _usage_examples(recipe: Recipe) -> Section:
    section = Section("Usage Examples")
    if not recipe.examples:
        section.add_paragraph("Run `./run.sh --help` for the full synopsis.")
        return section
    lines: list[str] = []
    for command, comment in recipe.examples:
        lines.append(f"# {comment}")
        lines.append(command)
        lines.append("")
    section.add_code_block("bash", "\n".join(lines).rstrip())
    return section


def _options(recipe: Recipe) -> Section:
    table = Table(["Option", "Description"])
    for flags, description in recipe.options:
        table.add_row(", ".join(escape_inline_code(f.strip()) for f in flags.split(",")), description)
    section = Section("Options")
    if recipe.arguments:
        section.add_paragraph(f"Arguments: {escape_inline_code(recipe.arguments)}")
    return section.add_table(table)


def _exit_codes(recipe: Recipe) -> Section:
    table = Table(["Code", "Meaning"])
    for code, meaning in recipe.exit_codes:
        table.add_row(str(code), meaning)
    return Section("Exit Codes").add_table(table)


def _validation(result: TestRunResult) -> Section:
    section = Section("Validation")
    section.add_paragraph(
        f"`./test.sh` passes {result.summary()} assertions. The scaffold is the contract: "
        "change the implementation, never the tests."
    )
    table = Table(["Group", "Passed", "Total"])
    for group in AssertionGroup:
        outcomes = [o for o in result.outcomes if o.group == group]
        if outcomes:
            table.add_row(group.label, str(sum(o.passed for o in outcomes)), str(len(outcomes)))
    if table.rows:
        section.add_table(table)
    return section


def emit_primary_doc(
    name: str,
    task: str,
    decision: LanguageDecision,
    recipe: Recipe,
    result: TestRunResult,
    version: str = "1.0.0",
    license: str = "MIT",
) -> str:
    """Render SKILL.md with its metadata header and fixed section order."""
    doc = Document()
    doc.add_frontmatter(
        {
            "name": name,
            "description": one_line(f"{recipe.summary}. {task}"),
            "version": version,
            "license": license,
        }
    )
    doc.add_heading(name)
    for section in (
        _purpose(task, decision, recipe),
        _quick_start(name, recipe),
        _usage_examples(recipe),
        _options(recipe),
        _exit_codes(recipe),
        _validation(result),
    ):
        doc.add_section(section)
    return doc.render()


def emit_pointer_doc(name: str, recipe: Recipe) -> str:
    doc = Document()
    doc.add_heading(name)
    doc.add_paragraph(f"{recipe.summary}.")
    doc.add_paragraph(
        "See [SKILL.md](SKILL.md) for usage, options and exit codes. "
        "Run `./test.sh` to verify the skill."
    )
    return doc.render()


def emit_changelog(
    recipe: Recipe,
    decision: LanguageDecision,
    result: TestRunResult,
    version: str = "1.0.0",
    released: date | None = None,
) -> str:
    released = released or date.today()
    doc = Document()
    doc.add_heading("Changelog")
    doc.add_paragraph("All notable changes to this skill are documented here.")
    section = Section(f"[{version}] - {released.isoformat()}")
    section.add_paragraph("### Added")
    section.add_list(
        [
            f"Initial release: {recipe.summary[0].lower()}{recipe.summary[1:]}.",
            f"{decision.language.value.capitalize()} implementation, verified by test.sh "
            f"({result.summary()}).",
        ]
    )
    doc.add_section(section)
    return doc.render()


def emit_docs(
    name: str,
    task: str,
    decision: LanguageDecision,
    recipe: Recipe,
    result: TestRunResult,
    version: str = "1.0.0",
    license: str = "MIT",
    released: date | None = None,
) -> dict[ArtifactRole, str]:
    """Render all three documentation artifacts.

    Raises:
        DocumentationBlockedError: If ``result`` is not a clean, non-empty run
    """
    ensure_tested(result)
    logger.info("Writing docs for %s (%s)", name, result.summary())
    return {
        ArtifactRole.PRIMARY_DOC: emit_primary_doc(
            name, task, decision, recipe, result, version=version, license=license
        ),
        ArtifactRole.POINTER_DOC: emit_pointer_doc(name, recipe),
        ArtifactRole.CHANGELOG: emit_changelog(
            recipe, decision, result, version=version, released=released
        ),
    }
