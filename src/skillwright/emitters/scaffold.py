"""Test-scaffold emitter.

Renders ``test.sh``: a self-contained bash harness with two assertion
helpers (substring containment and exit code), four labeled assertion
groups and a ``<passed>/<total> passed`` summary. Groups without
assertions keep commented-out examples, so a scaffold with nothing filled
in reports ``0/0 passed`` and exits 0.
"""

import shlex
from collections.abc import Iterable, Sequence

from skillwright.core.naming import validate_skill_name
from skillwright.core.schemas import (
    TMP_PREFIX,
    Assertion,
    AssertionGroup,
    AssertionKind,
    Fixture,
    Language,
    LanguageDecision,
)
from skillwright.emitters.template_render import render_scaffold_template

UNKNOWN_OPTION = "--definitely-not-an-option"

PLACEHOLDER_EXAMPLES = {
    AssertionGroup.HAPPY_PATH: (
        'assert_contains "prints the result" "expected output" "$("$SKILL" input.txt 2>&1)"',
        'assert_exit_code "valid input exits 0" 0 "$SKILL" input.txt',
    ),
    AssertionGroup.EDGE_CASES: (
        'assert_contains "empty input is handled" "0" "$("$SKILL" "$TMP_DIR"/empty.txt 2>&1)"',
    ),
    AssertionGroup.ERROR_HANDLING: (
        'assert_exit_code "missing file exits 1" 1 "$SKILL" "$TMP_DIR"/missing.txt',
        'assert_contains "missing file reports an error" "Error" "$("$SKILL" "$TMP_DIR"/missing.txt 2>&1)"',
    ),
    AssertionGroup.HELP: (
        'assert_exit_code "--help exits 0" 0 "$SKILL" --help',
        'assert_contains "--help prints usage" "Usage:" "$("$SKILL" --help 2>&1)"',
    ),
}


def default_assertions() -> list[Assertion]:
    """The help and error contract every generated skill must meet, whatever its language."""
    return [
        Assertion.exit_code("--help exits 0", 0, "--help", group=AssertionGroup.HELP),
        Assertion.contains(
            "--help prints usage", "Usage:", "--help", group=AssertionGroup.HELP
        ),
        Assertion.contains("-h prints usage", "Usage:", "-h", group=AssertionGroup.HELP),
        Assertion.exit_code(
            "unknown option exits 1",
            1,
            UNKNOWN_OPTION,
            group=AssertionGroup.ERROR_HANDLING,
        ),
        Assertion.contains(
            "unknown option reports an error",
            "Error",
            UNKNOWN_OPTION,
            group=AssertionGroup.ERROR_HANDLING,
        ),
    ]


def render_arg(arg: str) -> str:
    """Quote one argument for bash; ``{tmp}/x`` becomes ``"$TMP_DIR"/x``."""
    if arg.startswith(TMP_PREFIX):
        return '"$TMP_DIR"/' + shlex.quote(arg[len(TMP_PREFIX):])
    return shlex.quote(arg)


def render_assertion(assertion: Assertion) -> str:
    """Render one assertion as a line of bash calling the scaffold helpers."""
    args = " ".join(render_arg(a) for a in assertion.args)
    command = f'"$SKILL" {args}'.rstrip()
    description = shlex.quote(assertion.description)

    if assertion.kind == AssertionKind.CONTAINS:
        expected = shlex.quote(str(assertion.expected))
        return f'assert_contains {description} {expected} "$({command} 2>&1)"'
    return f"assert_exit_code {description} {int(assertion.expected)} {command}"


def render_fixture(fixture: Fixture) -> str:
    return f"printf '%s' {shlex.quote(fixture.content)} > \"$TMP_DIR\"/{shlex.quote(fixture.name)}"


def group_assertions(assertions: Iterable[Assertion]) -> dict[AssertionGroup, list[Assertion]]:
    """Bucket assertions by group, keeping declaration order inside each group."""
    grouped: dict[AssertionGroup, list[Assertion]] = {group: [] for group in AssertionGroup}
    for assertion in assertions:
        grouped[assertion.group].append(assertion)
    return grouped


def emit_scaffold(
    name: str,
    decision: LanguageDecision | None = None,
    assertions: Sequence[Assertion] = (),
    fixtures: Sequence[Fixture] = (),
) -> str:
    """Render the test scaffold for a skill.

    Args:
        name: Skill name (used in comments and the temp dir prefix)
        decision: Planner decision; selects which files the header names
        assertions: Assertions to render; none yields a neutral skeleton
        fixtures: Files written into the scaffold's temp dir first

    Returns:
        Content of test.sh

    Raises:
        InvalidSkillNameError: If the name breaks the naming rules
    """
    validate_skill_name(name)
    grouped = group_assertions(assertions)
    groups = [
        {
            "label": group.label,
            "lines": [render_assertion(a) for a in grouped[group]],
            "examples": PLACEHOLDER_EXAMPLES[group],
        }
        for group in AssertionGroup
    ]

    if decision is not None and decision.language == Language.PYTHON:
        implementation_files = "run.sh and skill.py"
    else:
        implementation_files = "run.sh"

    return render_scaffold_template(
        "test.sh.j2",
        name=name,
        implementation_files=implementation_files,
        fixtures=[render_fixture(f) for f in fixtures],
        groups=groups,
    )
