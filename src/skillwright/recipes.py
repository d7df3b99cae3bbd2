"""Recipe catalog for the template implementer.

A recipe pairs a known capability with the template that implements it,
the facts the docs need (arguments, options, examples) and the
assertions that pin its behavior down in the test scaffold.
"""

from dataclasses import dataclass

from skillwright.core.schemas import Assertion, AssertionGroup, Fixture, Language
from skillwright.planner import stem, tokenize

EDGE = AssertionGroup.EDGE_CASES
ERROR = AssertionGroup.ERROR_HANDLING

HELP_OPTION = ("-h, --help", "Show usage on stderr and exit 0")
DRY_RUN_OPTION = ("-n, --dry-run", "Print the command that would run, without running it")

DEFAULT_EXIT_CODES = (
    (0, "Success (including --help)"),
    (1, "Invalid input or runtime error; a message starting with 'Error:' goes to stderr"),
)


@dataclass(frozen=True)
class Recipe:
    """A capability the template implementer knows how to build."""

    name: str
    language: Language
    summary: str
    template: str
    arguments: str = ""
    triggers: tuple[tuple[str, ...], ...] = ()
    options: tuple[tuple[str, str], ...] = (HELP_OPTION,)
    examples: tuple[tuple[str, str], ...] = ()
    fixtures: tuple[Fixture, ...] = ()
    assertions: tuple[Assertion, ...] = ()
    exit_codes: tuple[tuple[int, str], ...] = DEFAULT_EXIT_CODES
    platform_specific: bool = False

    @property
    def is_generic(self) -> bool:
        return not self.triggers

    def matches(self, tokens: set[str]) -> bool:
        """True when every word of any trigger phrase is present."""
        return any(all(stem(word) in tokens for word in trigger) for trigger in self.triggers)


_FILE_ERRORS = (
    Assertion.exit_code("missing file exits 1", 1, "{tmp}/does-not-exist.txt", group=ERROR),
    Assertion.contains(
        "missing file reports an error", "Error", "{tmp}/does-not-exist.txt", group=ERROR
    ),
    Assertion.exit_code("no arguments exits 1", 1, group=ERROR),
    Assertion.exit_code("two files exit 1", 1, "{tmp}/a.txt", "{tmp}/b.txt", group=ERROR),
)

WORD_COUNT = Recipe(
    name="word-count",
    language=Language.PYTHON,
    summary="Count the words in FILE and print the total",
    template="word_count.py.j2",
    arguments="FILE",
    triggers=(("count", "word"), ("word", "counter")),
    examples=(
        ("./run.sh notes.txt", "print the number of words in notes.txt"),
        ("./run.sh --help", "show usage"),
    ),
    fixtures=(
        Fixture(name="three_words.txt", content="one two three\n"),
        Fixture(name="empty.txt", content=""),
        Fixture(name="spaced.txt", content="  alpha\n\n\tbeta   gamma  \n"),
    ),
    assertions=(
        Assertion.contains("three-word file prints 3", "3", "{tmp}/three_words.txt"),
        Assertion.exit_code("three-word file exits 0", 0, "{tmp}/three_words.txt"),
        Assertion.contains("empty file prints 0", "0", "{tmp}/empty.txt", group=EDGE),
        Assertion.contains(
            "runs of whitespace are one separator", "3", "{tmp}/spaced.txt", group=EDGE
        ),
        *_FILE_ERRORS,
    ),
)

LINE_COUNT = Recipe(
    name="line-count",
    language=Language.PYTHON,
    summary="Count the lines in FILE and print the total",
    template="line_count.py.j2",
    arguments="FILE",
    triggers=(("count", "line"),),
    examples=(
        ("./run.sh server.log", "print the number of lines in server.log"),
        ("./run.sh --help", "show usage"),
    ),
    fixtures=(
        Fixture(name="three_lines.txt", content="first\nsecond\nthird\n"),
        Fixture(name="empty.txt", content=""),
        Fixture(name="no_newline.txt", content="only line"),
    ),
    assertions=(
        Assertion.contains("three-line file prints 3", "3", "{tmp}/three_lines.txt"),
        Assertion.exit_code("three-line file exits 0", 0, "{tmp}/three_lines.txt"),
        Assertion.contains("empty file prints 0", "0", "{tmp}/empty.txt", group=EDGE),
        Assertion.contains(
            "last line without newline still counts", "1", "{tmp}/no_newline.txt", group=EDGE
        ),
        *_FILE_ERRORS,
    ),
)

JSON_FORMAT = Recipe(
    name="json-format",
    language=Language.PYTHON,
    summary="Validate a JSON FILE and print it indented",
    template="json_format.py.j2",
    arguments="FILE",
    triggers=(
        ("json", "format"),
        ("json", "pretty"),
        ("json", "prettify"),
        ("json", "indent"),
        ("json", "validate"),
    ),
    examples=(
        ("./run.sh payload.json", "pretty-print payload.json"),
        ("./run.sh payload.json > clean.json", "write the formatted document to a file"),
    ),
    fixtures=(
        Fixture(name="doc.json", content='{"name": "demo", "tags": ["a", "b"]}'),
        Fixture(name="empty_object.json", content="{}"),
        Fixture(name="broken.json", content='{"name": '),
    ),
    assertions=(
        Assertion.contains("valid JSON is printed indented", '  "name": "demo"', "{tmp}/doc.json"),
        Assertion.exit_code("valid JSON exits 0", 0, "{tmp}/doc.json"),
        Assertion.contains("empty object round-trips", "{}", "{tmp}/empty_object.json", group=EDGE),
        Assertion.exit_code("invalid JSON exits 1", 1, "{tmp}/broken.json", group=ERROR),
        Assertion.contains(
            "invalid JSON reports an error", "Error", "{tmp}/broken.json", group=ERROR
        ),
        *_FILE_ERRORS,
    ),
)

LIST_PORTS = Recipe(
    name="list-ports",
    language=Language.BASH,
    summary="List listening TCP/UDP ports using the platform's native tool",
    template="list_ports.sh.j2",
    triggers=(("port", "list"), ("port", "open"), ("port", "listen"), ("port", "show")),
    options=(HELP_OPTION, DRY_RUN_OPTION),
    examples=(
        ("./run.sh", "list listening ports"),
        ("./run.sh --dry-run", "show which command would be used on this platform"),
    ),
    assertions=(
        Assertion.contains("dry run names the command", "Would run:", "--dry-run"),
        Assertion.exit_code("dry run exits 0", 0, "--dry-run"),
        Assertion.exit_code("short dry-run flag exits 0", 0, "-n", group=EDGE),
        Assertion.exit_code("positional argument exits 1", 1, "extra", group=ERROR),
        Assertion.contains("positional argument reports an error", "Error", "extra", group=ERROR),
    ),
    platform_specific=True,
)

DISK_USAGE = Recipe(
    name="disk-usage",
    language=Language.BASH,
    summary="Report disk usage for PATH (default: current directory)",
    template="disk_usage.sh.j2",
    arguments="[PATH]",
    triggers=(("disk", "usage"), ("disk", "space"), ("disk", "free"), ("disk", "show")),
    options=(HELP_OPTION, DRY_RUN_OPTION),
    examples=(
        ("./run.sh", "usage of the filesystem holding the current directory"),
        ("./run.sh /var/log", "usage of the filesystem holding /var/log"),
    ),
    assertions=(
        Assertion.contains("dry run names df", "Would run: df", "--dry-run"),
        Assertion.exit_code("existing path exits 0 in dry run", 0, "--dry-run", "{tmp}/"),
        Assertion.exit_code("two paths exit 1", 1, "{tmp}/", "{tmp}/", group=EDGE),
        Assertion.exit_code("missing path exits 1", 1, "{tmp}/missing-dir", group=ERROR),
        Assertion.contains(
            "missing path reports an error", "Error", "{tmp}/missing-dir", group=ERROR
        ),
    ),
    platform_specific=True,
)

GENERIC_PYTHON = Recipe(
    name="generic-python",
    language=Language.PYTHON,
    summary="Validate INPUT arguments and echo them",
    template="generic.py.j2",
    arguments="INPUT...",
    examples=(("./run.sh hello world", "echo the inputs"),),
    assertions=(
        Assertion.contains("inputs are echoed", "hello world", "hello", "world"),
        Assertion.exit_code("inputs exit 0", 0, "hello"),
        Assertion.exit_code("no arguments exits 1", 1, group=ERROR),
    ),
)

GENERIC_SHELL = Recipe(
    name="generic-shell",
    language=Language.BASH,
    summary="Validate INPUT arguments and echo them",
    template="generic.sh.j2",
    arguments="INPUT...",
    examples=(("./run.sh hello world", "echo the inputs"),),
    assertions=(
        Assertion.contains("inputs are echoed", "hello world", "hello", "world"),
        Assertion.exit_code("inputs exit 0", 0, "hello"),
        Assertion.contains("-- ends option parsing", "--literal", "--", "--literal", group=EDGE),
        Assertion.exit_code("no arguments exits 1", 1, group=ERROR),
    ),
)

RECIPES: tuple[Recipe, ...] = (
    WORD_COUNT,
    LINE_COUNT,
    JSON_FORMAT,
    LIST_PORTS,
    DISK_USAGE,
    GENERIC_PYTHON,
    GENERIC_SHELL,
)


def find_recipe(task: str, language: Language) -> Recipe:
    """Pick the first recipe for ``language`` whose trigger matches ``task``.

    Falls back to the generic recipe of that language.
    """
    tokens = set(tokenize(task))
    for recipe in RECIPES:
        if recipe.language == language and not recipe.is_generic and recipe.matches(tokens):
            return recipe
    return GENERIC_PYTHON if language == Language.PYTHON else GENERIC_SHELL


def get_recipe(name: str) -> Recipe | None:
    for recipe in RECIPES:
        if recipe.name == name:
            return recipe
    return None
