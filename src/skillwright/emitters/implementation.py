"""Implementation emitter.

Produces the entry point (``run.sh``) and, on the Python path, the logic
module (``skill.py``). Two implementers share one protocol:

- ``TemplateImplementer`` renders the recipe catalog (deterministic, offline)
- ``LLMImplementer`` asks a model, and feeds failing assertions back on revise

Whatever produced them, the files obey one contract: ``--help`` prints
usage on stderr and exits 0, input is validated before work, invalid input
prints ``Error: ...`` on stderr and exits 1.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol

from skillwright.builder.config import ImplementerConfig
from skillwright.core.schemas import (
    IMPLEMENTATION_ROLES,
    ArtifactRole,
    Language,
    LanguageDecision,
    TestRunResult,
)
from skillwright.emitters.template_render import render_impl_template
from skillwright.exceptions import ConfigurationError, ImplementationError
from skillwright.recipes import Recipe

logger = logging.getLogger(__name__)

FILE_MARKER_RE = re.compile(r"^=== FILE: (?P<name>\S+) ===[ \t]*$", re.MULTILINE)
FENCE_RE = re.compile(r"^```[\w+-]*\n(?P<body>.*?)\n```\s*$", re.DOTALL)


@dataclass(frozen=True)
class ImplementationContext:
    """Everything an implementer may look at. The scaffold is read-only."""

    name: str
    task: str
    decision: LanguageDecision
    recipe: Recipe
    scaffold: str


class Implementer(Protocol):
    """Protocol for implementation writers."""

    name: str

    def implement(self, context: ImplementationContext) -> dict[ArtifactRole, str]:
        """Write the first version of the implementation files."""
        ...

    def revise(
        self,
        context: ImplementationContext,
        current: dict[ArtifactRole, str],
        result: TestRunResult,
    ) -> dict[ArtifactRole, str]:
        """Return revised implementation files given the failing run."""
        ...


def build_usage(name: str, recipe: Recipe) -> str:
    """Usage text shared by run.sh, skill.py and SKILL.md."""
    synopsis = f"Usage: {name} [OPTIONS]"
    if recipe.arguments:
        synopsis += f" {recipe.arguments}"

    width = max(len(flags) for flags, _ in recipe.options) + 2
    lines = [synopsis, "", recipe.summary + ".", "", "Options:"]
    for flags, description in recipe.options:
        lines.append(f"  {flags.ljust(width)}{description}")
    return "\n".join(lines)


def emit_implementation(
    name: str,
    decision: LanguageDecision,
    recipe: Recipe,
) -> dict[ArtifactRole, str]:
    """Render the implementation files for a recipe.

    Returns:
        Entry point, plus the logic module on the Python path
    """
    context: dict[str, Any] = {
        "name": name,
        "summary": recipe.summary,
        "usage": build_usage(name, recipe),
        "platform_branches": decision.platform_branches or recipe.platform_specific,
    }

    if decision.language == Language.PYTHON:
        return {
            ArtifactRole.ENTRY_POINT: render_impl_template("python_dispatcher.sh.j2", **context),
            ArtifactRole.LOGIC_MODULE: render_impl_template(recipe.template, **context),
        }
    return {ArtifactRole.ENTRY_POINT: render_impl_template(recipe.template, **context)}


class TemplateImplementer:
    """Renders the recipe templates. Offline and deterministic."""

    name = "template"

    def implement(self, context: ImplementationContext) -> dict[ArtifactRole, str]:
        logger.info("Rendering recipe %s (%s)", context.recipe.name, context.decision.language.value)
        return emit_implementation(context.name, context.decision, context.recipe)

    def revise(
        self,
        context: ImplementationContext,
        current: dict[ArtifactRole, str],
        result: TestRunResult,
    ) -> dict[ArtifactRole, str]:
        # Templates cannot learn from failures; re-rendering restores any drift.
        logger.warning(
            "Template implementer cannot adapt to %d failing assertion(s); re-rendering %s",
            result.failed,
            context.recipe.name,
        )
        return emit_implementation(context.name, context.decision, context.recipe)


SYSTEM_PROMPT = """You write small command-line tools that must pass a fixed bash test scaffold.

Rules:
- The entry point is run.sh (bash). {layout}
- -h/--help prints text containing "Usage:" on stderr and exits 0.
- Validate all input before doing any work.
- On invalid input print a message starting with "Error:" on stderr and exit 1.
- Never edit test.sh. It is the contract.

Reply with complete files only, each introduced by a marker line: