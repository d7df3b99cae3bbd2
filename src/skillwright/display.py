"""Rich display utilities for the skillwright CLI."""

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from skillwright.core.schemas import LanguageDecision, TestRunResult
from skillwright.discovery import SkillInfo
from skillwright.recipes import Recipe

if TYPE_CHECKING:
    from skillwright.builder.loop import BuildResult

console = Console()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]✗[/] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]⚠[/] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[bold blue]ℹ[/] {message}")


def print_decision(task: str, decision: LanguageDecision, recipe: Recipe) -> None:
    """Print the planner's decision and the recipe it selects."""
    keywords = ", ".join(decision.matched_keywords) or "-"
    console.print(
        Panel(
            f"[bold]Task:[/] {task}\n"
            f"[bold]Language:[/] [cyan]{decision.language.value}[/]\n"
            f"[bold]Rationale:[/] {decision.rationale}\n"
            f"[bold]Platform branches:[/] {'yes' if decision.platform_branches else 'no'}\n"
            f"[bold]Keywords:[/] {keywords}\n"
            f"[bold]Recipe:[/] {recipe.name} [dim]({recipe.summary})[/]",
            title="[bold]Plan[/]",
            border_style="blue",
        )
    )


def print_test_trace(result: TestRunResult) -> None:
    """Print one row per assertion, then the summary line."""
    if result.outcomes:
        table = Table(title="Test scaffold")
        table.add_column("Group", style="cyan")
        table.add_column("Assertion")
        table.add_column("Result")

        for outcome in result.outcomes:
            table.add_row(
                outcome.group.label if outcome.group else "-",
                outcome.description,
                "[green]PASS[/]" if outcome.passed else "[red]FAIL[/]",
            )
        console.print(table)

    for outcome in result.failures:
        if outcome.detail:
            console.print(f"[bold red]{outcome.description}[/]")
            console.print(f"[dim]{outcome.detail}[/]", highlight=False)

    color = "green" if result.all_passed else "red"
    console.print(
        f"[bold {color}]{result.summary()}[/] "
        f"[dim](exit {result.exit_code}, {result.duration_seconds:.2f}s)[/]"
    )


def print_build_result(result: "BuildResult") -> None:
    """Print the outcome panel for a build."""
    colors = {"success": "green", "blocked": "yellow", "failed": "red"}
    color = colors.get(result.status, "red")
    lines = [
        f"[bold]Status:[/] [{color}]{result.status}[/]",
        f"[bold]Skill:[/] {result.skill_dir}",
        f"[bold]Build ID:[/] {result.build_id}",
        f"[bold]Attempts:[/] {result.attempts}",
    ]
    if result.decision is not None:
        lines.append(f"[bold]Language:[/] {result.decision.language.value}")
    if result.message:
        lines.append(f"[bold]Result:[/] {result.message}")
    if result.status == "success":
        lines.append("")
        lines.append("[dim]Next steps:[/]")
        lines.append(f"  1. Run [cyan]{result.skill_dir}/test.sh[/] to re-verify")
        lines.append(f"  2. Read [cyan]{result.skill_dir}/SKILL.md[/]")

    console.print()
    console.print(Panel("\n".join(lines), title="[bold]Build[/]", border_style=color))


def print_skill_list(skills: list[SkillInfo], root: Path) -> None:
    """Print a table of skills."""
    if not skills:
        print_info(f"No skills found in {root}. Build one with [cyan]skillwright build <name> --task ...[/]")
        return

    table = Table(title="Skills")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Language")
    table.add_column("Description")

    for skill in skills:
        description = skill.description
        if len(description) > 60:
            description = description[:57] + "..."
        table.add_row(
            skill.name,
            skill.version,
            "python" if skill.has_logic_module else "bash",
            description,
        )

    console.print(table)
