"""Init command implementation."""

from pathlib import Path

from skillwright.builder.config import config_path_for, save_example_builder_config
from skillwright.display import console, print_info, print_success


def init_command(project_root: Path | None = None) -> None:
    """Write an example .skillwright/config.yaml unless one exists."""
    root = project_root or Path.cwd()
    config_path = config_path_for(root)

    if config_path.exists():
        print_info(f"skillwright is already initialized ({config_path})")
        return

    save_example_builder_config(config_path)
    print_success(f"Wrote {config_path}")
    console.print()
    console.print("[bold]Next steps:[/]")
    console.print('  1. Run [cyan]skillwright plan "<task>"[/] to preview the language choice')
    console.print('  2. Run [cyan]skillwright build <name> --task "<task>"[/] to build a skill')
