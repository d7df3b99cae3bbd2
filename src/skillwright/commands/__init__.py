"""skillwright CLI commands.

Each command module contains the business logic for a CLI command.
The cli.py module handles typer decorators and argument parsing,
then delegates to these command functions.
"""

from skillwright.commands.build import build_command
from skillwright.commands.init import init_command
from skillwright.commands.list import list_command
from skillwright.commands.plan import plan_command
from skillwright.commands.scaffold import scaffold_command
from skillwright.commands.test import test_command
from skillwright.commands.validate import validate_command

__all__ = [
    "build_command",
    "init_command",
    "list_command",
    "plan_command",
    "scaffold_command",
    "test_command",
    "validate_command",
]
