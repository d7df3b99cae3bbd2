"""Template rendering utilities for generated skill files."""

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=1)
def _get_environment() -> Environment:
    """Get Jinja2 environment configured for shell and Python templates."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


def render_scaffold_template(template_name: str, **context: Any) -> str:
    """Render a test scaffold template.

    Args:
        template_name: Template filename (e.g., "test.sh.j2")
        **context: Template variables

    Returns:
        Rendered template content
    """
    template = _get_environment().get_template(f"scaffold/{template_name}")
    return template.render(**context)  # type: ignore[no-any-return]


def render_impl_template(template_name: str, **context: Any) -> str:
    """Render an implementation template.

    Args:
        template_name: Template filename (e.g., "word_count.py.j2")
        **context: Template variables

    Returns:
        Rendered template content
    """
    template = _get_environment().get_template(f"impl/{template_name}")
    return template.render(**context)  # type: ignore[no-any-return]
