"""Markdown escaping utilities."""

import re


def escape_pipe(text: str) -> str:
    """Escape pipe characters for table cells."""
    return text.replace("|", "\\|")


def escape_table_cell(text: str) -> str:
    """Escape content for safe use in markdown table cells.

    Collapses whitespace (including newlines) and escapes pipes.
    """
    text = re.sub(r"\s+", " ", text)
    text = escape_pipe(text)
    return text.strip()


def escape_inline_code(text: str) -> str:
    """Wrap text in a code span, widening the fence if it contains backticks."""
    if "`" not in text:
        return f"`{text}`"
    return f"`` {text} ``"
