"""Markdown generation utilities for skill documentation.

Builder classes assemble documents piece by piece; escape helpers keep
user-provided text (task descriptions, option help) from breaking tables
and code spans.
"""

from skillwright.markdown.builders import CodeBlock, Document, Section, Table
from skillwright.markdown.escape import escape_inline_code, escape_pipe, escape_table_cell

__all__ = [
    "CodeBlock",
    "Document",
    "Section",
    "Table",
    "escape_inline_code",
    "escape_pipe",
    "escape_table_cell",
]
