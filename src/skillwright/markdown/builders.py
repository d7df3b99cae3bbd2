"""Markdown builder classes for structured content generation."""

from __future__ import annotations

from typing import Any

import yaml

from skillwright.markdown.escape import escape_table_cell


class Table:
    """Builder for markdown tables.

    Example:
        table = Table(["Code", "Meaning"])
        table.add_row("0", "Success")
        print(table.render())
    """

    def __init__(self, headers: list[str]) -> None:
        self.headers = headers
        self.rows: list[list[str]] = []

    def add_row(self, *values: str) -> Table:
        """Add a row to the table."""
        if len(values) != len(self.headers):
            raise ValueError(f"Row has {len(values)} values, expected {len(self.headers)}")
        self.rows.append([escape_table_cell(str(v)) for v in values])
        return self

    def render(self) -> str:
        """Render the table to markdown."""
        if not self.headers:
            return ""

        lines = ["| " + " | ".join(self.headers) + " |"]
        lines.append("| " + " | ".join("-" * len(h) for h in self.headers) + " |")
        for row in self.rows:
            lines.append("| " + " | ".join(row) + " |")
        return "\n".join(lines)


class CodeBlock:
    """Builder for fenced code blocks."""

    def __init__(self, language: str = "") -> None:
        self.language = language
        self.lines: list[str] = []

    def add_line(self, line: str) -> CodeBlock:
        self.lines.append(line)
        return self

    def set_content(self, content: str) -> CodeBlock:
        self.lines = content.split("\n")
        return self

    def render(self) -> str:
        content = "\n".join(self.lines)
        return f"```{self.language}\n{content}\n```"


class Section:
    """Builder for markdown sections with heading and content.

    Example:
        section = Section("Quick Start", level=2)
        section.add_paragraph("Run the test suite first.")
        section.add_code_block("bash", "./test.sh")
        print(section.render())
    """

    def __init__(self, title: str, level: int = 2) -> None:
        if level < 1 or level > 6:
            raise ValueError("Heading level must be between 1 and 6")
        self.title = title
        self.level = level
        self.content: list[str] = []

    def add_paragraph(self, text: str) -> Section:
        self.content.append(text)
        self.content.append("")
        return self

    def add_code_block(self, language: str, code: str) -> Section:
        block = CodeBlock(language)
        block.set_content(code)
        self.content.append(block.render())
        self.content.append("")
        return self

    def add_table(self, table: Table) -> Section:
        self.content.append(table.render())
        self.content.append("")
        return self

    def add_list(self, items: list[str]) -> Section:
        self.content.extend(f"- {item}" for item in items)
        self.content.append("")
        return self

    def render(self) -> str:
        heading = "#" * self.level + " " + self.title
        body = "\n".join(self.content)
        return f"{heading}\n\n{body}"


class Document:
    """Builder for complete markdown documents.

    Example:
        doc = Document()
        doc.add_frontmatter({"name": "word-count", "version": "1.0.0"})
        doc.add_heading("word-count", level=1)
        doc.add_section(quick_start)
        print(doc.render())
    """

    def __init__(self) -> None:
        self.parts: list[str] = []

    def add_frontmatter(self, metadata: dict[str, Any]) -> Document:
        """Add a YAML frontmatter block. Must come first."""
        if self.parts:
            raise ValueError("Frontmatter must be the first part of a document")
        body = yaml.safe_dump(metadata, default_flow_style=False, sort_keys=False).rstrip()
        self.parts.extend(["---", body, "---", ""])
        return self

    def add_heading(self, title: str, level: int = 1) -> Document:
        self.parts.append("#" * level + " " + title)
        self.parts.append("")
        return self

    def add_paragraph(self, text: str) -> Document:
        self.parts.append(text)
        self.parts.append("")
        return self

    def add_section(self, section: Section) -> Document:
        self.parts.append(section.render())
        return self

    def render(self) -> str:
        """Render the document to markdown."""
        return "\n".join(self.parts).rstrip() + "\n"
