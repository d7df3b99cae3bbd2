"""Tests for markdown builders and escaping."""

import pytest
import yaml

from skillwright.markdown import (
    CodeBlock,
    Document,
    Section,
    Table,
    escape_inline_code,
    escape_table_cell,
)


def test_escape_table_cell():
    assert escape_table_cell("a | b\n c") == "a \\| b c"


def test_escape_inline_code():
    assert escape_inline_code("--help") == "`--help`"
    assert escape_inline_code("a`b") == "`` a`b ``"


def test_table_render():
    table = Table(["Code", "Meaning"])
    table.add_row("0", "Success").add_row("1", "Error | usage")

    assert table.render() == (
        "| Code | Meaning |\n"
        "| ---- | ------- |\n"
        "| 0 | Success |\n"
        "| 1 | Error \\| usage |"
    )


def test_table_rejects_wrong_width():
    with pytest.raises(ValueError):
        Table(["A", "B"]).add_row("only one")


def test_code_block():
    block = CodeBlock("bash").add_line("./test.sh").add_line("./run.sh --help")
    assert block.render() == "```bash\n./test.sh\n./run.sh --help\n```"


def test_section_levels():
    with pytest.raises(ValueError):
        Section("Bad", level=7)
    section = Section("Quick Start").add_paragraph("Run it.")
    assert section.render().startswith("## Quick Start\n\nRun it.")


def test_document_frontmatter():
    doc = Document()
    doc.add_frontmatter({"name": "word-count", "version": "1.0.0"})
    doc.add_heading("word-count")
    rendered = doc.render()

    assert rendered.startswith("---\n")
    header = rendered.split("---\n")[1]
    assert yaml.safe_load(header) == {"name": "word-count", "version": "1.0.0"}
    assert "# word-count\n" in rendered
    assert rendered.endswith("\n")


def test_frontmatter_must_come_first():
    doc = Document().add_heading("title")
    with pytest.raises(ValueError):
        doc.add_frontmatter({"name": "x"})
