"""End-to-end checks: every recipe's implementation passes its own scaffold."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from skillwright.recipes import (
    DISK_USAGE,
    GENERIC_PYTHON,
    GENERIC_SHELL,
    JSON_FORMAT,
    LINE_COUNT,
    LIST_PORTS,
    WORD_COUNT,
)

PORTABLE_RECIPES = [WORD_COUNT, LINE_COUNT, JSON_FORMAT, GENERIC_PYTHON, GENERIC_SHELL]


def run(command: list[str], cwd: Path) -> subprocess.CompletedProcess:
    env = {**os.environ, "PYTHON": sys.executable}
    return subprocess.run(command, cwd=cwd, env=env, capture_output=True, text=True, timeout=60)


@pytest.mark.parametrize("recipe", PORTABLE_RECIPES, ids=lambda r: r.name)
def test_recipe_passes_its_scaffold(recipe, make_skill, bash):
    skill_dir = make_skill(recipe)

    completed = run(["bash", "test.sh"], skill_dir)

    assert completed.returncode == 0, completed.stdout
    assert "FAIL:" not in completed.stdout
    total = 5 + len(recipe.assertions)
    assert completed.stdout.strip().endswith(f"{total}/{total} passed")


@pytest.mark.skipif(not sys.platform.startswith(("linux", "darwin")), reason="needs Linux or macOS")
@pytest.mark.parametrize("recipe", [LIST_PORTS, DISK_USAGE], ids=lambda r: r.name)
def test_platform_recipe_passes_its_scaffold(recipe, make_skill, bash):
    skill_dir = make_skill(recipe, platform_branches=True)

    completed = run(["bash", "test.sh"], skill_dir)

    assert completed.returncode == 0, completed.stdout


def test_word_count_prints_count(make_skill, bash, tmp_path: Path):
    """Test the generated word counter on a real file."""
    skill_dir = make_skill(WORD_COUNT)
    sample = tmp_path / "sample.txt"
    sample.write_text("one two three\n")

    completed = run(["./run.sh", str(sample)], skill_dir)

    assert completed.returncode == 0
    assert completed.stdout.strip() == "3"


def test_help_goes_to_stderr_and_exits_zero(make_skill, bash):
    skill_dir = make_skill(WORD_COUNT)

    completed = run(["./run.sh", "--help"], skill_dir)

    assert completed.returncode == 0
    assert "Usage: word-count" in completed.stderr
    assert completed.stdout == ""


def test_missing_file_reports_error(make_skill, bash, tmp_path: Path):
    skill_dir = make_skill(WORD_COUNT)

    completed = run(["./run.sh", str(tmp_path / "missing.txt")], skill_dir)

    assert completed.returncode == 1
    assert completed.stderr.startswith("Error:")


def test_json_format_indents(make_skill, bash, tmp_path: Path):
    skill_dir = make_skill(JSON_FORMAT)
    doc = tmp_path / "doc.json"
    doc.write_text('{"a": [1, 2]}')

    completed = run(["./run.sh", str(doc)], skill_dir)

    assert completed.returncode == 0
    assert completed.stdout == '{\n  "a": [\n    1,\n    2\n  ]\n}\n'


def test_no_arguments_is_an_error(make_skill, bash):
    skill_dir = make_skill(WORD_COUNT)

    completed = run(["./run.sh"], skill_dir)

    assert completed.returncode != 0
    assert completed.stderr.strip()


def test_scaffold_run_is_repeatable(make_skill, bash):
    """Test two runs on an unchanged implementation give the same counts."""
    skill_dir = make_skill(LINE_COUNT)

    first = run(["bash", "test.sh"], skill_dir)
    second = run(["bash", "test.sh"], skill_dir)

    assert first.returncode == second.returncode == 0
    assert first.stdout.splitlines()[-1] == second.stdout.splitlines()[-1]
