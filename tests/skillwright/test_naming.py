"""Tests for skill name rules."""

import pytest

from skillwright.core.naming import check_skill_name, validate_skill_name
from skillwright.exceptions import InvalidSkillNameError


@pytest.mark.parametrize("name", ["word-count", "a", "tool2", "list-open-ports", "x" * 64])
def test_valid_names(name):
    assert validate_skill_name(name) == name


@pytest.mark.parametrize(
    "name, reason",
    [
        ("", "empty"),
        ("x" * 65, "64"),
        ("-lead", "hyphen"),
        ("trail-", "hyphen"),
        ("double--hyphen", "consecutive"),
        ("Upper", "lowercase"),
        ("under_score", "lowercase"),
        ("with space", "lowercase"),
    ],
)
def test_invalid_names(name, reason):
    valid, message = check_skill_name(name)
    assert not valid
    assert reason in message

    with pytest.raises(InvalidSkillNameError) as exc_info:
        validate_skill_name(name)
    assert exc_info.value.name == name
