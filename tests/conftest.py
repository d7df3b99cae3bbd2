"""Shared pytest fixtures for skillwright tests.

Provides skill-directory factories and fakes for the implementer and the
LLM client.
"""

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from skillwright.core.schemas import (
    ArtifactRole,
    ArtifactSet,
    AssertionGroup,
    AssertionOutcome,
    Language,
    LanguageDecision,
    TestRunResult,
)
from skillwright.emitters.implementation import emit_implementation
from skillwright.emitters.scaffold import default_assertions, emit_scaffold
from skillwright.recipes import Recipe


@pytest.fixture
def bash() -> str:
    """Path to bash; skips the test when bash is not installed."""
    path = shutil.which("bash")
    if path is None:
        pytest.skip("bash is not available")
    return path


@pytest.fixture
def python_decision() -> LanguageDecision:
    return LanguageDecision(language=Language.PYTHON, rationale="text handling")


@pytest.fixture
def bash_decision() -> LanguageDecision:
    return LanguageDecision(language=Language.BASH, rationale="composes system commands")


@pytest.fixture
def passing_result() -> TestRunResult:
    """A clean run with two assertions."""
    return TestRunResult(
        passed=2,
        failed=0,
        total=2,
        outcomes=[
            AssertionOutcome(group=AssertionGroup.HAPPY_PATH, description="prints 3", passed=True),
            AssertionOutcome(group=AssertionGroup.HELP, description="--help exits 0", passed=True),
        ],
        exit_code=0,
    )


@pytest.fixture
def failing_result() -> TestRunResult:
    return TestRunResult(
        passed=1,
        failed=1,
        total=2,
        outcomes=[
            AssertionOutcome(group=AssertionGroup.HAPPY_PATH, description="prints 3", passed=False),
            AssertionOutcome(group=AssertionGroup.HELP, description="--help exits 0", passed=True),
        ],
        exit_code=1,
    )


@pytest.fixture
def make_skill(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a recipe's scaffold and implementation to disk.

    Usage:
        skill_dir = make_skill(WORD_COUNT)
    """

    def _make(recipe: Recipe, name: str | None = None, platform_branches: bool = False) -> Path:
        name = name or recipe.name
        decision = LanguageDecision(
            language=recipe.language,
            rationale="test",
            platform_branches=platform_branches,
        )
        artifacts = ArtifactSet()
        artifacts.set(
            ArtifactRole.TEST_SCAFFOLD,
            emit_scaffold(
                name,
                decision,
                [*default_assertions(), *recipe.assertions],
                recipe.fixtures,
            ),
        )
        artifacts.seal_scaffold()
        artifacts.update_implementation(emit_implementation(name, decision, recipe))
        skill_dir = tmp_path / name
        artifacts.write_to(skill_dir)
        return skill_dir

    return _make


class FakeLLMClient:
    """Stands in for BuilderLLM; returns canned replies in order."""

    def __init__(self, replies: list[str]) -> None:
        self.replies = list(replies)
        self.calls: list[dict] = []

    def generate(self, system: str, messages: list, max_tokens: int = 8192) -> str:
        self.calls.append({"system": system, "messages": messages, "max_tokens": max_tokens})
        return self.replies.pop(0)


@pytest.fixture
def fake_llm() -> Callable[[list[str]], FakeLLMClient]:
    return FakeLLMClient
