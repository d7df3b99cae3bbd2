"""Tests for the implementation emitter and both implementers."""

import pytest

from skillwright.builder.config import ImplementerConfig
from skillwright.core.schemas import ArtifactRole, Language, LanguageDecision
from skillwright.emitters.implementation import (
    ImplementationContext,
    LLMImplementer,
    TemplateImplementer,
    build_usage,
    emit_implementation,
    make_implementer,
    parse_file_blocks,
)
from skillwright.exceptions import ConfigurationError, ImplementationError
from skillwright.recipes import GENERIC_SHELL, LIST_PORTS, RECIPES, WORD_COUNT


def context_for(recipe, decision) -> ImplementationContext:
    return ImplementationContext(
        name=recipe.name,
        task="test task",
        decision=decision,
        recipe=recipe,
        scaffold="#!/usr/bin/env bash\n",
    )


def test_build_usage():
    usage = build_usage("word-count", WORD_COUNT)

    assert usage.startswith("Usage: word-count [OPTIONS] FILE\n")
    assert "-h, --help" in usage
    assert WORD_COUNT.summary in usage


def test_python_path_emits_dispatcher_and_logic(python_decision):
    """Test the Python path: thin run.sh plus skill.py."""
    files = emit_implementation("word-count", python_decision, WORD_COUNT)

    assert set(files) == {ArtifactRole.ENTRY_POINT, ArtifactRole.LOGIC_MODULE}
    entry = files[ArtifactRole.ENTRY_POINT]
    assert entry.startswith("#!/usr/bin/env bash\n")
    assert 'exec "$PYTHON_BIN" "$SCRIPT_DIR/skill.py" "$@"' in entry
    assert "-h|--help)" in entry

    logic = files[ArtifactRole.LOGIC_MODULE]
    assert logic.startswith("#!/usr/bin/env python3\n")
    assert "len(text.split())" in logic
    assert 'print(f"Error: {message}", file=sys.stderr)' in logic


def test_shell_path_emits_entry_point_only(bash_decision):
    files = emit_implementation("greeter", bash_decision, GENERIC_SHELL)

    assert set(files) == {ArtifactRole.ENTRY_POINT}
    assert "detect_platform" not in files[ArtifactRole.ENTRY_POINT]


def test_platform_branches_emit_uname_case():
    """Test platform-dependent skills branch on uname with Linux and Darwin paths."""
    decision = LanguageDecision(
        language=Language.BASH, rationale="r", platform_branches=True
    )

    for recipe in (LIST_PORTS, GENERIC_SHELL):
        entry = emit_implementation("skill", decision, recipe)[ArtifactRole.ENTRY_POINT]
        assert '"$(uname -s)"' in entry
        assert "Linux)" in entry
        assert "Darwin)" in entry
        assert "*)" in entry


@pytest.mark.parametrize("platform_branches", [False, True])
@pytest.mark.parametrize("recipe", RECIPES, ids=lambda r: r.name)
def test_every_recipe_template_renders(recipe, platform_branches):
    """Test each catalog template compiles and renders a complete entry point."""
    decision = LanguageDecision(
        language=recipe.language, rationale="r", platform_branches=platform_branches
    )

    files = emit_implementation(recipe.name, decision, recipe)

    entry = files[ArtifactRole.ENTRY_POINT]
    assert entry.startswith("#!/usr/bin/env bash\n")
    assert entry.rstrip().splitlines()[-1].strip()
    if recipe.language == Language.PYTHON:
        assert files[ArtifactRole.LOGIC_MODULE].strip()


def test_template_implementer_is_deterministic(python_decision, failing_result):
    implementer = TemplateImplementer()
    context = context_for(WORD_COUNT, python_decision)

    first = implementer.implement(context)
    revised = implementer.revise(context, first, failing_result)

    assert first == revised


def test_parse_file_blocks():
    reply = (
        "Here you go.\n"
        "=== FILE: run.sh ===\n"
        "```bash\n"
        "#!/usr/bin/env bash\n"
        "echo hi\n"
        "```\n"
        "=== FILE: skill.py ===\n"
        "print('hi')\n"
    )

    files = parse_file_blocks(reply)

    assert files == {
        "run.sh": "#!/usr/bin/env bash\necho hi\n",
        "skill.py": "print('hi')\n",
    }


def test_parse_file_blocks_without_markers():
    assert parse_file_blocks("no files here") == {}


def test_llm_implementer_python(fake_llm, python_decision):
    """Test the model-backed implementer maps files to roles."""
    client = fake_llm(
        ["=== FILE: run.sh ===\n#!/usr/bin/env bash\n=== FILE: skill.py ===\nprint(1)\n"]
    )
    implementer = LLMImplementer(client, max_tokens=1000)

    files = implementer.implement(context_for(WORD_COUNT, python_decision))

    assert files[ArtifactRole.ENTRY_POINT] == "#!/usr/bin/env bash\n"
    assert files[ArtifactRole.LOGIC_MODULE] == "print(1)\n"
    call = client.calls[0]
    assert call["max_tokens"] == 1000
    assert "skill.py" in call["system"]
    assert "Test scaffold (must pass)" in call["messages"][0]["content"]


def test_llm_implementer_requires_logic_module_for_python(fake_llm, python_decision):
    implementer = LLMImplementer(fake_llm(["=== FILE: run.sh ===\necho\n"]))
    with pytest.raises(ImplementationError, match="skill.py"):
        implementer.implement(context_for(WORD_COUNT, python_decision))


def test_llm_implementer_rejects_scaffold_edits(fake_llm, bash_decision):
    """Test a reply touching test.sh is refused."""
    implementer = LLMImplementer(
        fake_llm(["=== FILE: run.sh ===\necho\n=== FILE: test.sh ===\nexit 0\n"])
    )
    with pytest.raises(ImplementationError, match="test.sh"):
        implementer.implement(context_for(GENERIC_SHELL, bash_decision))


def test_llm_implementer_rejects_logic_module_for_shell(fake_llm, bash_decision):
    implementer = LLMImplementer(
        fake_llm(["=== FILE: run.sh ===\necho\n=== FILE: skill.py ===\nprint(1)\n"])
    )
    with pytest.raises(ImplementationError):
        implementer.implement(context_for(GENERIC_SHELL, bash_decision))


def test_llm_revise_sends_failures_and_keeps_untouched_files(
    fake_llm, python_decision, failing_result
):
    client = fake_llm(["=== FILE: run.sh ===\nfixed\n"])
    implementer = LLMImplementer(client)
    current = {ArtifactRole.ENTRY_POINT: "old\n", ArtifactRole.LOGIC_MODULE: "logic\n"}

    revised = implementer.revise(context_for(WORD_COUNT, python_decision), current, failing_result)

    assert revised == {ArtifactRole.ENTRY_POINT: "fixed\n", ArtifactRole.LOGIC_MODULE: "logic\n"}
    prompt = client.calls[0]["messages"][0]["content"]
    assert "1/2 passed" in prompt
    assert "[Happy path] prints 3" in prompt


def test_make_implementer_template():
    assert isinstance(make_implementer(ImplementerConfig()), TemplateImplementer)


def test_make_implementer_llm_needs_api_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
        make_implementer(ImplementerConfig(kind="llm"))
