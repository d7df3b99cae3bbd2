<content>
"""

PYTHON_LAYOUT = (
    "run.sh is a thin dispatcher: it handles --help itself and forwards all "
    'other arguments with exec "${PYTHON:-python3}" "$SCRIPT_DIR/skill.py" "$@". '
    "The logic lives in skill.py (Python 3, standard library only)."
)
BASH_LAYOUT = (
    "run.sh holds all logic. When platform-specific commands are needed, "
    'branch on "$(uname -s)" with distinct Linux and Darwin paths.'
)


def parse_file_blocks(text: str) -> dict[str, str]:
    """Split a model reply into ``{filename: content}`` using FILE markers."""
    markers = list(FILE_MARKER_RE.finditer(text))
    files: dict[str, str] = {}
    for index, marker in enumerate(markers):
        end = markers[index + 1].start() if index + 1 < len(markers) else len(text)
        body = text[marker.end():end].strip("\n")
        fenced = FENCE_RE.match(body.strip())
        if fenced:
            body = fenced.group("body")
        files[marker.group("name")] = body.rstrip() + "\n"
    return files


class LLMImplementer:
    """Asks a language model for the implementation files.

    ``client`` is anything with ``generate(system, messages, max_tokens)``
    returning text, normally ``skillwright.builder.llm.BuilderLLM``.
    """

    name = "llm"

    def __init__(self, client: Any, max_tokens: int = 8192) -> None:
        self.client = client
        self.max_tokens = max_tokens

    def _system_prompt(self, decision: LanguageDecision) -> str:
        layout = PYTHON_LAYOUT if decision.language == Language.PYTHON else BASH_LAYOUT
        return SYSTEM_PROMPT.format(layout=layout)

    def _ask(self, context: ImplementationContext, prompt: str) -> dict[ArtifactRole, str]:
        reply = self.client.generate(
            system=self._system_prompt(context.decision),
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.max_tokens,
        )
        return self._to_artifacts(parse_file_blocks(reply), context.decision)

    def _to_artifacts(
        self, files: dict[str, str], decision: LanguageDecision
    ) -> dict[ArtifactRole, str]:
        artifacts: dict[ArtifactRole, str] = {}
        for filename, content in files.items():
            role = ArtifactRole.from_filename(filename)
            if role is None or role not in IMPLEMENTATION_ROLES:
                raise ImplementationError(
                    f"Model returned '{filename}'; only run.sh and skill.py may be written"
                )
            artifacts[role] = content

        if ArtifactRole.ENTRY_POINT not in artifacts:
            raise ImplementationError("Model reply did not contain run.sh")
        if decision.language == Language.BASH and ArtifactRole.LOGIC_MODULE in artifacts:
            raise ImplementationError("Shell skills keep their logic in run.sh, not skill.py")
        return artifacts

    def implement(self, context: ImplementationContext) -> dict[ArtifactRole, str]:
        prompt = (
            f"Skill name: {context.name}\n"
            f"Task: {context.task}\n"
            f"Language: {context.decision.language.value} ({context.decision.rationale})\n"
            f"Platform branches required: {context.decision.platform_branches}\n\n"
            f"Test scaffold (must pass):\n{context.scaffold}"
        )
        artifacts = self._ask(context, prompt)
        if context.decision.language == Language.PYTHON and ArtifactRole.LOGIC_MODULE not in artifacts:
            raise ImplementationError("Model reply did not contain skill.py")
        return artifacts

    def revise(
        self,
        context: ImplementationContext,
        current: dict[ArtifactRole, str],
        result: TestRunResult,
    ) -> dict[ArtifactRole, str]:
        failures = "\n".join(
            f"- [{o.group.label if o.group else '?'}] {o.description}: {o.detail}".rstrip(": ")
            for o in result.failures
        )
        sources = "\n".join(
            f"=== FILE: {role.filename} ===\n{content}" for role, content in current.items()
        )
        prompt = (
            f"Task: {context.task}\n"
            f"The test scaffold reported {result.summary()}. Failing assertions:\n{failures}\n\n"
            f"Test scaffold (unchangeable):\n{context.scaffold}\n\n"
            f"Current implementation:\n{sources}\n\n"
            "Return the corrected implementation files."
        )
        revised = self._ask(context, prompt)
        # Files the model left out stay as they were.
        return {**current, **revised}


def make_implementer(config: ImplementerConfig) -> Implementer:
    """Build the implementer selected in configuration."""
    if config.kind == "template":
        return TemplateImplementer()
    if config.kind == "llm":
        from skillwright.builder.llm import BuilderLLM

        return LLMImplementer(BuilderLLM(model=config.model), max_tokens=config.max_tokens)
    raise ConfigurationError(f"Unknown implementer: {config.kind}")
