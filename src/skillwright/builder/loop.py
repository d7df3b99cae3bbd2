"""Build loop controller - plan → scaffold → implement → test → revise → docs."""

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from skillwright.builder.config import RETRY_CEILING, BuilderConfig
from skillwright.builder.events import (
    AttemptStartedEvent,
    BuildBlockedEvent,
    BuildCompletedEvent,
    BuildFailedEvent,
    BuildStartedEvent,
    DocsEmittedEvent,
    PlanDecidedEvent,
    RevisionRequestedEvent,
    ScaffoldEmittedEvent,
    TestRunCompletedEvent,
)
from skillwright.builder.journal import BuilderJournal
from skillwright.builder.runner import run_scaffold
from skillwright.core.naming import validate_skill_name
from skillwright.core.schemas import (
    DOC_ROLES,
    IMPLEMENTATION_ROLES,
    ArtifactRole,
    ArtifactSet,
    Language,
    LanguageDecision,
    TestRunResult,
    content_digest,
)
from skillwright.emitters.docs import emit_docs
from skillwright.emitters.implementation import (
    ImplementationContext,
    Implementer,
    TemplateImplementer,
)
from skillwright.emitters.scaffold import default_assertions, emit_scaffold
from skillwright.exceptions import (
    ArtifactError,
    DocumentationBlockedError,
    ImplementationError,
    ScaffoldModifiedError,
    SkillAlreadyExistsError,
    TestRunError,
)
from skillwright.planner import Planner
from skillwright.recipes import find_recipe

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a build.

    ``status`` is "success", "failed" (an error stopped the build) or
    "blocked" (the attempt budget ran out with failing assertions).
    """

    status: str
    build_id: str
    attempts: int
    skill_dir: Path
    message: str | None = None
    decision: LanguageDecision | None = None
    result: TestRunResult | None = None

    def exit_code(self) -> int:
        """0 for success, 1 for failed, 2 for blocked."""
        if self.status == "success":
            return 0
        elif self.status == "blocked":
            return 2
        else:
            return 1


def new_build_id() -> str:
    return f"build-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:6]}"


def prepare_skill_dir(skill_dir: Path, force: bool = False) -> None:
    """Make sure ``skill_dir`` can receive a fresh build.

    With ``force`` only files the builder owns are removed; anything else
    in the directory is left alone.

    Raises:
        SkillAlreadyExistsError: If the directory is non-empty and not forced
    """
    if skill_dir.exists() and any(skill_dir.iterdir()):
        if not force:
            raise SkillAlreadyExistsError(str(skill_dir))
        for role in ArtifactRole:
            (skill_dir / role.filename).unlink(missing_ok=True)
    skill_dir.mkdir(parents=True, exist_ok=True)


def verify_scaffold(skill_dir: Path, expected_digest: str) -> None:
    """Check test.sh on disk against the digest recorded when it was sealed.

    Raises:
        ScaffoldModifiedError: If the file is missing or its content changed
    """
    path = skill_dir / ArtifactRole.TEST_SCAFFOLD.filename
    actual = content_digest(path.read_text(encoding="utf-8")) if path.exists() else "missing"
    if actual != expected_digest:
        raise ScaffoldModifiedError(str(path), expected_digest, actual)


def describe_failures(result: TestRunResult) -> list[str]:
    return [
        f"{o.group.label}: {o.description}" if o.group else o.description
        for o in result.failures
    ]


async def build_loop(
    name: str,
    task: str,
    output_dir: Path,
    config: BuilderConfig,
    implementer: Implementer | None = None,
    builds_dir: Path | None = None,
    force: bool = False,
) -> BuildResult:
    """Run the whole pipeline for one skill.

    Args:
        name: Skill name (also the directory name under ``output_dir``)
        task: Task description
        output_dir: Parent directory of the skill
        config: Builder configuration
        implementer: Writes and revises code (template implementer if None)
        builds_dir: Journal location (defaults to .skillwright/builds)
        force: Replace builder-owned files in an existing skill directory

    Returns:
        BuildResult with status and the last test run
        (a malformed implementer reply fails the build without a revision)

    Raises:
        InvalidSkillNameError: If the name breaks the naming rules
        SkillAlreadyExistsError: If the skill directory is taken
        ScaffoldModifiedError: If test.sh changed on disk after sealing
        Exception: Anything unexpected, after it is journaled as build.failed
    """
    validate_skill_name(name)
    skill_dir = output_dir / name
    prepare_skill_dir(skill_dir, force=force)

    implementer = implementer or TemplateImplementer()
    max_attempts = min(config.budgets.max_attempts, RETRY_CEILING)
    build_id = new_build_id()
    start_time = time.time()

    logger.info("Starting build: %s", build_id)
    logger.info("Skill: %s -> %s", name, skill_dir)

    with BuilderJournal(build_id, builds_dir) as journal:
        journal.write(
            BuildStartedEvent(
                build_id=build_id,
                skill_name=name,
                task=task,
                skill_dir=str(skill_dir),
                max_attempts=max_attempts,
                implementer=implementer.name,
            )
        )

        decision: LanguageDecision | None = None
        result: TestRunResult | None = None
        files: dict[ArtifactRole, str] = {}
        attempt = 0
        try:
            # Phase 1: plan
            decision = Planner(config.planner).plan(task)
            recipe = find_recipe(task, decision.language)
            journal.write(
                PlanDecidedEvent(
                    build_id=build_id,
                    language=decision.language.value,
                    rationale=decision.rationale,
                    platform_branches=decision.platform_branches,
                    recipe=recipe.name,
                )
            )
            logger.info(
                "Plan: %s via recipe %s (%s)", decision.language.value, recipe.name, decision.rationale
            )

            # Phase 2: scaffold, sealed before any implementation exists
            artifacts = ArtifactSet(max_bytes=config.artifacts.max_bytes)
            assertions = [*default_assertions(), *recipe.assertions]
            artifacts.set(
                ArtifactRole.TEST_SCAFFOLD,
                emit_scaffold(name, decision, assertions, recipe.fixtures),
            )
            digest = artifacts.seal_scaffold()
            artifacts.write_to(skill_dir, {ArtifactRole.TEST_SCAFFOLD})
            journal.write(
                ScaffoldEmittedEvent(build_id=build_id, assertions=len(assertions), digest=digest)
            )

            context = ImplementationContext(
                name=name,
                task=task,
                decision=decision,
                recipe=recipe,
                scaffold=artifacts[ArtifactRole.TEST_SCAFFOLD],
            )

            # Phase 3-4: implement, test, revise
            for attempt in range(1, max_attempts + 1):
                if result is None:
                    files = implementer.implement(context)
                else:
                    journal.write(
                        RevisionRequestedEvent(
                            build_id=build_id,
                            attempt=attempt,
                            failures=describe_failures(result),
                        )
                    )
                    logger.info("Revising implementation (attempt %d/%d)", attempt, max_attempts)
                    files = implementer.revise(context, files, result)

                artifacts.update_implementation(files)
                if decision.language == Language.BASH:
                    artifacts.drop(ArtifactRole.LOGIC_MODULE)
                    (skill_dir / ArtifactRole.LOGIC_MODULE.filename).unlink(missing_ok=True)

                written = artifacts.write_to(skill_dir, set(IMPLEMENTATION_ROLES))
                journal.write(
                    AttemptStartedEvent(
                        build_id=build_id,
                        attempt=attempt,
                        files=[p.name for p in written],
                    )
                )
                verify_scaffold(skill_dir, digest)

                result = await run_scaffold(skill_dir, timeout=config.budgets.test_timeout_seconds)
                # The implementation runs inside the scaffold and may have touched it.
                verify_scaffold(skill_dir, digest)
                journal.write(
                    TestRunCompletedEvent(
                        build_id=build_id,
                        attempt=attempt,
                        passed=result.passed,
                        failed=result.failed,
                        total=result.total,
                        exit_code=result.exit_code,
                        duration_seconds=result.duration_seconds,
                        failures=describe_failures(result),
                    )
                )
                logger.info("Attempt %d: %s", attempt, result.summary())

                if result.all_passed and result.total > 0:
                    break

            assert result is not None
            if not (result.all_passed and result.total > 0):
                return _finish_blocked(journal, build_id, attempt, skill_dir, decision, result)

            # Phase 5: docs, only for a clean run
            docs = emit_docs(
                name,
                task,
                decision,
                recipe,
                result,
                version=config.artifacts.version,
                license=config.artifacts.license,
            )
            for role, content in docs.items():
                artifacts.set(role, content)
            written = artifacts.write_to(skill_dir, set(DOC_ROLES))
            journal.write(
                DocsEmittedEvent(build_id=build_id, attempt=attempt, files=[p.name for p in written])
            )
        except ScaffoldModifiedError as e:
            _finish_failed(journal, build_id, attempt, "scaffold_modified", e)
            raise
        except (ImplementationError, ArtifactError, TestRunError, DocumentationBlockedError) as e:
            return _finish_failed(
                journal, build_id, attempt, type(e).__name__, e, skill_dir, decision, result
            )
        except Exception as e:
            _finish_failed(journal, build_id, attempt, "internal_error", e)
            raise

        duration = time.time() - start_time
        journal.write(
            BuildCompletedEvent(
                build_id=build_id,
                attempt=attempt,
                total_attempts=attempt,
                duration_seconds=duration,
            )
        )
        logger.info("Build completed in %d attempt(s), %.1fs", attempt, duration)

        return BuildResult(
            "success",
            build_id,
            attempt,
            skill_dir,
            message=f"{result.summary()} in {attempt} attempt(s)",
            decision=decision,
            result=result,
        )


def _finish_blocked(
    journal: BuilderJournal,
    build_id: str,
    attempt: int,
    skill_dir: Path,
    decision: LanguageDecision,
    result: TestRunResult,
) -> BuildResult:
    """Finish build with BLOCKED status. No docs are written."""
    failures = describe_failures(result)
    summary = f"{result.summary()} after {attempt} attempt(s); {result.failed} assertion(s) still failing"
    journal.write(
        BuildBlockedEvent(
            build_id=build_id,
            attempt=attempt,
            summary=summary,
            last_failures=failures,
        )
    )

    logger.warning("Build blocked: %s", summary)
    for failure in failures:
        logger.warning("  - %s", failure)

    return BuildResult(
        "blocked", build_id, attempt, skill_dir, message=summary, decision=decision, result=result
    )


def _finish_failed(
    journal: BuilderJournal,
    build_id: str,
    attempt: int,
    reason: str,
    error: Exception,
    skill_dir: Path | None = None,
    decision: LanguageDecision | None = None,
    result: TestRunResult | None = None,
) -> BuildResult:
    """Finish build with FAILED status."""
    journal.write(
        BuildFailedEvent(build_id=build_id, attempt=attempt, reason=reason, error=str(error))
    )
    logger.error("Build failed: %s", error)
    return BuildResult(
        "failed",
        build_id,
        attempt,
        skill_dir or Path("."),
        message=str(error),
        decision=decision,
        result=result,
    )
