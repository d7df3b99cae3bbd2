"""Build event models for the append-only journal."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class BuildEventType(str, Enum):
    """Build event types for journal."""

    # Build lifecycle
    BUILD_STARTED = "build.started"
    BUILD_COMPLETED = "build.completed"
    BUILD_BLOCKED = "build.blocked"
    BUILD_FAILED = "build.failed"

    # Phases
    PLAN_DECIDED = "plan.decided"
    SCAFFOLD_EMITTED = "scaffold.emitted"
    DOCS_EMITTED = "docs.emitted"

    # Attempt lifecycle
    ATTEMPT_STARTED = "attempt.started"
    TEST_RUN_COMPLETED = "test.run_completed"
    REVISION_REQUESTED = "revision.requested"


class BaseBuildEvent(BaseModel):
    """Base event with common fields."""

    event_type: BuildEventType
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    build_id: str
    attempt: int = 0


class BuildStartedEvent(BaseBuildEvent):
    """Emitted when a build begins."""

    event_type: BuildEventType = BuildEventType.BUILD_STARTED
    skill_name: str
    task: str
    skill_dir: str
    max_attempts: int
    implementer: str


class PlanDecidedEvent(BaseBuildEvent):
    event_type: BuildEventType = BuildEventType.PLAN_DECIDED
    language: str
    rationale: str
    platform_branches: bool
    recipe: str


class ScaffoldEmittedEvent(BaseBuildEvent):
    """Emitted once test.sh is written and sealed."""

    event_type: BuildEventType = BuildEventType.SCAFFOLD_EMITTED
    assertions: int
    digest: str


class AttemptStartedEvent(BaseBuildEvent):
    event_type: BuildEventType = BuildEventType.ATTEMPT_STARTED
    files: list[str] = Field(default_factory=list)


class TestRunCompletedEvent(BaseBuildEvent):
    """Emitted after each run of the scaffold."""

    __test__ = False

    event_type: BuildEventType = BuildEventType.TEST_RUN_COMPLETED
    passed: int
    failed: int
    total: int
    exit_code: int
    duration_seconds: float
    failures: list[str] = Field(default_factory=list)


class RevisionRequestedEvent(BaseBuildEvent):
    event_type: BuildEventType = BuildEventType.REVISION_REQUESTED
    failures: list[str] = Field(default_factory=list)


class DocsEmittedEvent(BaseBuildEvent):
    event_type: BuildEventType = BuildEventType.DOCS_EMITTED
    files: list[str] = Field(default_factory=list)


class BuildCompletedEvent(BaseBuildEvent):
    """Emitted when every assertion passes and docs are written."""

    event_type: BuildEventType = BuildEventType.BUILD_COMPLETED
    total_attempts: int
    duration_seconds: float


class BuildBlockedEvent(BaseBuildEvent):
    """Emitted when the attempt budget runs out with failures remaining."""

    event_type: BuildEventType = BuildEventType.BUILD_BLOCKED
    summary: str
    last_failures: list[str] = Field(default_factory=list)


class BuildFailedEvent(BaseBuildEvent):
    """Emitted when the build stops on an error."""

    event_type: BuildEventType = BuildEventType.BUILD_FAILED
    reason: str
    error: str | None = None


# Union type for all events
BuildEvent = (
    BuildStartedEvent
    | PlanDecidedEvent
    | ScaffoldEmittedEvent
    | AttemptStartedEvent
    | TestRunCompletedEvent
    | RevisionRequestedEvent
    | DocsEmittedEvent
    | BuildCompletedEvent
    | BuildBlockedEvent
    | BuildFailedEvent
)

EVENT_CLASSES: dict[BuildEventType, type[BaseBuildEvent]] = {
    BuildEventType.BUILD_STARTED: BuildStartedEvent,
    BuildEventType.PLAN_DECIDED: PlanDecidedEvent,
    BuildEventType.SCAFFOLD_EMITTED: ScaffoldEmittedEvent,
    BuildEventType.ATTEMPT_STARTED: AttemptStartedEvent,
    BuildEventType.TEST_RUN_COMPLETED: TestRunCompletedEvent,
    BuildEventType.REVISION_REQUESTED: RevisionRequestedEvent,
    BuildEventType.DOCS_EMITTED: DocsEmittedEvent,
    BuildEventType.BUILD_COMPLETED: BuildCompletedEvent,
    BuildEventType.BUILD_BLOCKED: BuildBlockedEvent,
    BuildEventType.BUILD_FAILED: BuildFailedEvent,
}
