"""Build journal - append-only JSONL event log."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skillwright.builder.events import EVENT_CLASSES, BuildEvent, BuildEventType

logger = logging.getLogger(__name__)


def default_builds_dir() -> Path:
    return Path.cwd() / ".skillwright" / "builds"


class BuilderJournal:
    """Append-only journal for one build.

    Writes events to .skillwright/builds/<build_id>/events.jsonl, one JSON
    object per line, flushed after each write.

    Usage:
        with BuilderJournal(build_id="build-abc123") as journal:
            journal.write(BuildStartedEvent(...))
    """

    def __init__(self, build_id: str, builds_dir: Path | None = None) -> None:
        self.build_id = build_id
        self.build_dir = (builds_dir or default_builds_dir()) / build_id
        self.journal_path = self.build_dir / "events.jsonl"

        self.build_dir.mkdir(parents=True, exist_ok=True)
        self._file_handle = open(self.journal_path, "a", encoding="utf-8")

    def write(self, event: BuildEvent) -> None:
        """Write event to journal with immediate flush."""
        if self._file_handle is None:
            raise RuntimeError(f"Journal {self.build_id} is closed")
        self._file_handle.write(event.model_dump_json() + "\n")
        self._file_handle.flush()

    def close(self) -> None:
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None

    def __enter__(self) -> "BuilderJournal":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class BuilderJournalReader:
    """Reader for journal files. Skips corrupt lines with a warning."""

    def __init__(self, journal_path: Path) -> None:
        self.journal_path = journal_path

    def read_events(self) -> list[dict[str, Any]]:
        """Read all events as dictionaries.

        Raises:
            FileNotFoundError: If journal file doesn't exist
        """
        if not self.journal_path.exists():
            raise FileNotFoundError(f"Journal not found: {self.journal_path}")

        events: list[dict[str, Any]] = []
        with open(self.journal_path, encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(json.loads(line))
                except json.JSONDecodeError as e:
                    logger.warning("Corrupt line %d in %s: %s", line_num, self.journal_path, e)
        return events

    def read_typed_events(self) -> list[BuildEvent]:
        """Read and validate events into their pydantic models."""
        typed_events: list[BuildEvent] = []
        for event_data in self.read_events():
            try:
                event_type = BuildEventType(event_data.get("event_type"))
                typed_events.append(EVENT_CLASSES[event_type].model_validate(event_data))  # type: ignore[arg-type]
            except (ValueError, ValidationError) as e:
                logger.warning("Invalid event data in %s: %s", self.journal_path, e)
        return typed_events


def list_builds(builds_dir: Path | None = None) -> list[dict[str, Any]]:
    """List all builds, newest first.

    Returns:
        List of build info dicts with build_id, path, journal_path and event_count
    """
    builds_dir = builds_dir or default_builds_dir()
    if not builds_dir.exists():
        return []

    builds = []
    for build_path in builds_dir.iterdir():
        journal_path = build_path / "events.jsonl"
        if not build_path.is_dir() or not journal_path.exists():
            continue

        with open(journal_path, encoding="utf-8") as f:
            event_count = sum(1 for line in f if line.strip())

        builds.append(
            {
                "build_id": build_path.name,
                "path": str(build_path),
                "journal_path": str(journal_path),
                "event_count": event_count,
                "mtime": journal_path.stat().st_mtime,
            }
        )

    builds.sort(key=lambda b: b["mtime"], reverse=True)
    for build in builds:
        del build["mtime"]
    return builds


def get_last_build(builds_dir: Path | None = None) -> dict[str, Any] | None:
    builds = list_builds(builds_dir)
    return builds[0] if builds else None
