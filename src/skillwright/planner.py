"""Planner - picks the implementation language for a task description.

The rule is a keyword vote over stemmed word tokens:

- tokens from the data keyword set (structured data, network calls,
  string and text handling) vote for Python;
- tokens from the shell keyword set (composition of system commands)
  vote for bash;
- Python wins only with a strictly higher score, so ties and
  descriptions with no recognised words get the simpler shell option.

Platform keywords (ports, processes, disks, ...) switch on OS-specific
branches in the generated code.
"""

import logging
import re
from collections.abc import Iterable

from skillwright.builder.config import PlannerConfig
from skillwright.core.schemas import Language, LanguageDecision

logger = logging.getLogger(__name__)

DATA_KEYWORDS = frozenset(
    {
        "json", "csv", "yaml", "yml", "xml", "html", "markdown", "toml",
        "parse", "parser", "serialize", "schema", "validate",
        "http", "https", "api", "rest", "url", "endpoint", "fetch", "download",
        "request", "webhook", "scrape",
        "count", "word", "text", "string", "character", "regex", "pattern",
        "replace", "convert", "format", "pretty", "transform", "encode", "decode",
        "base64", "hash", "sort", "dedupe", "filter", "calculate", "average",
        "sum", "statistic", "data", "date", "timestamp", "template",
    }
)

SHELL_KEYWORDS = frozenset(
    {
        "list", "port", "open", "listen", "process", "processes", "pid", "kill", "disk",
        "mount", "service", "daemon", "uptime", "memory", "cpu", "load",
        "directory", "folder", "permission", "chmod", "owner", "symlink",
        "backup", "archive", "compress", "tar", "zip", "copy", "move", "rename",
        "delete", "clean", "cleanup", "env", "path", "git", "docker", "ssh",
        "ping", "host", "restart", "cron", "user", "group", "shell", "command",
    }
)

PLATFORM_KEYWORDS = frozenset(
    {
        "port", "process", "processes", "network", "interface", "disk", "memory", "cpu",
        "service", "daemon", "mount", "uptime", "package", "clipboard",
        "notification", "battery", "wifi", "volume", "screenshot", "open",
        "listen", "load",
    }
)

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def stem(word: str) -> str:
    """Crude plural folding: 'ports' -> 'port', 'process' stays."""
    if len(word) > 3 and word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def tokenize(text: str) -> list[str]:
    """Lowercase, split into alphanumeric words and stem them."""
    return [stem(token) for token in _TOKEN_RE.findall(text.lower())]


def _stemmed(words: Iterable[str]) -> frozenset[str]:
    return frozenset(stem(w.lower()) for w in words)


class Planner:
    """Keyword-vote language planner.

    Usage:
        planner = Planner()
        decision = planner.plan("count words in a file")
        decision.language  # Language.PYTHON
    """

    def __init__(self, config: PlannerConfig | None = None) -> None:
        config = config or PlannerConfig()
        self.data_keywords = _stemmed(DATA_KEYWORDS | set(config.data_keywords))
        self.shell_keywords = _stemmed(SHELL_KEYWORDS | set(config.shell_keywords))
        self.platform_keywords = _stemmed(PLATFORM_KEYWORDS | set(config.platform_keywords))

    def plan(self, task: str) -> LanguageDecision:
        """Classify a task description. Always returns a decision."""
        tokens = tokenize(task)

        data_hits = _unique(t for t in tokens if t in self.data_keywords)
        shell_hits = _unique(t for t in tokens if t in self.shell_keywords)
        platform_hits = _unique(t for t in tokens if t in self.platform_keywords)

        if len(data_hits) > len(shell_hits):
            language = Language.PYTHON
            rationale = (
                f"structured data or text handling ({', '.join(data_hits)}) "
                "fits a scripting language"
            )
            matched = data_hits
        elif shell_hits:
            language = Language.BASH
            rationale = f"composes system commands ({', '.join(shell_hits)}); shell is simpler"
            matched = shell_hits
        else:
            language = Language.BASH
            rationale = "no strong signal; defaulting to the simpler shell option"
            matched = []

        if data_hits and len(data_hits) == len(shell_hits):
            rationale = (
                f"tie between data ({', '.join(data_hits)}) and shell "
                f"({', '.join(shell_hits)}) keywords; preferring the simpler shell option"
            )

        decision = LanguageDecision(
            language=language,
            rationale=rationale,
            platform_branches=bool(platform_hits),
            matched_keywords=tuple(matched),
        )
        logger.debug(
            "Planned %r: %s (data=%s shell=%s platform=%s)",
            task,
            language.value,
            data_hits,
            shell_hits,
            platform_hits,
        )
        return decision


def _unique(tokens: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for token in tokens:
        if token not in seen:
            seen.append(token)
    return seen


def plan_task(task: str, config: PlannerConfig | None = None) -> LanguageDecision:
    """Convenience wrapper around ``Planner(config).plan(task)``."""
    return Planner(config).plan(task)
