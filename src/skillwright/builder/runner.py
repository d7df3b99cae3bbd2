"""Test runner - executes a skill's test scaffold and parses its trace.

The scaffold is run once per call with ``bash test.sh``. A fresh temporary
directory is handed to it as ``TMPDIR`` and removed on every exit path.
"""

import asyncio
import logging
import os
import re
import signal
import tempfile
import time
from pathlib import Path

from skillwright.core.schemas import (
    ArtifactRole,
    AssertionGroup,
    AssertionOutcome,
    TestRunResult,
)
from skillwright.exceptions import TestRunError

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124
MAX_DETAIL_CHARS = 500

GROUP_RE = re.compile(r"^== (?P<label>.+) ==$")
RESULT_RE = re.compile(r"^  (?P<status>PASS|FAIL): (?P<description>.*)$")
DETAIL_RE = re.compile(r"^    (?P<detail>.*)$")
SUMMARY_RE = re.compile(r"^(?P<passed>\d+)/(?P<total>\d+) passed$")


def parse_scaffold_output(
    output: str, exit_code: int, duration_seconds: float = 0.0
) -> TestRunResult:
    """Turn scaffold output into a TestRunResult.

    A missing summary line, or a non-zero exit without any reported
    failure, counts as one extra failed assertion so the run can never
    look clean by accident.
    """
    outcomes: list[AssertionOutcome] = []
    group: AssertionGroup | None = None
    details: list[str] = []
    summary: tuple[int, int] | None = None

    def flush_details() -> None:
        if details and outcomes and not outcomes[-1].passed:
            outcomes[-1].detail = "\n".join(details)[:MAX_DETAIL_CHARS]
        details.clear()

    for line in output.splitlines():
        if match := RESULT_RE.match(line):
            flush_details()
            outcomes.append(
                AssertionOutcome(
                    group=group,
                    description=match.group("description"),
                    passed=match.group("status") == "PASS",
                )
            )
        elif (match := DETAIL_RE.match(line)) and outcomes and not outcomes[-1].passed:
            details.append(match.group("detail"))
        elif match := GROUP_RE.match(line):
            flush_details()
            group = AssertionGroup.from_label(match.group("label"))
        elif match := SUMMARY_RE.match(line.strip()):
            flush_details()
            summary = (int(match.group("passed")), int(match.group("total")))
    flush_details()

    if summary is not None:
        passed, total = summary
    else:
        passed = sum(1 for o in outcomes if o.passed)
        total = len(outcomes)
    failed = total - passed

    synthetic: str | None = None
    if exit_code == TIMEOUT_EXIT_CODE and summary is None:
        synthetic = "scaffold timed out"
    elif summary is None:
        synthetic = f"scaffold exited with code {exit_code} without a summary line"
    elif exit_code != 0 and failed == 0:
        synthetic = f"scaffold exited with code {exit_code}"

    if synthetic is not None:
        outcomes.append(AssertionOutcome(description=synthetic, passed=False))
        failed += 1
        total += 1

    return TestRunResult(
        passed=passed,
        failed=failed,
        total=total,
        outcomes=outcomes,
        exit_code=exit_code,
        output=output,
        duration_seconds=duration_seconds,
    )


def kill_process_group(process: asyncio.subprocess.Process) -> None:
    """Kill the scaffold and every command it started."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


async def run_scaffold(skill_dir: Path, timeout: float = 60.0) -> TestRunResult:
    """Run ``test.sh`` inside ``skill_dir`` and parse the result.

    Args:
        skill_dir: Directory holding test.sh and the implementation
        timeout: Seconds before the scaffold is killed

    Returns:
        Parsed result; a timeout yields exit code 124

    Raises:
        TestRunError: If there is no scaffold or bash cannot be started
    """
    scaffold = skill_dir / ArtifactRole.TEST_SCAFFOLD.filename
    if not scaffold.is_file():
        raise TestRunError(f"No test scaffold at {scaffold}")

    start_time = time.time()
    with tempfile.TemporaryDirectory(prefix="skillwright-run-") as tmp:
        env = {**os.environ, "TMPDIR": tmp}
        try:
            process = await asyncio.create_subprocess_exec(
                "bash",
                scaffold.name,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                cwd=skill_dir,
                env=env,
                start_new_session=True,
            )
        except OSError as e:
            raise TestRunError(f"Could not start bash: {e}") from e

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            kill_process_group(process)
            await process.wait()
            output = f"scaffold timed out after {timeout} seconds\n"
            logger.warning("Scaffold in %s timed out after %ss", skill_dir, timeout)
            return parse_scaffold_output(output, TIMEOUT_EXIT_CODE, time.time() - start_time)

    duration = time.time() - start_time
    exit_code = process.returncode if process.returncode is not None else 1
    result = parse_scaffold_output(stdout.decode(errors="replace"), exit_code, duration)
    logger.debug("Scaffold in %s: %s (exit %d)", skill_dir, result.summary(), exit_code)
    return result
