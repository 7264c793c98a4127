"""Reporting of classified outcomes in suite order."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TextIO

from case_runner.models.descriptor import TestDescriptor
from case_runner.models.options import RunOptions
from case_runner.models.result import TestOutcome, Verdict
from case_runner.resolver import resolve_mode


@dataclass(frozen=True, kw_only=True)
class Summary:
    """Verdict tallies of a run."""

    passed: int = 0
    failed: int = 0
    xfail: int = 0
    xpass: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.xfail + self.xpass + self.skipped

    @property
    def exit_code(self) -> int:
        """0 when nothing failed unexpectedly, 1 otherwise."""
        return 1 if self.failed or self.xpass else 0


def summarize(outcomes: Sequence[TestOutcome]) -> Summary:
    """Count outcomes per verdict."""

    def count(verdict: Verdict) -> int:
        return sum(1 for outcome in outcomes if outcome.verdict is verdict)

    return Summary(
        passed=count(Verdict.PASSED),
        failed=count(Verdict.FAILED),
        xfail=count(Verdict.XFAIL),
        xpass=count(Verdict.XPASS),
        skipped=count(Verdict.SKIPPED),
    )


def format_line(prog_name: str, outcome: TestOutcome) -> str:
    """Format the one-line status of a test, e.g. ``PASS:  prog 3: msg``."""
    descriptor = outcome.descriptor
    line = f"{outcome.verdict.value + ':':<6} {prog_name} {outcome.number}: "
    line += descriptor.msg
    if descriptor.wip:
        line += f" [[WIMP: {descriptor.wip}]]"
    if outcome.predicate_matched and descriptor.predicate is not None:
        line += f" [[{descriptor.predicate.description}]]"
    return line


def format_detail(outcome: TestOutcome) -> Sequence[str]:
    """Format the error chain of a failed or expectedly failed test."""
    if outcome.error is None or outcome.verdict not in (
        Verdict.FAILED,
        Verdict.XFAIL,
    ):
        return []
    return [
        f"    {'caused by ' if depth else ''}{line}"
        for depth, line in enumerate(outcome.error.format_chain())
    ]


def print_report(
    prog_name: str,
    outcomes: Sequence[TestOutcome],
    stream: TextIO,
    *,
    quiet: bool = False,
) -> None:
    """Print one status line per test, followed by its error chain if any.

    With ``quiet`` only tests that make the run fail are printed.
    """
    for outcome in outcomes:
        if quiet and not outcome.verdict.is_problem:
            continue
        print(format_line(prog_name, outcome), file=stream)
        for line in format_detail(outcome):
            print(line, file=stream)


def log_results_summary(log: logging.Logger, summary: Summary) -> None:
    """Log the verdict tallies of a run."""
    log.info("=" * 60)
    log.info(
        "Summary: %d passed, %d failed, %d expected failures, "
        "%d unexpectedly passed, %d skipped (%d total)",
        summary.passed,
        summary.failed,
        summary.xfail,
        summary.xpass,
        summary.skipped,
        summary.total,
    )
    log.info("=" * 60)


def format_output(outcomes: Sequence[TestOutcome]) -> dict[str, Any]:
    """Format outcomes as a JSON-serialisable document."""
    summary = summarize(outcomes)
    return {
        "total": summary.total,
        "passed": summary.passed,
        "failed": summary.failed,
        "xfail": summary.xfail,
        "xpass": summary.xpass,
        "skipped": summary.skipped,
        "results": [
            {
                "number": outcome.number,
                "name": outcome.descriptor.name,
                "message": outcome.descriptor.msg,
                "mode": outcome.mode.value,
                "verdict": outcome.verdict.value,
                "duration": outcome.duration,
                "error": (
                    outcome.error.format_chain() if outcome.error is not None else None
                ),
            }
            for outcome in outcomes
        ],
    }


def format_listing(
    tests: Sequence[TestDescriptor], options: RunOptions
) -> Sequence[str]:
    """Format the ``--list`` table of a suite."""
    lines = ["Test #  Mode   Test Description", "------  -----  ----------------"]
    for number, descriptor in enumerate(tests, start=1):
        line = f"{number:>4}    {resolve_mode(descriptor, options).value:<5}  "
        line += descriptor.msg
        if descriptor.wip:
            line += f" [[WIMP: {descriptor.wip}]]"
        lines.append(line)
    return lines
