"""Models for classified test outcomes."""

from dataclasses import dataclass
from enum import StrEnum

from case_runner.errors import TestError
from case_runner.models.descriptor import Mode, TestDescriptor


class Verdict(StrEnum):
    """Final classification of a test run against its effective mode."""

    PASSED = "PASS"
    FAILED = "FAIL"
    XFAIL = "XFAIL"
    XPASS = "XPASS"
    SKIPPED = "SKIP"

    @property
    def is_problem(self) -> bool:
        """Whether this verdict makes the run unsuccessful."""
        return self in (Verdict.FAILED, Verdict.XPASS)


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Result of a single test, tagged with its position in the suite."""

    __test__ = False

    number: int
    descriptor: TestDescriptor
    mode: Mode
    verdict: Verdict
    error: TestError | None = None
    duration: float = 0.0
    predicate_matched: bool = False
