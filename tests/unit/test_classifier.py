"""Tests for outcome classification."""

import pytest

from case_runner.classifier import classify
from case_runner.errors import ErrorCode, TestError, failure, skipped
from case_runner.models.descriptor import Mode
from case_runner.models.result import Verdict


@pytest.mark.parametrize(
    ("mode", "result", "expected"),
    [
        (Mode.PASS, None, Verdict.PASSED),
        (Mode.PASS, failure("boom"), Verdict.FAILED),
        (Mode.ALL, None, Verdict.PASSED),
        (Mode.ALL, failure("boom"), Verdict.FAILED),
        (Mode.XFAIL, None, Verdict.XPASS),
        (Mode.XFAIL, failure("boom"), Verdict.XFAIL),
        (Mode.SKIP, None, Verdict.SKIPPED),
    ],
)
def test_classification_table(
    mode: Mode, result: TestError | None, expected: Verdict
) -> None:
    """Maps mode and result to the verdict."""
    assert classify(mode, result) is expected


@pytest.mark.parametrize("mode", [Mode.PASS, Mode.XFAIL, Mode.ALL])
def test_runtime_skip(mode: Mode) -> None:
    """A TEST_SKIPPED error reports the test as skipped in any mode."""
    assert classify(mode, skipped("no backend")) is Verdict.SKIPPED


def test_any_error_code_fails() -> None:
    """Errors with arbitrary codes count as failures."""
    assert classify(Mode.PASS, TestError(ErrorCode.ASSERTION_FAIL, "x")) is (
        Verdict.FAILED
    )


@pytest.mark.parametrize(
    ("verdict", "is_problem"),
    [
        (Verdict.PASSED, False),
        (Verdict.FAILED, True),
        (Verdict.XFAIL, False),
        (Verdict.XPASS, True),
        (Verdict.SKIPPED, False),
    ],
)
def test_problem_verdicts(verdict: Verdict, is_problem: bool) -> None:
    """Only FAIL and XPASS make a run unsuccessful."""
    assert verdict.is_problem is is_problem
