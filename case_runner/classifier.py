"""Classification of driver results against the mode a test ran in."""

from collections.abc import Mapping

from case_runner.errors import ErrorCode, TestError
from case_runner.models.descriptor import Mode
from case_runner.models.result import Verdict

# (verdict without error, verdict with error) per runnable mode
VERDICTS: Mapping[Mode, tuple[Verdict, Verdict]] = {
    Mode.PASS: (Verdict.PASSED, Verdict.FAILED),
    Mode.ALL: (Verdict.PASSED, Verdict.FAILED),
    Mode.XFAIL: (Verdict.XPASS, Verdict.XFAIL),
}


def classify(mode: Mode, result: TestError | None) -> Verdict:
    """Map the effective mode and the driver's result to a verdict.

    An expected failure that returns no error is reported as ``XPASS`` so that
    stale expectations get noticed. A ``TEST_SKIPPED`` error means the body
    skipped itself at runtime.
    """
    if mode is Mode.SKIP:
        return Verdict.SKIPPED

    if result is not None and result.code == ErrorCode.TEST_SKIPPED:
        return Verdict.SKIPPED

    passed, failed = VERDICTS[mode]
    return passed if result is None else failed
