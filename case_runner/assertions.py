"""Assertion helpers for test bodies.

Every ``check*`` helper returns ``None`` when the assertion holds and a
``TEST_FAILED`` error otherwise, so bodies read::

    if err := check(len(entries) == 3, "len(entries) == 3"):
        return err

:func:`fatal_assert` is the exception: it terminates the process and is meant
only for code that cannot return an error value, such as callbacks invoked by
a library that ignores their return value.
"""

import inspect
import os
import sys
from pathlib import Path

from case_runner.errors import ErrorCode, TestError, failure, symbolic_name


def _caller_location() -> str:
    frame = inspect.currentframe()
    # skip this helper and the check* function that called it
    caller = frame.f_back.f_back if frame and frame.f_back else None
    if caller is None:
        return "<unknown>"
    return f"{Path(caller.f_code.co_filename).name}:{caller.f_lineno}"


def check(condition: object, text: str) -> TestError | None:
    """Fail with ``text`` and the caller's location unless ``condition`` holds."""
    if condition:
        return None
    return failure(f"assertion '{text}' failed at {_caller_location()}")


def check_strings_equal(actual: str | None, expected: str | None) -> TestError | None:
    """Compare two optional strings; None only equals None."""
    if actual == expected:
        return None
    return failure(
        "Strings not equal\n"
        f"  Expected: '{expected}'\n"
        f"  Found:    '{actual}'\n"
        f"  at {_caller_location()}"
    )


def check_error(err: TestError | None, expected: int) -> TestError | None:
    """Require ``err`` to carry exactly the ``expected`` error code.

    The received error, if any, is chained as the cause of the failure.
    """
    if not expected or expected == ErrorCode.ASSERTION_FAIL:
        raise ValueError(
            "expected error code must be a real error code, "
            f"not {symbolic_name(expected)}"
        )

    if err is not None and err.code == expected:
        return None

    return failure(
        f"Expected error {symbolic_name(expected)} but got "
        f"{symbolic_name(err.code if err is not None else None)}",
        err,
    )


def check_any_error(err: TestError | None) -> TestError | None:
    """Require some error other than an internal ``ASSERTION_FAIL``."""
    if err is None:
        return failure("Expected error but got NO_ERROR")
    if err.code == ErrorCode.ASSERTION_FAIL:
        return failure("Expected error but got ASSERTION_FAIL", err)
    return None


def fatal_assert(condition: object, text: str) -> None:
    """Abort the whole process unless ``condition`` holds."""
    if condition:
        return
    sys.stderr.write(f"TEST ASSERTION FAILED: {text}\n")
    sys.stderr.flush()
    os.abort()
