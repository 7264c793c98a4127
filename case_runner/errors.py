"""Structured error values returned (or raised) by test drivers."""

from collections.abc import Iterator
from enum import Enum, IntEnum


class ErrorCode(IntEnum):
    """Error codes reserved by the engine.

    Test bodies may use any other integer for their own error conditions.
    """

    TEST_FAILED = 200_006
    TEST_SKIPPED = 200_007
    ASSERTION_FAIL = 235_000
    UNEXPECTED_EXCEPTION = 235_001


def symbolic_name(code: int | None) -> str:
    """Return the symbolic name of an error code, or its number if unknown.

    Members of any enum, including a suite's own code enum, use their name.
    """
    if code is None:
        return "NO_ERROR"
    if isinstance(code, Enum):
        return code.name
    try:
        return ErrorCode(code).name
    except ValueError:
        return str(code)


class TestError(Exception):
    """A test failure carrying a numeric code, a message and an optional cause.

    Drivers normally return instances of this class; raising one from a driver
    is equivalent to returning it.
    """

    __test__ = False

    def __init__(self, code: int, message: str, cause: "TestError | None" = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"TestError(code={symbolic_name(self.code)}, message={self.message!r}, "
            f"cause={self.cause!r})"
        )

    def chain(self) -> Iterator["TestError"]:
        """Iterate over this error followed by each of its nested causes."""
        err: TestError | None = self
        while err is not None:
            yield err
            err = err.cause

    def root_cause(self) -> "TestError":
        """Return the innermost error of the chain."""
        *_, root = self.chain()
        return root

    def has_code(self, code: int) -> bool:
        """Check whether any error in the chain carries ``code``."""
        return any(err.code == code for err in self.chain())

    def format_chain(self) -> list[str]:
        """Render the chain one error per line, outermost first."""
        return [f"{symbolic_name(err.code)}: {err.message}" for err in self.chain()]


def failure(message: str, cause: TestError | None = None) -> TestError:
    """Create a ``TEST_FAILED`` error."""
    return TestError(ErrorCode.TEST_FAILED, message, cause)


def skipped(message: str) -> TestError:
    """Create a ``TEST_SKIPPED`` error, which reports the test as skipped."""
    return TestError(ErrorCode.TEST_SKIPPED, message)
