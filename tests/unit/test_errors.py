"""Tests for structured test errors."""

from enum import IntEnum

from case_runner.errors import ErrorCode, TestError, failure, skipped, symbolic_name


def test_symbolic_name_of_reserved_code() -> None:
    """Reserved codes are named by their enum member."""
    assert symbolic_name(ErrorCode.TEST_FAILED) == "TEST_FAILED"
    assert symbolic_name(int(ErrorCode.ASSERTION_FAIL)) == "ASSERTION_FAIL"


def test_symbolic_name_of_unknown_code() -> None:
    """Unknown codes fall back to their number."""
    assert symbolic_name(42) == "42"


def test_symbolic_name_of_suite_enum_member() -> None:
    """Members of a suite's own code enum are named, not numbered."""

    class RepoError(IntEnum):
        ENTRY_NOT_FOUND = 160_013

    assert symbolic_name(RepoError.ENTRY_NOT_FOUND) == "ENTRY_NOT_FOUND"


def test_symbolic_name_of_no_error() -> None:
    """None stands for the absence of an error."""
    assert symbolic_name(None) == "NO_ERROR"


def test_chain_iterates_outermost_first() -> None:
    """Chain yields the error followed by its nested causes."""
    root = TestError(7, "root")
    middle = TestError(8, "middle", root)
    outer = failure("outer", middle)

    assert list(outer.chain()) == [outer, middle, root]
    assert outer.root_cause() is root


def test_root_cause_of_single_error_is_itself() -> None:
    """An error without cause is its own root cause."""
    err = TestError(1, "alone")

    assert err.root_cause() is err


def test_has_code_searches_whole_chain() -> None:
    """has_code finds codes anywhere in the chain."""
    err = failure("outer", TestError(99, "inner"))

    assert err.has_code(99)
    assert err.has_code(ErrorCode.TEST_FAILED)
    assert not err.has_code(100)


def test_format_chain() -> None:
    """Each link renders with its symbolic code."""
    err = failure("boom", TestError(99, "disk full"))

    assert err.format_chain() == ["TEST_FAILED: boom", "99: disk full"]


def test_error_is_raisable() -> None:
    """TestError can be raised and keeps its fields."""
    try:
        raise TestError(5, "raised")
    except TestError as e:
        assert e.code == 5
        assert str(e) == "raised"
        assert e.cause is None


def test_skipped_uses_skip_code() -> None:
    """skipped() builds a TEST_SKIPPED error."""
    assert skipped("no backend").code == ErrorCode.TEST_SKIPPED
