"""Tests for test descriptors and driver variants."""

from case_runner.cleanup import CleanupRegistry
from case_runner.errors import TestError, failure
from case_runner.models.descriptor import (
    Mode,
    OptionsDriver,
    PlainDriver,
    case,
    opts_case,
)
from case_runner.models.options import RunOptions
from case_runner.scratch import Scratch


def plain_body(scratch: Scratch) -> TestError | None:
    return failure(f"plain {scratch.name}")


def options_body(options: RunOptions, scratch: Scratch) -> TestError | None:
    return failure(f"{options.prog_name} {scratch.name}")


def test_case_wraps_plain_driver() -> None:
    """case() builds a PASS descriptor around a scratch-only body."""
    descriptor = case(plain_body, "plain test")

    assert descriptor.mode is Mode.PASS
    assert isinstance(descriptor.driver, PlainDriver)
    assert descriptor.name == "plain_body"
    assert descriptor.wip is None
    assert descriptor.predicate is None


def test_opts_case_wraps_options_driver() -> None:
    """opts_case() builds a descriptor around an options-aware body."""
    descriptor = opts_case(options_body, "opts test", mode=Mode.XFAIL, wip="later")

    assert descriptor.mode is Mode.XFAIL
    assert isinstance(descriptor.driver, OptionsDriver)
    assert descriptor.wip == "later"


def test_drivers_share_invoke_interface() -> None:
    """Both driver shapes are invoked the same way."""
    options = RunOptions(prog_name="prog")
    scratch = Scratch("prog-1", CleanupRegistry())

    plain = case(plain_body, "p").driver.invoke(options, scratch)
    with_options = opts_case(options_body, "o").driver.invoke(options, scratch)

    assert plain is not None and plain.message == "plain prog-1"
    assert with_options is not None and with_options.message == "prog prog-1"


def test_mode_values() -> None:
    """Modes parse from their command-line spelling."""
    assert Mode("XFAIL") is Mode.XFAIL
    assert str(Mode.ALL) == "ALL"
