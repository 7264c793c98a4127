"""Test descriptors: the static registration metadata of a suite."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from case_runner.errors import TestError
from case_runner.models.options import RunOptions
from case_runner.scratch import Scratch

type DriverResult = TestError | None
type PlainFunc = Callable[[Scratch], DriverResult]
type OptionsFunc = Callable[[RunOptions, Scratch], DriverResult]
type PredicateFunc = Callable[[RunOptions, str], bool]


class Mode(StrEnum):
    """Run mode of a test."""

    PASS = "PASS"
    XFAIL = "XFAIL"
    SKIP = "SKIP"
    ALL = "ALL"


class Driver(ABC):
    """A callable test body, invoked by the scheduler."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the underlying test function."""

    @abstractmethod
    def invoke(self, options: RunOptions, scratch: Scratch) -> DriverResult:
        """Run the test body and return its result."""


@dataclass(frozen=True)
class PlainDriver(Driver):
    """Driver for test bodies that only need a scratch scope."""

    func: PlainFunc

    @property
    def name(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))

    def invoke(self, options: RunOptions, scratch: Scratch) -> DriverResult:
        return self.func(scratch)


@dataclass(frozen=True)
class OptionsDriver(Driver):
    """Driver for test bodies that also read the run options."""

    func: OptionsFunc

    @property
    def name(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))

    def invoke(self, options: RunOptions, scratch: Scratch) -> DriverResult:
        return self.func(options, scratch)


@dataclass(frozen=True, kw_only=True)
class Predicate:
    """Runtime condition that may replace a test's declared mode."""

    func: PredicateFunc
    value: str
    alternate_mode: Mode
    description: str


@dataclass(frozen=True, kw_only=True)
class TestDescriptor:
    """One registered test of a suite."""

    __test__ = False

    mode: Mode
    driver: Driver
    msg: str
    wip: str | None = None
    predicate: Predicate | None = None

    @property
    def name(self) -> str:
        return self.driver.name


def case(
    func: PlainFunc,
    msg: str,
    *,
    mode: Mode = Mode.PASS,
    wip: str | None = None,
    predicate: Predicate | None = None,
) -> TestDescriptor:
    """Describe a test whose body takes only a scratch scope."""
    return TestDescriptor(
        mode=mode, driver=PlainDriver(func), msg=msg, wip=wip, predicate=predicate
    )


def opts_case(
    func: OptionsFunc,
    msg: str,
    *,
    mode: Mode = Mode.PASS,
    wip: str | None = None,
    predicate: Predicate | None = None,
) -> TestDescriptor:
    """Describe a test whose body takes the run options and a scratch scope."""
    return TestDescriptor(
        mode=mode, driver=OptionsDriver(func), msg=msg, wip=wip, predicate=predicate
    )
