"""Test scheduler dispatching a suite's drivers onto a bounded worker pool."""

import asyncio
import logging
import time
import traceback
from collections.abc import Mapping, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field

from case_runner.classifier import classify
from case_runner.cleanup import CleanupRegistry
from case_runner.errors import ErrorCode, TestError
from case_runner.models.descriptor import Mode, TestDescriptor
from case_runner.models.options import RunOptions
from case_runner.models.result import TestOutcome, Verdict
from case_runner.resolver import effective_mode, predicate_matches
from case_runner.scratch import Scratch

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class _Plan:
    number: int
    descriptor: TestDescriptor
    mode: Mode
    predicate_matched: bool


@dataclass(frozen=True, kw_only=True)
class TestScheduler:
    """Runs the drivers of a suite and classifies their results.

    ``max_concurrency`` of 1 runs tests strictly one after another in suite
    order, a value below 1 lets every test run at once, and any other value
    caps the number of drivers in flight.
    """

    __test__ = False

    options: RunOptions
    registry: CleanupRegistry = field(default_factory=CleanupRegistry)
    max_concurrency: int = 1
    mode_filter: Mode = Mode.ALL

    async def run_tests(
        self, tests: Mapping[int, TestDescriptor]
    ) -> Sequence[TestOutcome]:
        """Run the given tests, keyed by their 1-based number in the suite.

        Args:
            tests: Descriptors to run, in suite order

        Returns:
            One outcome per test whose effective mode passes ``mode_filter``,
            in the order of ``tests`` regardless of completion order

        """
        planned = [self._plan(number, desc) for number, desc in tests.items()]
        plans = [plan for plan in planned if self._selected(plan)]
        if not plans:
            log.info("No tests to run")
            return []

        dispatched = sum(1 for plan in plans if plan.mode is not Mode.SKIP)
        workers = self._worker_count(dispatched)
        log.info(
            "Running %d test(s) on %d worker(s), %d skipped",
            len(plans),
            workers,
            len(plans) - dispatched,
        )

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=self.options.prog_name
        ) as pool:
            if self.max_concurrency == 1:
                outcomes = [await self._run_one(plan, pool) for plan in plans]
            else:
                outcomes = await asyncio.gather(
                    *(self._run_one(plan, pool) for plan in plans)
                )

        log.info("Test execution completed")
        return list(outcomes)

    def _plan(self, number: int, descriptor: TestDescriptor) -> _Plan:
        matched = predicate_matches(descriptor, self.options)
        return _Plan(
            number=number,
            descriptor=descriptor,
            mode=effective_mode(descriptor, matched),
            predicate_matched=matched,
        )

    def _selected(self, plan: _Plan) -> bool:
        return self.mode_filter is Mode.ALL or plan.mode is self.mode_filter

    def _worker_count(self, dispatched: int) -> int:
        if self.max_concurrency < 1:
            return max(dispatched, 1)
        return max(min(self.max_concurrency, dispatched), 1)

    async def _run_one(self, plan: _Plan, pool: Executor) -> TestOutcome:
        """Run one test on the pool, or record it as skipped without running."""
        if plan.mode is Mode.SKIP:
            return TestOutcome(
                number=plan.number,
                descriptor=plan.descriptor,
                mode=plan.mode,
                verdict=Verdict.SKIPPED,
                predicate_matched=plan.predicate_matched,
            )

        loop = asyncio.get_running_loop()
        start = time.monotonic()
        result = await loop.run_in_executor(pool, self._invoke, plan)
        duration = time.monotonic() - start

        verdict = classify(plan.mode, result)
        log.debug(
            "Test completed: number=%d name=%s verdict=%s duration=%.3fs",
            plan.number,
            plan.descriptor.name,
            verdict,
            duration,
        )
        return TestOutcome(
            number=plan.number,
            descriptor=plan.descriptor,
            mode=plan.mode,
            verdict=verdict,
            error=result,
            duration=duration,
            predicate_matched=plan.predicate_matched,
        )

    def _invoke(self, plan: _Plan) -> TestError | None:
        """Call the driver inside a fresh scratch scope; runs on a worker thread."""
        scratch = Scratch(f"{self.options.prog_name}-{plan.number}", self.registry)
        try:
            result = self._call_driver(plan, scratch)
        finally:
            release_error = self._release(plan, scratch)

        if release_error is None:
            return result
        release_error.cause = result
        return release_error

    def _call_driver(self, plan: _Plan, scratch: Scratch) -> TestError | None:
        try:
            result = plan.descriptor.driver.invoke(self.options, scratch)
        except TestError as e:
            return e
        except Exception as e:
            log.error(
                "Test %d (%s) raised an exception",
                plan.number,
                plan.descriptor.name,
                exc_info=e,
            )
            return TestError(
                ErrorCode.UNEXPECTED_EXCEPTION,
                f"{type(e).__name__}: {e}",
                TestError(ErrorCode.UNEXPECTED_EXCEPTION, traceback.format_exc()),
            )

        if result is not None and not isinstance(result, TestError):
            return TestError(
                ErrorCode.UNEXPECTED_EXCEPTION,
                f"Driver returned {type(result).__name__} instead of an error or None",
            )
        return result

    def _release(self, plan: _Plan, scratch: Scratch) -> TestError | None:
        try:
            scratch.close()
        except Exception as e:
            log.error(
                "Failed to release scratch scope of test %d",
                plan.number,
                exc_info=e,
            )
            return TestError(
                ErrorCode.UNEXPECTED_EXCEPTION,
                f"Failed to release scratch scope: {type(e).__name__}: {e}",
            )
        return None
