"""Suite manifest definition for the suite plugin system."""

from collections.abc import Sequence
from dataclasses import dataclass

from case_runner.models.descriptor import TestDescriptor


@dataclass(frozen=True, kw_only=True)
class SuiteManifest:
    """A fixed list of tests plus the concurrency it tolerates.

    ``max_threads`` is the number of tests that may run concurrently when the
    suite runs with ``--parallel``: 1 for suites whose tests share process-wide
    state, less than 1 for no limit.
    """

    tests: Sequence[TestDescriptor]
    max_threads: int = 1

    @property
    def names(self) -> Sequence[str]:
        return [test.name for test in self.tests]
