"""Tests for suite loading module."""

import pytest

from case_runner.suites.loading import SuiteNotFoundError, load_suite_manifest
from case_runner.suites.selftest import suite as selftest_suite


def test_load_suite_manifest_returns_manifest() -> None:
    """Loads suite manifest by entry point key."""
    manifest = load_suite_manifest("selftest")

    assert manifest is selftest_suite


def test_load_suite_manifest_by_reference() -> None:
    """Loads suite manifest by module:attribute reference."""
    manifest = load_suite_manifest("case_runner.suites.selftest:suite")

    assert manifest is selftest_suite


def test_load_suite_manifest_raises_for_unknown_suite() -> None:
    """Raises SuiteNotFoundError for unknown suite key."""
    with pytest.raises(SuiteNotFoundError) as exc_info:
        load_suite_manifest("unknown-suite")

    assert "unknown-suite" in str(exc_info.value)
    assert "Available suites" in str(exc_info.value)


@pytest.mark.parametrize(
    ("reference", "message"),
    [
        ("case_runner.no_such_module:suite", "Cannot import"),
        ("case_runner.suites.selftest:nothing", "has no attribute"),
        ("case_runner.suites.selftest:case", "does not refer to a SuiteManifest"),
    ],
)
def test_load_suite_manifest_bad_reference(reference: str, message: str) -> None:
    """Raises SuiteNotFoundError for references that are not manifests."""
    with pytest.raises(SuiteNotFoundError, match=message):
        load_suite_manifest(reference)
