"""Loading of suites from entry points or module references."""

import importlib
from importlib.metadata import entry_points

from case_runner.suites.manifest import SuiteManifest

ENTRY_POINT_GROUP = "case_runner.suites"


class SuiteNotFoundError(Exception):
    """Raised when a suite is not found."""


def load_suite_manifest(key: str) -> SuiteManifest:
    """Load a suite manifest by key.

    Args:
        key: The suite key as registered in pyproject.toml (e.g., "selftest"),
             or a ``module:attribute`` reference to a manifest

    Returns:
        The suite manifest instance

    Raises:
        SuiteNotFoundError: If no suite with the given key is found

    """
    if ":" in key:
        return _load_reference(key)

    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            return _check_manifest(key, entry.load())

    available = sorted(e.name for e in entries)
    raise SuiteNotFoundError(f"Suite '{key}' not found. Available suites: {available}")


def _load_reference(reference: str) -> SuiteManifest:
    module_name, _, attribute = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SuiteNotFoundError(f"Cannot import suite module '{module_name}'") from e

    try:
        manifest = getattr(module, attribute)
    except AttributeError as e:
        raise SuiteNotFoundError(
            f"Module '{module_name}' has no attribute '{attribute}'"
        ) from e
    return _check_manifest(reference, manifest)


def _check_manifest(key: str, manifest: object) -> SuiteManifest:
    if not isinstance(manifest, SuiteManifest):
        raise SuiteNotFoundError(f"'{key}' does not refer to a SuiteManifest")
    return manifest
