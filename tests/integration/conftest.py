"""Fixtures for integration tests."""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def run_python(
    tmp_path: Path,
) -> Callable[..., subprocess.CompletedProcess[str]]:
    """Run the current interpreter inside a scratch working directory."""

    def run(*args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            [sys.executable, *args],
            cwd=tmp_path,
            capture_output=True,
            text=True,
            timeout=60,
            check=False,
        )

    return run
