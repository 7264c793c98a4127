"""Per-test scratch scope holding every resource a test body acquires."""

import tempfile
from collections.abc import Callable
from contextlib import AbstractContextManager, ExitStack
from os import PathLike
from pathlib import Path
from typing import Any

from case_runner.cleanup import CleanupRegistry, remove_path


class Scratch:
    """Resources owned by one running test, released when its driver returns.

    Everything entered, registered as a callback, or created with
    :meth:`mkdtemp` is torn down on :meth:`close`, whatever the test's outcome.
    Paths passed to :meth:`add_cleanup` instead survive until the end of the
    whole run.
    """

    def __init__(self, name: str, registry: CleanupRegistry) -> None:
        self.name = name
        self._registry = registry
        self._stack = ExitStack()
        self._closed = False

    def enter_context[T](self, cm: AbstractContextManager[T]) -> T:
        """Enter ``cm`` and exit it when the scope is released."""
        self._check_open()
        return self._stack.enter_context(cm)

    def callback(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Call ``func`` when the scope is released, in LIFO order."""
        self._check_open()
        self._stack.callback(func, *args, **kwargs)

    def mkdtemp(self) -> Path:
        """Create a private temporary directory removed with the scope."""
        self._check_open()
        path = Path(tempfile.mkdtemp(prefix=f"{self.name}-"))
        self._stack.callback(remove_path, path)
        return path

    def add_cleanup(self, path: str | PathLike[str]) -> None:
        """Register ``path`` for removal after every test has finished."""
        self._registry.register(path)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release every resource held by the scope."""
        if self._closed:
            return
        self._closed = True
        self._stack.close()

    def __enter__(self) -> "Scratch":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"Scratch scope for {self.name} is already released")
