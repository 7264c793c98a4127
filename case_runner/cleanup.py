"""Registry of filesystem paths to remove once every test has finished."""

import logging
import shutil
import threading
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

log = logging.getLogger(__name__)


def remove_path(path: Path) -> bool:
    """Remove a file or directory tree, logging instead of raising on failure."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as e:
        log.warning("Failed to remove %s: %s", path, e)
        return False
    return True


class CleanupRegistry:
    """Thread-safe set of paths registered by tests during a run.

    Paths are only removed by :meth:`drain_and_remove`, which the scheduler's
    caller invokes exactly once after all workers have returned.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: set[Path] = set()
        self._drained = False

    def register(self, path: str | PathLike[str]) -> None:
        """Schedule ``path`` for removal at the end of the run."""
        with self._lock:
            if self._drained:
                raise RuntimeError(
                    f"Cleanup registry already drained, cannot add {path}"
                )
            self._paths.add(Path(path))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, PathLike)):
            return False
        with self._lock:
            return Path(path) in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def drain_and_remove(self) -> Sequence[Path]:
        """Remove every registered path from disk and clear the registry.

        Returns:
            The paths that could not be removed.

        """
        with self._lock:
            if self._drained:
                raise RuntimeError("Cleanup registry can only be drained once")
            self._drained = True
            paths = sorted(self._paths)
            self._paths.clear()

        log.debug("Removing %d registered path(s)", len(paths))
        return [path for path in paths if not remove_path(path)]
