"""Fake Git implementation for testing.

FakeGit records update() calls and fails or delays them deterministically,
so batch behavior can be tested without a git binary.
"""

import threading
import time
from pathlib import Path

from pack.core.errors import GitUpdateError
from pack.core.git.abc import Git


class FakeGit(Git):
    """In-memory fake implementation of the version-control adapter.

    Constructor Injection:
    - All behavior is provided via constructor parameters
    - Calls are recorded for assertions; safe to call from many threads

    Examples:
        # Every update succeeds
        >>> git = FakeGit()

        # One plugin fails with a typed error
        >>> git = FakeGit(failures={"tpope/vim-fugitive": "merge conflict"})

        # One plugin is slow
        >>> git = FakeGit(delays={"fatih/vim-go": 0.05})
    """

    def __init__(
        self,
        *,
        failures: dict[str, str] | None = None,
        crashes: dict[str, Exception] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        """Initialize fake with predetermined results.

        Args:
            failures: Plugin name to GitUpdateError message
            crashes: Plugin name to an arbitrary exception to raise
            delays: Plugin name to seconds to block before returning
        """
        self._failures = failures or {}
        self._crashes = crashes or {}
        self._delays = delays or {}
        self._lock = threading.Lock()
        self._update_calls: list[tuple[str, Path]] = []
        self._running = 0
        self._max_running = 0

    def update(self, name: str, path: Path) -> None:
        with self._lock:
            self._update_calls.append((name, path))
            self._running += 1
            self._max_running = max(self._max_running, self._running)
        try:
            delay = self._delays.get(name)
            if delay:
                time.sleep(delay)
            if name in self._crashes:
                raise self._crashes[name]
            if name in self._failures:
                raise GitUpdateError(name, self._failures[name])
        finally:
            with self._lock:
                self._running -= 1

    @property
    def update_calls(self) -> list[tuple[str, Path]]:
        """Get the (name, path) pairs passed to update(), in call order.

        This property is for test assertions only.
        """
        with self._lock:
            return self._update_calls.copy()

    @property
    def updated_names(self) -> list[str]:
        """Names passed to update(), sorted."""
        return sorted(name for name, _ in self.update_calls)

    @property
    def max_concurrent_updates(self) -> int:
        """Highest number of update() calls that were in flight at once."""
        with self._lock:
            return self._max_running
