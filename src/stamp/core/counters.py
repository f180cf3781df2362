"""File-backed counters for analog and project codes."""

import logging
from pathlib import Path
from threading import Lock

from stamp.core.sequential import format_code
from stamp.core.types import PROJECT_SPEC, CounterState, NumberedCode
from stamp.storage.counter_store import (
    CounterError,
    CounterFileCorruptedError,
    CounterStore,
)

logger = logging.getLogger(__name__)

__all__ = ["CounterError", "CounterManager"]


class CounterManager:
    """Manages per-date analog counters and the project counter.

    The manager is the only writer of its counter file. Every operation holds
    a single lock for its whole read-modify-persist sequence, and a failed
    save restores the in-memory state, so an error means nothing changed.
    """

    def __init__(self, counter_file: Path | str, project_start: int = 1):
        """
        Initialize counter manager and load (or create) the counter file.

        Args:
            counter_file: Path to the counter JSON file (~ is expanded)
            project_start: First project number for a fresh counter file

        Raises:
            OSError: If the file's directory cannot be created or the
                initial state cannot be written
        """
        if project_start < 0:
            raise ValueError("project_start must be non-negative")

        self.counter_file = Path(counter_file).expanduser()
        self.project_start = project_start
        self._store = CounterStore(self.counter_file)
        self._lock = Lock()

        self.counter_file.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._state = self._store.load()
        except FileNotFoundError:
            logger.debug("No counter file at %s, creating", self.counter_file)
            self._state = self._fresh_state()
            self._store.save(self._state)
        except CounterFileCorruptedError as e:
            logger.warning("Counter file corrupted, starting fresh: %s", e)
            self._state = self._fresh_state()
            self._store.save(self._state)

    def _fresh_state(self) -> CounterState:
        return CounterState(project=max(self.project_start - 1, 0))

    def _commit(self, previous: CounterState) -> None:
        """Persist current state, restoring previous on failure."""
        try:
            self._store.save(self._state)
        except Exception:
            self._state = previous
            raise

    def _snapshot(self) -> CounterState:
        return self._state.model_copy(deep=True)

    @staticmethod
    def _analog_code(scope: str, value: int) -> str:
        return f"{scope}-A{value}"

    # --- Analog (per-date) counters ---

    def allocate_analog(self, scope: str) -> NumberedCode:
        """
        Increment the counter for scope and return the new code and value.

        Raises:
            OSError: If saving fails (the increment is rolled back)
        """
        with self._lock:
            previous = self._snapshot()
            value = self._state.analog.get(scope, 0) + 1
            self._state.analog[scope] = value
            self._commit(previous)

        logger.debug("Analog counter for %s is now %d", scope, value)
        return NumberedCode(self._analog_code(scope, value), value)

    def next_analog(self, scope: str) -> str:
        """Return the next analog code for scope (e.g. 2025-11-12-A3)."""
        return self.allocate_analog(scope).code

    def check_analog(self, scope: str) -> str:
        """Return what next_analog would return, without incrementing."""
        with self._lock:
            current = self._state.analog.get(scope, 0)
        return self._analog_code(scope, current + 1)

    def reset_analog(self, scope: str) -> None:
        """Remove the counter for scope."""
        with self._lock:
            previous = self._snapshot()
            self._state.analog.pop(scope, None)
            self._commit(previous)

    def get_analog(self, scope: str) -> int:
        """Return the stored count for scope (0 if unseen)."""
        with self._lock:
            return self._state.analog.get(scope, 0)

    # --- Project counter ---

    def next_project(self, title: str = "") -> str:
        """
        Increment the project counter and return the project code.

        Args:
            title: Optional title appended after a space

        Raises:
            OSError: If saving fails (the increment is rolled back)
        """
        with self._lock:
            previous = self._snapshot()
            self._state.project += 1
            self._commit(previous)
            value = self._state.project

        result = format_code(PROJECT_SPEC, value)
        if title:
            result += " " + title
        return result

    def check_project(self) -> str:
        """Return what next_project would return, without incrementing."""
        with self._lock:
            return format_code(PROJECT_SPEC, self._state.project + 1)

    def reset_project(self) -> None:
        """Reset the project counter so the next code is project_start."""
        with self._lock:
            previous = self._snapshot()
            self._state.project = max(self.project_start - 1, 0)
            self._commit(previous)

    def set_project(self, value: int) -> None:
        """
        Set the project counter to value.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("counter value must be non-negative")

        with self._lock:
            previous = self._snapshot()
            self._state.project = value
            self._commit(previous)

    def get_project(self) -> int:
        """Return the current project counter value."""
        with self._lock:
            return self._state.project

    def reset_all(self) -> None:
        """Clear every analog counter and reset the project counter."""
        with self._lock:
            previous = self._snapshot()
            self._state = self._fresh_state()
            self._commit(previous)

    def __repr__(self) -> str:
        return f"CounterManager({self.counter_file})"
