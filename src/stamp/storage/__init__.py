"""Storage layer for stamp - counter file persistence."""

from stamp.storage.counter_store import (
    CounterError,
    CounterFileCorruptedError,
    CounterStore,
)

__all__ = [
    "CounterError",
    "CounterFileCorruptedError",
    "CounterStore",
]
