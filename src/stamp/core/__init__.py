"""stamp core library - numbering engine and timestamp generator."""

from typing import TYPE_CHECKING

from stamp.core.types import CounterState, NumberedCode, SequentialSpec

if TYPE_CHECKING:
    from stamp.core.counters import CounterManager
    from stamp.core.factory import AppContext, build_context
    from stamp.core.generator import Generator

__all__ = [
    # Core classes
    "AppContext",
    "CounterManager",
    "Generator",
    "build_context",
    # Types
    "CounterState",
    "NumberedCode",
    "SequentialSpec",
]


def __getattr__(name: str):
    if name == "CounterManager":
        from stamp.core.counters import CounterManager

        return CounterManager
    if name == "Generator":
        from stamp.core.generator import Generator

        return Generator
    if name == "AppContext":
        from stamp.core.factory import AppContext

        return AppContext
    if name == "build_context":
        from stamp.core.factory import build_context

        return build_context
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
