"""Shared types and data structures for stamp."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Annotated, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

DEFAULT_PREFIX = "P"
DEFAULT_WIDTH = 4
DEFAULT_START = 1

# Booleans and numeric strings are rejected rather than coerced
Count = Annotated[StrictInt, Field(ge=0)]


@dataclass(frozen=True)
class SequentialSpec:
    """How to detect and format sequential codes.

    Empty or non-positive fields fall back to their defaults through
    normalized(); callers may pass partial specs.
    """

    prefix: str = DEFAULT_PREFIX
    width: int = DEFAULT_WIDTH
    start: int = DEFAULT_START

    def normalized(self) -> SequentialSpec:
        return replace(
            self,
            prefix=self.prefix or DEFAULT_PREFIX,
            width=self.width if self.width > 0 else DEFAULT_WIDTH,
            start=self.start if self.start > 0 else DEFAULT_START,
        )


PROJECT_SPEC = SequentialSpec(prefix="P", width=4, start=1)


class NumberedCode(NamedTuple):
    """A rendered code together with its numeric value."""

    code: str
    value: int


class CounterState(BaseModel):
    """Persisted counter record.

    analog maps a scope key (a YYYY-MM-DD date) to its count. A missing key
    counts as 0.
    """

    model_config = ConfigDict(validate_assignment=True)

    project: Count = 0
    analog: dict[str, Count] = Field(default_factory=dict)

    @field_validator("analog", mode="before")
    @classmethod
    def _null_analog(cls, value):
        return {} if value is None else value

    @field_validator("project", mode="before")
    @classmethod
    def _null_project(cls, value):
        return 0 if value is None else value
