from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

HarnessMode = Literal["panic", "error"]


class Outcome(str, Enum):
    """Effect produced by an injection primitive."""

    ERROR = "error"
    PANIC = "panic"
    DELAY = "delay"


class DelayWindow(BaseModel):
    """Expected duration of a delayed operation, in milliseconds.

    The accepted range is ``[min_ms - tolerance_ms, min_ms + tolerance_ms]``,
    with the lower bound clamped at zero.
    """

    model_config = ConfigDict(frozen=True)

    min_ms: int
    tolerance_ms: int

    @field_validator("min_ms", "tolerance_ms")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("value must be non-negative")
        return value

    @property
    def lower_ms(self) -> int:
        return max(0, self.min_ms - self.tolerance_ms)

    @property
    def upper_ms(self) -> int:
        return self.min_ms + self.tolerance_ms

    def contains(self, elapsed_ms: float) -> bool:
        return self.lower_ms <= elapsed_ms <= self.upper_ms
