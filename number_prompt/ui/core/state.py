"""
Prompt State - Enums and Data Structures
"""
from enum import Enum
from dataclasses import dataclass
from typing import Any, Optional


class PromptState(Enum):
    """Lifecycle states of a number prompt"""
    OPEN = "open"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    DESTROYED = "destroyed"
    NO_TARGET = "no_target"  # Never attached: target could not be resolved


@dataclass
class PromptData:
    """Data for a number input prompt"""
    message: str
    title: str
    default: Any = 0
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    timeout: float = 0.0
    start_time: float = 0.0
    entry: Any = None
    closed: bool = False

    @property
    def has_timeout(self) -> bool:
        return self.timeout > 0

    def accepts(self, entry: Any) -> bool:
        """Check the serialized length of an entry against min/max bounds."""
        length = len(str(entry))
        if self.min_value is not None and length < self.min_value:
            return False
        if self.max_value is not None and length > self.max_value:
            return False
        return True


@dataclass(frozen=True)
class PromptResult:
    """Outcome of a blocking prompt request"""
    entry: Any = None
    state: PromptState = PromptState.NO_TARGET

    @property
    def submitted(self) -> bool:
        return self.entry is not None
