"""Time source used by the game use cases"""

import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """Supplies the current time as epoch integers"""

    @abstractmethod
    def now_ms(self) -> int:
        """Milliseconds since the epoch"""
        pass

    def now_s(self) -> int:
        """Seconds since the epoch"""
        return self.now_ms() // 1000

    def isoformat(self) -> str:
        """Current UTC time as an ISO 8601 string with a ``Z`` suffix"""
        now = datetime.fromtimestamp(self.now_ms() / 1000, tz=timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SystemClock(Clock):
    """Wall-clock time"""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class FrozenClock(Clock):
    """Clock that only moves when told to"""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.current_ms = start_ms

    def now_ms(self) -> int:
        return self.current_ms

    def advance(self, milliseconds: int) -> None:
        """Move the clock forward"""
        self.current_ms += milliseconds


system_clock = SystemClock()
