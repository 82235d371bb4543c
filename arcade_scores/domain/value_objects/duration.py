"""Duration value object"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Duration:
    """Elapsed game time in milliseconds

    May be negative when the submitted end precedes the recorded start; such
    a value simply falls outside every valid range.
    """

    milliseconds: int

    @classmethod
    def between(cls, start_ms: int, end_ms: int) -> "Duration":
        """Create duration from two epoch-millisecond timestamps"""
        return cls(end_ms - start_ms)

    def is_within(self, minimum_ms: int, maximum_ms: int) -> bool:
        """Check inclusive bounds"""
        return minimum_ms <= self.milliseconds <= maximum_ms

    @property
    def seconds(self) -> float:
        """Get duration in seconds"""
        return self.milliseconds / 1000.0

    def __str__(self) -> str:
        """String representation"""
        return f"{self.seconds:.3f}s"
