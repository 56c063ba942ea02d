from __future__ import annotations

from dataclasses import dataclass

from mashumaro.mixins.json import DataClassJSONMixin


TICKS_PER_SECOND = 20
MS_PER_TICK = 1000 // TICKS_PER_SECOND


def ms_to_ticks(ms: int) -> int:
    """Convert milliseconds to ticks, never less than one tick."""
    return max(1, round(ms / MS_PER_TICK))


@dataclass
class TurnTimer(DataClassJSONMixin):
    """One-shot countdown timer (ticks at 20/s)."""

    ticks_remaining: int = 0

    def start(self, ticks: int) -> None:
        self.ticks_remaining = max(0, ticks)

    def clear(self) -> None:
        self.ticks_remaining = 0

    @property
    def is_running(self) -> bool:
        return self.ticks_remaining > 0

    def tick(self) -> bool:
        if self.ticks_remaining <= 0:
            return False
        self.ticks_remaining -= 1
        return self.ticks_remaining == 0

    def seconds_remaining(self) -> int:
        if self.ticks_remaining <= 0:
            return 0
        return (self.ticks_remaining + TICKS_PER_SECOND - 1) // TICKS_PER_SECOND
