# sim/clock.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

MIN = 60.0
HOUR = 60 * MIN
DAY = 24 * HOUR


@dataclass(frozen=True)
class SimClock:
    """Maps kernel time (float seconds) onto tz-aware wall time.

    Trips, business events and log lines carry wall time; the kernel only
    ever sees seconds since `epoch`.
    """

    epoch: datetime

    @classmethod
    def from_fields(cls, fields: tuple[int, ...] | list[int]) -> SimClock:
        """Build from a (year, month, day[, hour, minute, second]) UTC tuple."""
        return cls(datetime(*fields, tzinfo=UTC))

    def to_wall(self, t: float) -> datetime:
        return self.epoch + timedelta(seconds=t)

    def to_sim(self, dt: datetime) -> float:
        aware = dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)
        return (aware - self.epoch).total_seconds()

    def stamp(self, t: float) -> str:
        return self.to_wall(t).isoformat()

    def day_index(self, t: float) -> int:
        return int(t // DAY)
