# ride_sim/domain/entities/passenger.py
from dataclasses import dataclass, field
from datetime import timedelta

from ride_sim.domain.entities.trip import Trip, require_trip
from ride_sim.domain.errors import InvalidArgumentError


@dataclass(kw_only=True)
class Passenger:
    """A rider. `trips` only ever grows, through `add_trip`."""

    id: int
    name: str
    phone: str = ""
    trips: list[Trip] = field(default_factory=list)  # chronological, as requested

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise InvalidArgumentError(f"id must be a positive integer, got {self.id!r}")
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentError(f"name must be a non-empty string, got {self.name!r}")

    def add_trip(self, trip: Trip) -> None:
        self.trips.append(require_trip(trip))

    def net_expenditures(self) -> float:
        """Total spent riding; trips still in progress have no cost yet."""
        return sum((t.cost for t in self.trips if not t.in_progress), 0.0)

    def total_time_spent(self) -> timedelta:
        return sum((t.duration for t in self.trips if not t.in_progress), timedelta())
