# ride_sim/domain/entities/trip.py
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from math import isfinite

from ride_sim.domain.errors import InvalidArgumentError

RATINGS = (1, 2, 3, 4, 5)


def _aware(dt: datetime) -> datetime:
    # naive timestamps are read as UTC so every trip time stays comparable
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


@dataclass(frozen=True)
class TripCompletion:
    """Outcome of a finished trip. A trip either has all of it or none of it."""

    end_time: datetime
    cost: float
    rating: int

    def __post_init__(self):
        if not isinstance(self.end_time, datetime):
            raise InvalidArgumentError(f"end_time must be a datetime, got {self.end_time!r}")
        object.__setattr__(self, "end_time", _aware(self.end_time))
        if isinstance(self.cost, bool) or not isinstance(self.cost, (int, float)):
            raise InvalidArgumentError(f"cost must be a number, got {self.cost!r}")
        if not isfinite(self.cost) or self.cost < 0:
            raise InvalidArgumentError(f"cost must be a finite number >= 0, got {self.cost}")
        rating = self.rating
        if isinstance(rating, bool) or not isinstance(rating, int) or rating not in RATINGS:
            raise InvalidArgumentError(f"rating must be an integer in 1..5, got {self.rating!r}")


@dataclass
class Trip:
    id: int
    driver_id: int
    passenger_id: int
    start_time: datetime
    completion: TripCompletion | None = None  # None => in progress

    def __post_init__(self):
        if not isinstance(self.start_time, datetime):
            raise InvalidArgumentError(f"start_time must be a datetime, got {self.start_time!r}")
        self.start_time = _aware(self.start_time)
        if self.completion is not None:
            self._check_ends_after_start(self.completion)

    def _check_ends_after_start(self, completion: TripCompletion) -> None:
        if completion.end_time < self.start_time:
            raise InvalidArgumentError(
                f"trip {self.id} cannot end ({completion.end_time.isoformat()}) "
                f"before it starts ({self.start_time.isoformat()})"
            )

    @property
    def in_progress(self) -> bool:
        return self.completion is None

    @property
    def end_time(self) -> datetime | None:
        return self.completion.end_time if self.completion else None

    @property
    def cost(self) -> float | None:
        return self.completion.cost if self.completion else None

    @property
    def rating(self) -> int | None:
        return self.completion.rating if self.completion else None

    @property
    def duration(self) -> timedelta | None:
        if self.completion is None:
            return None
        return self.completion.end_time - self.start_time

    def complete(self, completion: TripCompletion) -> None:
        if self.completion is not None:
            raise InvalidArgumentError(f"trip {self.id} is already completed")
        self._check_ends_after_start(completion)
        self.completion = completion


def require_trip(trip: object) -> Trip:
    if not isinstance(trip, Trip):
        raise InvalidArgumentError(f"expected a Trip, got {trip!r}")
    return trip
