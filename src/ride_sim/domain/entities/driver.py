# ride_sim/domain/entities/driver.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ride_sim.domain.entities.passenger import Passenger
from ride_sim.domain.entities.trip import Trip, require_trip
from ride_sim.domain.errors import InvalidArgumentError
from ride_sim.domain.fees import DRIVER_SHARE, PLATFORM_FEE, driver_payout

VIN_LENGTH = 17


class DriverStatus(Enum):
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"


def _check_vin(vin: object) -> str:
    if not isinstance(vin, str) or len(vin) != VIN_LENGTH or not (vin.isascii() and vin.isalnum()):
        raise InvalidArgumentError(f"vehicle_id must be {VIN_LENGTH} alphanumerics, got {vin!r}")
    return vin


@dataclass(kw_only=True)
class Driver(Passenger):
    """A driver is also a person who may ride; `trips` holds the rides they took.

    `driven_trips` only ever grows, through `add_driven_trip`.
    """

    vehicle_id: str
    status: DriverStatus = DriverStatus.AVAILABLE
    driven_trips: list[Trip] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        _check_vin(self.vehicle_id)
        raw = self.status.upper() if isinstance(self.status, str) else self.status
        try:
            self.status = DriverStatus(raw)
        except ValueError:
            raise InvalidArgumentError(f"unknown driver status {self.status!r}") from None

    @property
    def is_available(self) -> bool:
        return self.status is DriverStatus.AVAILABLE

    @property
    def last_driven_at(self) -> datetime | None:
        return max((t.start_time for t in self.driven_trips), default=None)

    def add_driven_trip(self, trip: Trip) -> None:
        self.driven_trips.append(require_trip(trip))

    def average_rating(self) -> float:
        ratings = [t.rating for t in self.driven_trips if not t.in_progress]
        if not ratings:
            return 0.0
        return sum(ratings) / len(ratings)

    def total_revenue(
        self, *, platform_fee: float = PLATFORM_FEE, driver_share: float = DRIVER_SHARE
    ) -> float:
        return sum(
            (
                driver_payout(t.cost, platform_fee=platform_fee, driver_share=driver_share)
                for t in self.driven_trips
                if not t.in_progress
            ),
            0.0,
        )

    def net_expenditures(self, **fees) -> float:
        """Spent riding minus earned driving (`fees` are passed to total_revenue)."""
        return super().net_expenditures() - self.total_revenue(**fees)
