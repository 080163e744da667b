# ride_sim/io/business_events.py

from dataclasses import dataclass
from typing import Literal


# Analytics records; these never go on the kernel queue
@dataclass
class BizEvent:
    run_id: str
    at: str  # wall time, ISO 8601
    name: str  # stable event name


@dataclass
class TripRequestedBiz(BizEvent):
    passenger_id: int


@dataclass
class TripMatchedBiz(BizEvent):
    trip_id: int
    passenger_id: int
    driver_id: int
    reason: Literal["never_driven", "least_recently_driven"]
    candidates: int


@dataclass
class TripRejectedBiz(BizEvent):
    passenger_id: int
    reason: str


@dataclass
class TripCompletedBiz(BizEvent):
    trip_id: int
    passenger_id: int
    driver_id: int
    cost: float
    rating: int
    driver_payout: float
    duration_s: float


@dataclass
class DailyRollupBiz(BizEvent):
    day_index: int
    trips: int
    in_progress: int
    available_drivers: int
    fleet_revenue: float
    mean_driver_rating: float | None = None
