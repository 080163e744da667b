from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ride_sim.domain.entities.driver import Driver
from ride_sim.domain.entities.trip import Trip


@runtime_checkable
class MatchingPolicy(Protocol):
    """
    Responsibilities:
      • Order available drivers from most to least preferred for a new trip.
      • Be deterministic for a given input order.
    Eligibility (status, not matching a driver to themselves) is the dispatcher's job.
    """

    def rank(self, candidates: Sequence[Driver]) -> list[Driver]: ...


@runtime_checkable
class PricingPolicy(Protocol):
    def fare(self, trip: Trip) -> float: ...
    def driver_payout(self, cost: float) -> float: ...
    def driver_revenue(self, driver: Driver) -> float: ...


@runtime_checkable
class TripOutcomePolicy(Protocol):
    """How long a simulated trip lasts and how the passenger rates it."""

    def duration_s(self, trip_id: int) -> float: ...
    def rating(self, trip_id: int) -> int: ...
