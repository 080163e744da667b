# ride_sim/app/dispatcher.py
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TypeVar

from ride_sim.app.protocols import MatchingPolicy, PricingPolicy
from ride_sim.domain.entities.driver import Driver, DriverStatus
from ride_sim.domain.entities.passenger import Passenger
from ride_sim.domain.entities.trip import Trip, TripCompletion
from ride_sim.domain.errors import InvalidArgumentError
from ride_sim.domain.state import WorldState
from ride_sim.io.business_events import (
    TripCompletedBiz,
    TripMatchedBiz,
    TripRejectedBiz,
    TripRequestedBiz,
)
from ride_sim.policy.matching import LeastRecentlyDrivenMatchingPolicy
from ride_sim.policy.pricing import PlatformFeePricingPolicy
from ride_sim.sim.hooks import NoopHooks, SimHooks

T = TypeVar("T")


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TripDispatcher:
    """
    Owns the drivers, passengers and trip ledger, and matches trip requests to
    drivers. Every failing operation raises InvalidArgumentError before it
    changes anything.
    """

    def __init__(
        self,
        world: WorldState | None = None,
        *,
        matching: MatchingPolicy | None = None,
        pricing: PricingPolicy | None = None,
        hooks: SimHooks | None = None,
        clock: Callable[[], datetime] = _utc_now,
        run_id: str = "local",
    ):
        self.world = world if world is not None else WorldState()
        self.matching = matching or LeastRecentlyDrivenMatchingPolicy()
        self.pricing = pricing or PlatformFeePricingPolicy()
        self.hooks = hooks or NoopHooks()
        self.clock = clock
        self.run_id = run_id

    # ------------- collections --------------

    @property
    def drivers(self) -> list[Driver]:
        return list(self.world.drivers.values())

    @property
    def passengers(self) -> list[Passenger]:
        return list(self.world.passengers.values())

    @property
    def trips(self) -> list[Trip]:
        return list(self.world.trips.values())

    # ------------- lookups --------------

    @staticmethod
    def _find(table: dict[int, T], key: int, kind: str) -> T:
        if isinstance(key, bool) or not isinstance(key, int) or key <= 0:
            raise InvalidArgumentError(f"invalid {kind} id {key!r}")
        try:
            return table[key]
        except KeyError:
            raise InvalidArgumentError(f"no {kind} with id {key}") from None

    def find_driver(self, driver_id: int) -> Driver:
        return self._find(self.world.drivers, driver_id, "driver")

    def find_passenger(self, passenger_id: int) -> Passenger:
        return self._find(self.world.passengers, passenger_id, "passenger")

    def find_trip(self, trip_id: int) -> Trip:
        return self._find(self.world.trips, trip_id, "trip")

    # ------------- dispatch --------------

    def _select_driver(self, passenger: Passenger) -> tuple[Driver, int]:
        available = self.world.available_drivers()
        if not available:
            raise InvalidArgumentError("no drivers available")
        for d in self.matching.rank(available):
            # same id across records is the same person
            if d.id != passenger.id:
                return d, len(available)
        raise InvalidArgumentError(
            f"no eligible driver for passenger {passenger.id}: "
            "the only available driver is the passenger"
        )

    def request_trip(self, passenger_id: int, *, now: datetime | None = None) -> Trip:
        at = now or self.clock()
        self.hooks.biz(
            TripRequestedBiz(
                run_id=self.run_id,
                at=at.isoformat(),
                name="TripRequested",
                passenger_id=passenger_id,
            )
        )
        try:
            passenger = self.find_passenger(passenger_id)
            driver, candidates = self._select_driver(passenger)
        except InvalidArgumentError as exc:
            self.hooks.biz(
                TripRejectedBiz(
                    run_id=self.run_id,
                    at=at.isoformat(),
                    name="TripRejected",
                    passenger_id=passenger_id,
                    reason=str(exc),
                )
            )
            raise

        reason = "never_driven" if not driver.driven_trips else "least_recently_driven"
        trip = Trip(
            id=self.world.next_trip_id(),
            driver_id=driver.id,
            passenger_id=passenger.id,
            start_time=at,
        )
        self.world.link_trip(trip)
        driver.status = DriverStatus.UNAVAILABLE

        self.hooks.biz(
            TripMatchedBiz(
                run_id=self.run_id,
                at=at.isoformat(),
                name="TripMatched",
                trip_id=trip.id,
                passenger_id=passenger.id,
                driver_id=driver.id,
                reason=reason,
                candidates=candidates,
            )
        )
        return trip

    def complete_trip(
        self, trip_id: int, *, end_time: datetime, cost: float, rating: int
    ) -> Trip:
        """Attach the outcome to an in-progress trip and free its driver."""
        trip = self.find_trip(trip_id)
        trip.complete(TripCompletion(end_time=end_time, cost=cost, rating=rating))
        driver = self.world.drivers[trip.driver_id]
        driver.status = DriverStatus.AVAILABLE

        self.hooks.biz(
            TripCompletedBiz(
                run_id=self.run_id,
                at=trip.end_time.isoformat(),
                name="TripCompleted",
                trip_id=trip.id,
                passenger_id=trip.passenger_id,
                driver_id=driver.id,
                cost=trip.cost,
                rating=trip.rating,
                driver_payout=self.pricing.driver_payout(trip.cost),
                duration_s=trip.duration.total_seconds(),
            )
        )
        return trip
