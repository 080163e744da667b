# ride_sim/domain/state.py
from dataclasses import dataclass, field

from ride_sim.domain.entities.driver import Driver
from ride_sim.domain.entities.passenger import Passenger
from ride_sim.domain.entities.trip import Trip
from ride_sim.domain.errors import InvalidArgumentError


@dataclass
class WorldState:
    # insertion order is collection order
    drivers: dict[int, Driver] = field(default_factory=dict)
    passengers: dict[int, Passenger] = field(default_factory=dict)
    trips: dict[int, Trip] = field(default_factory=dict)  # the ledger

    def add_driver(self, d: Driver) -> None:
        if d.id in self.drivers:
            raise InvalidArgumentError(f"duplicate driver id {d.id}")
        self.drivers[d.id] = d

    def add_passenger(self, p: Passenger) -> None:
        if p.id in self.passengers:
            raise InvalidArgumentError(f"duplicate passenger id {p.id}")
        self.passengers[p.id] = p

    def next_trip_id(self) -> int:
        return max(self.trips, default=0) + 1

    def available_drivers(self) -> list[Driver]:
        return [d for d in self.drivers.values() if d.is_available]

    def link_trip(self, trip: Trip) -> None:
        """Put `trip` in the ledger and in the history of everyone it involves.

        A passenger who also drives gets the trip on their driver record's
        `trips` as well, keyed by the shared id.
        """
        if trip.id in self.trips:
            raise InvalidArgumentError(f"duplicate trip id {trip.id}")
        driver = self.drivers.get(trip.driver_id)
        if driver is None:
            raise InvalidArgumentError(f"trip {trip.id} references unknown driver {trip.driver_id}")
        passenger = self.passengers.get(trip.passenger_id)
        if passenger is None:
            raise InvalidArgumentError(
                f"trip {trip.id} references unknown passenger {trip.passenger_id}"
            )

        self.trips[trip.id] = trip
        driver.add_driven_trip(trip)
        passenger.add_trip(trip)
        as_driver = self.drivers.get(passenger.id)
        if as_driver is not None and as_driver is not passenger:
            as_driver.add_trip(trip)
