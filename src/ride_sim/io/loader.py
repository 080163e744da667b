# ride_sim/io/loader.py
"""
CSV loading of passengers, drivers and trips into a cross-linked WorldState.

Expected headers:
  passengers: id,name,phone_num
  drivers:    id,name,vin,status
  trips:      id,driver_id,passenger_id,start_time,end_time,cost,rating

A trip row with empty end_time, cost and rating is loaded as in progress.
"""

import csv
import os
from datetime import UTC, datetime

from ride_sim.domain.entities.driver import Driver
from ride_sim.domain.entities.passenger import Passenger
from ride_sim.domain.entities.trip import Trip, TripCompletion
from ride_sim.domain.errors import InvalidArgumentError
from ride_sim.domain.state import WorldState

TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"  # e.g. 2018-05-25 11:52:40 -0700


def parse_time(raw: str) -> datetime:
    raw = raw.strip()
    try:
        dt = datetime.strptime(raw, TIME_FORMAT)
    except ValueError:
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            raise InvalidArgumentError(f"unparseable time {raw!r}") from None
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


def _number(r: dict[str, str], column: str, kind: type[int] | type[float]):
    raw = r.get(column, "")
    try:
        return kind(raw)
    except ValueError:
        row = r.get("id") or "?"
        raise InvalidArgumentError(
            f"row {row}: {column} must be {kind.__name__}, got {raw!r}"
        ) from None


def _rows(path: str | os.PathLike) -> list[dict[str, str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return [{k.strip(): (v or "").strip() for k, v in row.items()} for row in csv.DictReader(f)]


def load_passengers(path: str | os.PathLike) -> list[Passenger]:
    return [
        Passenger(id=_number(r, "id", int), name=r["name"], phone=r.get("phone_num", ""))
        for r in _rows(path)
    ]


def load_drivers(path: str | os.PathLike) -> list[Driver]:
    return [
        Driver(id=_number(r, "id", int), name=r["name"], vehicle_id=r["vin"], status=r["status"])
        for r in _rows(path)
    ]


def _completion(r: dict[str, str]) -> TripCompletion | None:
    cells = (r.get("end_time", ""), r.get("cost", ""), r.get("rating", ""))
    if not any(cells):
        return None
    if not all(cells):
        raise InvalidArgumentError(
            f"trip {r['id']}: end_time, cost and rating must be all set or all empty"
        )
    return TripCompletion(
        end_time=parse_time(cells[0]),
        cost=_number(r, "cost", float),
        rating=_number(r, "rating", int),
    )


def load_trips(path: str | os.PathLike) -> list[Trip]:
    return [
        Trip(
            id=_number(r, "id", int),
            driver_id=_number(r, "driver_id", int),
            passenger_id=_number(r, "passenger_id", int),
            start_time=parse_time(r["start_time"]),
            completion=_completion(r),
        )
        for r in _rows(path)
    ]


def load_world(
    passengers_csv: str | os.PathLike,
    drivers_csv: str | os.PathLike,
    trips_csv: str | os.PathLike,
) -> WorldState:
    world = WorldState()
    for p in load_passengers(passengers_csv):
        world.add_passenger(p)
    for d in load_drivers(drivers_csv):
        world.add_driver(d)
    # histories are chronological, whatever the file order
    for trip in sorted(load_trips(trips_csv), key=lambda t: (t.start_time, t.id)):
        world.link_trip(trip)
    return world
