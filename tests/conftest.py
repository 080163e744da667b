from datetime import UTC, datetime
from pathlib import Path

import pytest

from ride_sim.app.dispatcher import TripDispatcher
from ride_sim.domain.entities.trip import Trip, TripCompletion
from ride_sim.io.loader import load_world

DATA = Path(__file__).resolve().parent / "data"
PASSENGERS_CSV = DATA / "passengers_test.csv"
DRIVERS_CSV = DATA / "drivers_test.csv"
TRIPS_CSV = DATA / "trips_test.csv"


def at(*parts: int) -> datetime:
    return datetime(*parts, tzinfo=UTC)


def make_trip(tid, *, start, driver_id=54, passenger_id=1, end=None, cost=None, rating=None):
    completion = None if end is None else TripCompletion(end_time=end, cost=cost, rating=rating)
    return Trip(
        id=tid,
        driver_id=driver_id,
        passenger_id=passenger_id,
        start_time=start,
        completion=completion,
    )


@pytest.fixture
def world():
    return load_world(PASSENGERS_CSV, DRIVERS_CSV, TRIPS_CSV)


@pytest.fixture
def dispatcher(world) -> TripDispatcher:
    return TripDispatcher(world)
