from datetime import datetime, timedelta

import pytest

from conftest import at, make_trip
from ride_sim.domain.entities.passenger import Passenger
from ride_sim.domain.entities.trip import TripCompletion
from ride_sim.domain.errors import InvalidArgumentError

# ------------------ Trip ------------------


def test_new_trip_is_in_progress():
    trip = make_trip(1, start=at(2018, 1, 1))
    assert trip.in_progress
    assert (trip.end_time, trip.cost, trip.rating) == (None, None, None)
    assert trip.duration is None


def test_complete_sets_end_cost_and_rating_together():
    trip = make_trip(1, start=at(2018, 1, 1))
    trip.complete(TripCompletion(end_time=at(2018, 1, 1, 0, 30), cost=12.5, rating=4))
    assert not trip.in_progress
    assert (trip.end_time, trip.cost, trip.rating) == (at(2018, 1, 1, 0, 30), 12.5, 4)
    assert trip.duration == timedelta(minutes=30)


def test_completed_trip_cannot_be_completed_again():
    trip = make_trip(1, start=at(2018, 1, 1), end=at(2018, 1, 2), cost=3, rating=2)
    with pytest.raises(InvalidArgumentError):
        trip.complete(TripCompletion(end_time=at(2018, 1, 3), cost=99, rating=5))
    assert (trip.cost, trip.rating) == (3, 2)


def test_trip_cannot_end_before_it_starts():
    with pytest.raises(InvalidArgumentError):
        make_trip(1, start=at(2018, 1, 2), end=at(2018, 1, 1), cost=3, rating=2)
    trip = make_trip(2, start=at(2018, 1, 2))
    with pytest.raises(InvalidArgumentError):
        trip.complete(TripCompletion(end_time=at(2018, 1, 1), cost=3, rating=2))
    assert trip.in_progress


@pytest.mark.parametrize("rating", [0, 6, 4.5, True, None])
def test_completion_rejects_bad_rating(rating):
    with pytest.raises(InvalidArgumentError):
        TripCompletion(end_time=at(2018, 1, 1), cost=1.0, rating=rating)


@pytest.mark.parametrize("cost", [-0.01, "12", None, float("nan"), float("inf")])
def test_completion_rejects_bad_cost(cost):
    with pytest.raises(InvalidArgumentError):
        TripCompletion(end_time=at(2018, 1, 1), cost=cost, rating=3)


def test_naive_times_are_read_as_utc():
    trip = make_trip(1, start=datetime(2018, 1, 1, 8))
    assert trip.start_time == at(2018, 1, 1, 8)


# ------------------ Passenger ------------------


def test_passenger_validates_id_and_name():
    with pytest.raises(InvalidArgumentError):
        Passenger(id=0, name="Ada")
    with pytest.raises(InvalidArgumentError):
        Passenger(id=1, name="")


def test_passenger_add_trip_requires_a_trip():
    p = Passenger(id=1, name="Ada", phone="412-432-7640")
    with pytest.raises(InvalidArgumentError):
        p.add_trip("trip")
    assert p.trips == []


def test_passenger_history_grows_by_appending():
    p = Passenger(id=1, name="Ada")
    first, second = make_trip(1, start=at(2018, 1, 2)), make_trip(2, start=at(2018, 1, 1))
    p.add_trip(first)
    p.add_trip(second)
    # kept in the order added, never re-sorted or replaced
    assert p.trips == [first, second]
    assert p.trips[0] is first


def test_passenger_spending_and_time_ignore_trips_in_progress():
    p = Passenger(id=1, name="Ada")
    p.add_trip(make_trip(1, start=at(2018, 1, 1, 8), end=at(2018, 1, 1, 8, 20), cost=9, rating=5))
    p.add_trip(make_trip(2, start=at(2018, 1, 2, 8), end=at(2018, 1, 2, 9), cost=21, rating=3))
    p.add_trip(make_trip(3, start=at(2018, 1, 3, 8)))

    assert p.net_expenditures() == pytest.approx(30.0)
    assert p.total_time_spent() == timedelta(minutes=80)


def test_passenger_without_trips():
    p = Passenger(id=1, name="Ada")
    assert p.net_expenditures() == 0.0
    assert p.total_time_spent() == timedelta()
