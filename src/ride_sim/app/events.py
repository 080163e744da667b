# app/events.py
from dataclasses import dataclass

from ride_sim.sim.event import BaseEvent


# Demand-side
@dataclass(order=True)
class TripRequested(BaseEvent):
    passenger_id: int


# Trip lifecycle
@dataclass(order=True)
class TripFinished(BaseEvent):
    trip_id: int


# housekeeping
@dataclass(order=True)
class EndOfDay(BaseEvent):
    day_index: int
