# ride_sim/app/controllers/trips.py

from ride_sim.app.dispatcher import TripDispatcher
from ride_sim.app.events import TripFinished
from ride_sim.app.protocols import PricingPolicy, TripOutcomePolicy
from ride_sim.sim.clock import SimClock


class TripHandler:
    def __init__(
        self,
        dispatcher: TripDispatcher,
        clock: SimClock,
        outcome: TripOutcomePolicy,
        pricing: PricingPolicy,
    ):
        self.dispatcher = dispatcher
        self.clock = clock
        self.outcome = outcome
        self.pricing = pricing

    def on_trip_finished(self, ev: TripFinished):
        trip = self.dispatcher.find_trip(ev.trip_id)
        if not trip.in_progress:
            return []  # completed by someone else already
        self.dispatcher.complete_trip(
            trip.id,
            end_time=self.clock.to_wall(ev.t),
            cost=float(self.pricing.fare(trip)),
            rating=self.outcome.rating(trip.id),
        )
        return []
