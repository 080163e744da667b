# ride_sim/app/controllers/fleet.py

from ride_sim.app.dispatcher import TripDispatcher
from ride_sim.app.events import EndOfDay
from ride_sim.app.protocols import PricingPolicy
from ride_sim.io.business_events import DailyRollupBiz
from ride_sim.sim.clock import DAY, SimClock


class FleetHandler:
    """End-of-day rollup of the fleet's ratings and earnings."""

    def __init__(
        self, dispatcher: TripDispatcher, clock: SimClock, pricing: PricingPolicy, horizon: float
    ):
        self.dispatcher = dispatcher
        self.clock = clock
        self.pricing = pricing
        self.horizon = horizon

    def on_end_of_day(self, ev: EndOfDay):
        drivers = self.dispatcher.drivers
        trips = self.dispatcher.trips
        ratings = [r for r in (d.average_rating() for d in drivers) if r > 0]
        self.dispatcher.hooks.biz(
            DailyRollupBiz(
                run_id=self.dispatcher.run_id,
                at=self.clock.stamp(ev.t),
                name="DailyRollup",
                day_index=ev.day_index,
                trips=len(trips),
                in_progress=sum(1 for t in trips if t.in_progress),
                available_drivers=sum(1 for d in drivers if d.is_available),
                fleet_revenue=sum((self.pricing.driver_revenue(d) for d in drivers), 0.0),
                mean_driver_rating=sum(ratings) / len(ratings) if ratings else None,
            )
        )
        nxt = ev.t + DAY
        if nxt > self.horizon:
            return []
        return [EndOfDay(t=nxt, day_index=ev.day_index + 1)]
