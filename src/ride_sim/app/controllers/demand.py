# ride_sim/app/controllers/demand.py
import logging

from ride_sim.app.dispatcher import TripDispatcher
from ride_sim.app.events import TripFinished, TripRequested
from ride_sim.app.protocols import TripOutcomePolicy
from ride_sim.domain.errors import InvalidArgumentError
from ride_sim.sim.clock import HOUR, SimClock
from ride_sim.sim.kernel import Kernel

log = logging.getLogger("ride_sim.demand")


class DemandHandler:
    def __init__(
        self,
        dispatcher: TripDispatcher,
        clock: SimClock,
        rng,
        outcome: TripOutcomePolicy,
        requests_per_hour: float = 6.0,
    ):
        self.dispatcher = dispatcher
        self.clock = clock
        self.rng = rng
        self.outcome = outcome
        self.requests_per_hour = requests_per_hour
        self.rejected = 0

    def seed(self, kernel: Kernel, *, start: float, end: float) -> int:
        """Schedule Poisson arrivals in [start, end), each for a uniformly drawn passenger."""
        ids = list(self.dispatcher.world.passengers)
        if not ids:
            return 0
        mean_gap_s = HOUR / self.requests_per_hour
        n = 0
        t = start + float(self.rng.exponential(mean_gap_s))
        while t < end:
            pid = ids[int(self.rng.integers(0, len(ids)))]
            kernel.schedule(TripRequested(t=t, passenger_id=pid))
            n += 1
            t += float(self.rng.exponential(mean_gap_s))
        return n

    def on_trip_requested(self, ev: TripRequested):
        try:
            trip = self.dispatcher.request_trip(ev.passenger_id, now=self.clock.to_wall(ev.t))
        except InvalidArgumentError as exc:
            # request is lost; the dispatcher already reported the rejection
            self.rejected += 1
            log.debug("request from passenger %s dropped: %s", ev.passenger_id, exc)
            return []
        return [TripFinished(t=ev.t + self.outcome.duration_s(trip.id), trip_id=trip.id)]
