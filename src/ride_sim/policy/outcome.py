# ride_sim/policy/outcome.py
import numpy as np

from ride_sim.app.protocols import TripOutcomePolicy
from ride_sim.domain.entities.trip import RATINGS
from ride_sim.sim.rng import RNGRegistry


class ExpTripOutcomePolicy(TripOutcomePolicy):
    def __init__(
        self,
        rng_registry: RNGRegistry,
        mean_trip_s: float = 900.0,
        min_trip_s: float = 60.0,
        max_trip_s: float = 7200.0,
        rating_weights: list[float] | None = None,
    ):
        self.rng_registry = rng_registry
        self.mean_trip_s = mean_trip_s
        self.min_trip_s = min_trip_s
        self.max_trip_s = max_trip_s
        self._p = None
        if rating_weights:
            w = np.asarray(rating_weights, dtype=float)
            self._p = w / w.sum()

    def duration_s(self, trip_id: int) -> float:
        # one substream per trip, so draws do not depend on event order
        g = self.rng_registry.stream("trip_duration", trip_id)
        return float(np.clip(g.exponential(self.mean_trip_s), self.min_trip_s, self.max_trip_s))

    def rating(self, trip_id: int) -> int:
        g = self.rng_registry.stream("rating", trip_id)
        return int(g.choice(RATINGS, p=self._p))
