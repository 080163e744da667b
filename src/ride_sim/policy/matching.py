# ride_sim/policy/matching.py
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from ride_sim.app.protocols import MatchingPolicy
from ride_sim.domain.entities.driver import Driver

TieBreak = Literal["lowest_id", "collection_order"]


@dataclass
class LeastRecentlyDrivenMatchingPolicy(MatchingPolicy):
    """
    Drivers who have never driven come first; everyone else follows by the
    start time of their latest driven trip, oldest first. Remaining ties go to
    the lowest id, or keep collection order with tie_break="collection_order".
    """

    tie_break: TieBreak = "lowest_id"

    def _key(self, d: Driver):
        tie = d.id if self.tie_break == "lowest_id" else 0
        last = d.last_driven_at
        return (0, tie) if last is None else (1, last, tie)

    def rank(self, candidates: Sequence[Driver]) -> list[Driver]:
        # sorted() is stable, so equal keys keep collection order
        return sorted(candidates, key=self._key)
