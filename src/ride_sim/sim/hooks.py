# sim/hooks.py
from typing import Protocol

from ride_sim.sim.event import BaseEvent


class SimHooks(Protocol):
    """Observer of the kernel loop and of the dispatcher's business events."""

    def run_start(self, *, until, max_events, qsize): ...

    def run_end(self, *, processed, last_t, qsize, wall_ms): ...

    def schedule(self, ev: BaseEvent, *, now, qsize): ...

    def dispatch_start(self, ev: BaseEvent, *, seq, qsize, handlers): ...

    def dispatch_end(self, ev: BaseEvent, *, produced, ms): ...

    def error(self, ev: BaseEvent, *, reason: str, **kw): ...

    # TripRequested / TripMatched / TripRejected / TripCompleted / DailyRollup
    def biz(self, ev) -> None: ...


class NoopHooks:
    """Accepts every hook call and does nothing; subclass to observe a few."""

    def _ignore(self, *_, **__) -> None:
        return None

    run_start = run_end = schedule = _ignore
    dispatch_start = dispatch_end = error = biz = _ignore
