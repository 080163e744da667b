# sim/kernel.py

import heapq
import time
from collections import defaultdict
from collections.abc import Callable, Iterable

from .event import BaseEvent
from .hooks import NoopHooks, SimHooks

Handler = Callable[[BaseEvent], Iterable[BaseEvent] | None]

# float slack when comparing an event time against now
_EPS = 1e-12


class Kernel:
    """
    Discrete-event loop. Events pop in time order, FIFO among equal times;
    every handler subscribed to an event's exact type runs, and whatever it
    returns is scheduled.
    """

    def __init__(self, hooks: SimHooks | None = None):
        self._t = 0.0
        self._q: list[tuple[float, int, BaseEvent]] = []
        self._seq = 0
        self._subs: defaultdict[type[BaseEvent], list[Handler]] = defaultdict(list)
        self._hooks = hooks or NoopHooks()

    @property
    def now(self) -> float:
        return self._t

    @property
    def pending(self) -> int:
        return len(self._q)

    def on(self, etype: type[BaseEvent], handler: Handler) -> None:
        self._subs[etype].append(handler)

    def schedule(self, ev: BaseEvent) -> None:
        if ev.t + _EPS < self._t:
            self._hooks.error(ev, reason="scheduled_past", scheduled_t=ev.t, now=self._t)
            raise RuntimeError(f"cannot schedule {type(ev).__name__} at {ev.t} < now {self._t}")
        self._seq += 1
        heapq.heappush(self._q, (ev.t, self._seq, ev))
        self._hooks.schedule(ev, now=self._t, qsize=len(self._q))

    def _due(self, until: float | None) -> bool:
        return bool(self._q) and (until is None or self._q[0][0] <= until)

    def _dispatch(self, seq: int, ev: BaseEvent) -> None:
        handlers = self._subs.get(type(ev), [])
        started = time.perf_counter()
        self._hooks.dispatch_start(ev, seq=seq, qsize=len(self._q), handlers=len(handlers))
        produced = 0
        for handler in handlers:
            for nxt in handler(ev) or ():
                self.schedule(nxt)
                produced += 1
        ms = (time.perf_counter() - started) * 1000
        self._hooks.dispatch_end(ev, produced=produced, ms=ms)

    def run(self, until: float | None = None, max_events: int | None = None) -> int:
        """Process due events; returns how many were dispatched."""
        started = time.perf_counter()
        self._hooks.run_start(until=until, max_events=max_events, qsize=len(self._q))
        processed = 0
        while self._due(until) and (max_events is None or processed < max_events):
            self._t, seq, ev = heapq.heappop(self._q)
            self._dispatch(seq, ev)
            processed += 1
        self._hooks.run_end(
            processed=processed,
            last_t=self._t,
            qsize=len(self._q),
            wall_ms=(time.perf_counter() - started) * 1000,
        )
        return processed
