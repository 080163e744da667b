# tests/sim/test_kernel.py
from dataclasses import dataclass

import pytest

from ride_sim.sim.event import BaseEvent
from ride_sim.sim.hooks import NoopHooks
from ride_sim.sim.kernel import Kernel


# ---- demo events ----
@dataclass(order=True)
class Request(BaseEvent):
    n: int = 0


@dataclass(order=True)
class Finish(BaseEvent):
    n: int = 0


# ---- demo handlers ----
def handle_request(ev: Request):
    out: list[BaseEvent] = [Finish(t=ev.t + 0.5, n=ev.n)]
    if ev.n > 0:
        out.append(Request(t=ev.t + 1.0, n=ev.n - 1))
    return out


class TraceHooks(NoopHooks):
    def __init__(self):
        self.trace = []
        self.errors = []

    def dispatch_start(self, ev, *, seq, qsize, handlers):
        self.trace.append((ev.t, type(ev).__name__))

    def error(self, ev, *, reason, **kw):
        self.errors.append(reason)


def test_events_run_in_time_order_with_fan_out():
    hooks = TraceHooks()
    k = Kernel(hooks=hooks)
    k.on(Request, handle_request)
    k.on(Finish, lambda ev: None)

    k.schedule(Request(t=0.0, n=2))
    assert k.run(until=3.0) == 6
    assert hooks.trace == [
        (0.0, "Request"),
        (0.5, "Finish"),
        (1.0, "Request"),
        (1.5, "Finish"),
        (2.0, "Request"),
        (2.5, "Finish"),
    ]
    assert k.now == 2.5
    assert k.pending == 0


def test_equal_times_are_fifo():
    k = Kernel()
    seen: list[int] = []
    k.on(Request, lambda ev: seen.append(ev.n))
    for n in (3, 1, 2):
        k.schedule(Request(t=5.0, n=n))
    k.run()
    assert seen == [3, 1, 2]


def test_until_and_max_events_stop_early():
    k = Kernel()
    k.on(Request, handle_request)
    k.schedule(Request(t=0.0, n=10))
    assert k.run(max_events=1) == 1
    assert k.now == 0.0
    assert k.run(until=0.9) == 1  # the Finish at 0.5
    assert k.pending == 1


def test_scheduling_in_the_past_raises():
    hooks = TraceHooks()
    k = Kernel(hooks=hooks)
    k.on(Request, lambda ev: [Request(t=ev.t - 1.0)])
    k.schedule(Request(t=1.0))
    with pytest.raises(RuntimeError):
        k.run()
    assert hooks.errors == ["scheduled_past"]
