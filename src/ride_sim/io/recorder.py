# ride_sim/io/recorder.py
import json
import logging
import sys
from dataclasses import asdict
from typing import Protocol

log = logging.getLogger("ride_sim.recorder")


class Sink(Protocol):
    def write(self, ev) -> None: ...


class JsonlSink:
    def __init__(self, fp=None):
        self.fp = fp

    def write(self, ev) -> None:
        fp = self.fp or sys.stdout
        fp.write(json.dumps(asdict(ev), default=str) + "\n")


class MemorySink:
    def __init__(self):
        self.events: list = []

    def write(self, ev) -> None:
        self.events.append(ev)

    def named(self, name: str) -> list:
        return [ev for ev in self.events if ev.name == name]


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, ev) -> None:
        for s in self.sinks:
            try:
                s.write(ev)
            except Exception:
                # a broken sink must not stop the simulation
                log.exception("sink %s failed on %s", type(s).__name__, type(ev).__name__)
