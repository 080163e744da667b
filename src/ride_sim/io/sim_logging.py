# ride_sim/io/sim_logging.py
import json
import logging
import sys
from dataclasses import asdict, is_dataclass

from ride_sim.io.recorder import Recorder
from ride_sim.sim.clock import SimClock
from ride_sim.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name: str = "ride_sim", level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SimLogging(NoopHooks):
    """
    Structured JSON logs for the kernel and the dispatcher, plus forwarding of
    business events to the recorder.
    """

    # kernel events worth an INFO line even without debug
    BUSINESS = {"TripRequested", "TripFinished", "EndOfDay"}

    def __init__(
        self,
        run_id: str = "local",
        clock: SimClock | None = None,
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id = run_id
        self.clock = clock
        self.debug = debug
        self.sample_every = max(1, sample_every)
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)
        self.processed = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        if self.clock is not None and extra.get("t") is not None:
            payload["wall"] = self.clock.stamp(extra["t"])
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    @staticmethod
    def _shape_event(ev) -> dict:
        base = {"t": getattr(ev, "t", None)}
        if is_dataclass(ev):
            base.update({k: v for k, v in asdict(ev).items() if k != "t"})
        return base

    # engine lifecycle

    def run_start(self, *, until, max_events, qsize):
        self._emit("INFO", "run_start", until=until, max_events=max_events, qsize=qsize)

    def run_end(self, *, processed, **extra):
        self._emit("INFO", "run_end", processed=processed, **extra)

    def schedule(self, ev, *, now, qsize):
        if self.debug and (qsize % self.sample_every) == 0:
            self._emit("DEBUG", "schedule", event=type(ev).__name__, now=now, qsize=qsize)

    def dispatch_start(self, ev, *, seq, qsize, handlers):
        self.processed += 1
        name = type(ev).__name__
        level = "INFO" if name in self.BUSINESS else ("DEBUG" if self.debug else None)
        if level:
            self._emit(level, name, **self._shape_event(ev), seq=seq, qsize=qsize)

    def dispatch_end(self, ev, *, produced, ms):
        if self.debug and (self.processed % self.sample_every) == 0:
            self._emit("DEBUG", "dispatch_done", event=type(ev).__name__, produced=produced, ms=ms)

    def error(self, ev, *, reason: str, **extra):
        self._emit("ERROR", "kernel_error", event=type(ev).__name__, reason=reason, **extra)

    # business events

    def biz(self, ev):
        if ev.name == "TripRejected":
            self._emit("WARNING", ev.name, **asdict(ev))
        elif self.debug:
            self._emit("DEBUG", ev.name, **asdict(ev))
        if self.recorder:
            self.recorder.emit(ev)
