import io
import json
import logging

import pytest

from ride_sim.app.dispatcher import TripDispatcher
from ride_sim.domain.errors import InvalidArgumentError
from ride_sim.io.business_events import TripRequestedBiz
from ride_sim.io.recorder import JsonlSink, MemorySink, Recorder
from ride_sim.io.sim_logging import SimLogging


def requested(pid=1):
    return TripRequestedBiz(
        run_id="r", at="2025-01-01T00:00:00+00:00", name="TripRequested", passenger_id=pid
    )


class BrokenSink:
    def write(self, ev):
        raise OSError("disk full")


def test_jsonl_sink_writes_one_object_per_line():
    buf = io.StringIO()
    sink = JsonlSink(buf)
    sink.write(requested(1))
    sink.write(requested(2))
    lines = buf.getvalue().splitlines()
    assert [json.loads(line)["passenger_id"] for line in lines] == [1, 2]
    assert json.loads(lines[0])["name"] == "TripRequested"


def test_recorder_survives_a_broken_sink(caplog):
    memory = MemorySink()
    recorder = Recorder(BrokenSink(), memory)
    with caplog.at_level(logging.ERROR, logger="ride_sim.recorder"):
        recorder.emit(requested())
    assert memory.named("TripRequested") == [requested()]
    assert "BrokenSink" in caplog.text


def test_sim_logging_forwards_business_events_and_warns_on_rejection(world, caplog):
    memory = MemorySink()
    logger = logging.getLogger("ride_sim.test")
    hooks = SimLogging(run_id="r-9", recorder=Recorder(memory), logger=logger)
    dispatcher = TripDispatcher(world, hooks=hooks, run_id="r-9")

    dispatcher.request_trip(2)
    with caplog.at_level(logging.WARNING, logger="ride_sim.test"):
        with pytest.raises(InvalidArgumentError):
            dispatcher.request_trip(0)

    assert [ev.name for ev in memory.events] == [
        "TripRequested",
        "TripMatched",
        "TripRequested",
        "TripRejected",
    ]
    rejected = [r for r in caplog.records if r.getMessage() == "TripRejected"]
    assert len(rejected) == 1
    assert rejected[0].extra["run_id"] == "r-9"
    assert rejected[0].extra["passenger_id"] == 0
