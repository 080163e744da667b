# ride_sim/app/build.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ride_sim.app.controllers.demand import DemandHandler
from ride_sim.app.controllers.fleet import FleetHandler
from ride_sim.app.controllers.trips import TripHandler
from ride_sim.app.dispatcher import TripDispatcher
from ride_sim.app.events import EndOfDay
from ride_sim.app.wiring import wire
from ride_sim.config.models import ScenarioModel
from ride_sim.domain.state import WorldState
from ride_sim.io.loader import load_world
from ride_sim.io.recorder import JsonlSink, Recorder, Sink
from ride_sim.io.sim_logging import SimLogging
from ride_sim.runtime.policy_factory import (
    make_matching_policy,
    make_outcome_policy,
    make_pricing_policy,
)
from ride_sim.sim.clock import DAY, SimClock
from ride_sim.sim.hooks import NoopHooks
from ride_sim.sim.kernel import Kernel
from ride_sim.sim.rng import RNGRegistry


@dataclass
class App:
    kernel: Kernel
    clock: SimClock
    rng: RNGRegistry
    world: WorldState
    dispatcher: TripDispatcher
    demand: DemandHandler
    trips: TripHandler
    fleet: FleetHandler
    seeded: int  # trip requests scheduled up front


def build(
    cfg: ScenarioModel | Mapping,
    *,
    world: WorldState | None = None,
    worker: int = 0,
    use_logging: bool = True,
    sinks: Sequence[Sink] | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Clock & RNG
    clock = SimClock.from_fields(model.sim.epoch)
    rng_registry = RNGRegistry(model.sim.seed, scenario=model.name, worker=worker)

    # 2) Kernel (with hooks)
    recorder = Recorder(*(sinks or [JsonlSink()]))
    hooks = (
        SimLogging(
            run_id=model.run_id,
            recorder=recorder,
            clock=clock,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    kernel = Kernel(hooks=hooks)

    # 3) World & policies
    if world is None:
        d = model.data
        world = load_world(d.passengers, d.drivers, d.trips) if d else WorldState()
    matching = make_matching_policy(model.matching)
    pricing = make_pricing_policy(model.pricing)
    outcome = make_outcome_policy(model.outcome, rng_registry=rng_registry)

    # trips start at the simulated time of the event being handled
    dispatcher = TripDispatcher(
        world,
        matching=matching,
        pricing=pricing,
        hooks=hooks,
        clock=lambda: clock.to_wall(kernel.now),
        run_id=model.run_id,
    )

    # 4) Handlers
    demand = DemandHandler(
        dispatcher=dispatcher,
        clock=clock,
        rng=rng_registry.stream("demand"),
        outcome=outcome,
        requests_per_hour=model.demand.requests_per_hour,
    )
    trips = TripHandler(dispatcher=dispatcher, clock=clock, outcome=outcome, pricing=pricing)
    fleet = FleetHandler(
        dispatcher=dispatcher, clock=clock, pricing=pricing, horizon=float(model.sim.duration)
    )

    # 5) Wiring
    wire(kernel, demand=demand, trips=trips, fleet=fleet)

    # 6) Seed demand and the first daily rollup
    seeded = demand.seed(kernel, start=0.0, end=float(model.sim.duration))
    kernel.schedule(EndOfDay(t=DAY, day_index=0))

    return App(kernel, clock, rng_registry, world, dispatcher, demand, trips, fleet, seeded)
