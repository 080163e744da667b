# ride_sim/app/wiring.py
from ride_sim.app.controllers.demand import DemandHandler
from ride_sim.app.controllers.fleet import FleetHandler
from ride_sim.app.controllers.trips import TripHandler
from ride_sim.app.events import EndOfDay, TripFinished, TripRequested
from ride_sim.sim.kernel import Kernel


def wire(
    kernel: Kernel,
    *,
    demand: DemandHandler,
    trips: TripHandler,
    fleet: FleetHandler | None = None,
) -> None:
    k = kernel

    # demand → dispatch
    k.on(TripRequested, demand.on_trip_requested)

    # trips
    k.on(TripFinished, trips.on_trip_finished)

    # daily rollups
    if fleet:
        k.on(EndOfDay, fleet.on_end_of_day)
