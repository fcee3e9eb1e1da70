"""
Pytest fixtures for console tests.

Provides a small world with one entity of every interesting shape and a
console context that records gateway requests and viewport calls.
"""

import pytest

from sim.gateway import RecordingGateway, RecordingViewport, WorldGateway
from sim.types import (
    AcceptedCargo,
    Company,
    Group,
    Industry,
    Order,
    OrderType,
    ProducedCargo,
    Town,
    Train,
    Vehicle,
    VehiclePart,
    VehicleType,
)
from sim.world import World

from console.config import ConsoleConfig, ConsoleContext, GameMode
from console.orchestrator import Interpreter
from console.output import BufferedOutput

LOCAL = 0
RIVAL = 1


def make_world() -> World:
    world = World(local_company=LOCAL)

    world.add_company(Company(LOCAL, "Local Transport"))
    world.add_company(Company(RIVAL, "Rival Haulage", service_interval_percent=True))

    world.add_group(Group(1, LOCAL, "Coal"))
    world.add_group(Group(2, LOCAL, "Coal Express"))
    world.add_group(Group(3, LOCAL, "Passengers"))
    world.add_group(Group(4, RIVAL, "Rival Group"))

    # Running coal train, one year old
    world.add_vehicle(Train(
        id=1, unit_number=1, owner=LOCAL,
        x=10, y=20, z=3, tile=500,
        cur_speed=100, max_speed=160, consist_max_speed=120,
        total_length=40, power=1000, weight=200,
        num_orders=4, current_order_index=1,
        current_order=Order(OrderType.GOTO_STATION),
        age=365, max_age=30 * 365,
        profit_this_year=1000, profit_last_year=2000,
        group_id=1,
        parts=[
            VehiclePart(1, "passengers", 0, 160, is_engine=True),
            VehiclePart(101, "coal", 30, 120),
            VehiclePart(102, "coal", 30, 120, articulated=True),
            VehiclePart(103, "coal", 30, 120),
        ],
    ))
    # Old passenger train, stopped in depot
    world.add_vehicle(Train(
        id=2, unit_number=2, owner=LOCAL,
        stopped=True, in_depot=True,
        max_speed=100, consist_max_speed=100, total_length=16,
        num_orders=2,
        age=3650, max_age=20 * 365,
        profit_this_year=-500, profit_last_year=0,
        group_id=3,
        parts=[VehiclePart(2, "passengers", 0, 100, is_engine=True)],
    ))
    # Bus loading at a station
    world.add_vehicle(Vehicle(
        id=3, unit_number=1, type=VehicleType.ROAD, owner=LOCAL,
        x=30, y=40, cur_speed=80, max_speed=96,
        num_orders=3, current_order_index=2,
        current_order=Order(OrderType.LOADING),
        breakdown_ctr=1,
    ))
    world.add_vehicle(Vehicle(id=4, unit_number=1, type=VehicleType.SHIP, owner=LOCAL, crashed=True))
    world.add_vehicle(Vehicle(
        id=5, unit_number=1, type=VehicleType.AIRCRAFT, owner=LOCAL,
        cur_speed=500, max_speed=600, num_orders=2,
    ))
    # Never visible to the local company
    world.add_vehicle(Train(id=6, unit_number=1, owner=RIVAL, group_id=4))

    world.add_town(Town(1, "Aberdeen", tile=100, population=100, num_houses=10))
    world.add_town(Town(
        2, "Brighton", tile=200, population=500, num_houses=50,
        noise_reached=4, max_noise=10,
        ratings={LOCAL: 600}, statues={LOCAL},
    ))
    world.add_town(Town(
        3, "Cardiff", tile=300, population=900, num_houses=90, larger_town=True,
        exclusivity=RIVAL, exclusive_counter=6,
        ratings={LOCAL: -100, RIVAL: 500}, unwanted={LOCAL: 3},
    ))

    world.add_industry(Industry(
        1, town_id=1, type_name="Coal Mine", tile=1000, width=4, height=4,
        produced=[ProducedCargo(
            "coal", rate=50, waiting=7,
            this_month_production=40, this_month_transported=10,
            last_month_production=100, last_month_transported=80,
        )],
    ))
    world.add_industry(Industry(
        2, town_id=2, type_name="Power Station", tile=2000, width=3, height=3,
        accepted=[AcceptedCargo("coal", 5)],
    ))
    world.add_industry(Industry(
        3, town_id=3, type_name="Forest", tile=3000,
        produced=[ProducedCargo("wood")],
    ))
    return world


@pytest.fixture
def world() -> World:
    return make_world()


@pytest.fixture
def config() -> ConsoleConfig:
    return ConsoleConfig(random_seed=7)


@pytest.fixture
def ctx(world, config) -> ConsoleContext:
    """Context whose gateway only records requests."""
    return ConsoleContext(
        world=world,
        gateway=RecordingGateway(),
        viewport=RecordingViewport(),
        output=BufferedOutput(),
        config=config,
    )


@pytest.fixture
def live_ctx(world, config) -> ConsoleContext:
    """Context whose gateway applies requests to the world."""
    return ConsoleContext(
        world=world,
        gateway=WorldGateway(world),
        viewport=RecordingViewport(),
        output=BufferedOutput(),
        config=config,
    )


@pytest.fixture
def editor_ctx(world) -> ConsoleContext:
    return ConsoleContext.for_world(world, ConsoleConfig(game_mode=GameMode.EDITOR))


@pytest.fixture
def interpreter(ctx) -> Interpreter:
    return Interpreter(ctx)


def _line_runner(context: ConsoleContext):
    def run_line(line: str):
        kind, *args = line.split()
        return Interpreter(context).run(kind, args)
    return run_line


@pytest.fixture
def console(ctx):
    """Run a console line against the recording context."""
    return _line_runner(ctx)


@pytest.fixture
def live_console(live_ctx):
    """Run a console line against the applying context."""
    return _line_runner(live_ctx)


@pytest.fixture
def editor_console(editor_ctx):
    """Run a console line in the scenario editor."""
    return _line_runner(editor_ctx)
