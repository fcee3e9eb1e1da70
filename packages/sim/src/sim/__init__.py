"""
Simulation Collaborators

The parts of the running game the console talks to:
- Entity records: vehicles, trains, towns, industries, companies, groups
- World: the live entity store (enumerate, lookup, remove)
- CommandGateway: the only way the console mutates the simulation
- Viewport: scrolling the main view and opening windows
- Parsers: fail-closed string to integer / money conversion
- ScenarioLoader: builds a World from a YAML scenario
"""

from .types import (
    AcceptedCargo,
    Company,
    Group,
    Industry,
    Order,
    OrderType,
    ProducedCargo,
    Town,
    TownLayout,
    Train,
    Vehicle,
    VehiclePart,
    VehicleType,
)
from .world import World
from .gateway import (
    CommandGateway,
    CommandRequest,
    GameCommand,
    RecordingGateway,
    RecordingViewport,
    TownAction,
    Viewport,
    WorldGateway,
)
from .parsing import parse_id, parse_integer, parse_money
from .loader import ScenarioError, ScenarioLoader, build_world

__all__ = [
    "AcceptedCargo",
    "Company",
    "Group",
    "Industry",
    "Order",
    "OrderType",
    "ProducedCargo",
    "Town",
    "TownLayout",
    "Train",
    "Vehicle",
    "VehiclePart",
    "VehicleType",
    "World",
    "CommandGateway",
    "CommandRequest",
    "GameCommand",
    "RecordingGateway",
    "RecordingViewport",
    "TownAction",
    "Viewport",
    "WorldGateway",
    "parse_id",
    "parse_integer",
    "parse_money",
    "ScenarioError",
    "ScenarioLoader",
    "build_world",
]
