"""
Command Gateway

Every mutation the console makes to the simulation is issued as a
CommandRequest through a CommandGateway. The gateway is opaque to the
console: it returns success or failure, and applying the effect is the
simulation's business.

Two gateways are provided:
- RecordingGateway: records requests in order (tests, dry runs)
- WorldGateway: records and applies each request to a World
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set, Tuple

from . import constants
from .types import Order, OrderType, Train, Vehicle, VehicleType
from .world import World

logger = logging.getLogger(__name__)


class GameCommand(str, Enum):
    """Simulation commands that can be issued by the console."""

    SKIP_TO_ORDER = "skip_to_order"
    CHANGE_SERVICE_INTERVAL = "change_service_interval"
    FORCE_TRAIN_PROCEED = "force_train_proceed"
    REVERSE_TRAIN_DIRECTION = "reverse_train_direction"
    TURN_ROAD_VEHICLE = "turn_road_vehicle"
    START_STOP_VEHICLE = "start_stop_vehicle"
    SEND_TO_DEPOT = "send_to_depot"
    CLONE_VEHICLE = "clone_vehicle"
    SELL_VEHICLE = "sell_vehicle"
    TOWN_ACTION = "town_action"
    EXPAND_TOWN = "expand_town"
    DELETE_TOWN = "delete_town"
    DELETE_INDUSTRY = "delete_industry"


class TownAction(int, Enum):
    """Town authority actions, in authority window order."""

    ADVERTISE_SMALL = 0
    ADVERTISE_MEDIUM = 1
    ADVERTISE_LARGE = 2
    ROAD_RECONSTRUCTION = 3
    BUILD_STATUE = 4
    FUND_BUILDINGS = 5
    BUY_EXCLUSIVITY = 6
    BRIBE = 7


@dataclass(frozen=True)
class CommandRequest:
    """
    One mutation request.

    target is the id of the vehicle, vehicle part, town or industry the
    command applies to; p1/p2 are command specific parameters.
    """

    command: GameCommand
    target: int
    p1: int = 0
    p2: int = 0


class CommandGateway(ABC):
    """Interface for issuing simulation commands."""

    @abstractmethod
    def issue(self, request: CommandRequest) -> bool:
        """Issue a command. Returns True if the simulation accepted it."""


class RecordingGateway(CommandGateway):
    """
    Records every issued request, in order.

    Commands listed in fail_commands are recorded but reported as failed.
    """

    def __init__(self, fail_commands: Optional[Set[GameCommand]] = None):
        self.requests: List[CommandRequest] = []
        self._fail_commands = fail_commands or set()

    def issue(self, request: CommandRequest) -> bool:
        self.requests.append(request)
        if request.command in self._fail_commands:
            logger.warning(f"Command {request.command.value} on {request.target} failed")
            return False
        logger.debug(
            f"Issued {request.command.value} on {request.target} (p1={request.p1}, p2={request.p2})"
        )
        return self.apply(request)

    def apply(self, request: CommandRequest) -> bool:
        return True

    def commands(self) -> List[GameCommand]:
        """Issued command types, in order."""
        return [r.command for r in self.requests]

    def clear(self) -> None:
        self.requests.clear()


class WorldGateway(RecordingGateway):
    """
    Records requests and applies their effect to a World.

    Effects are the minimal state changes the console can observe
    afterwards; the simulation proper (movement, growth) is not modelled.
    """

    def __init__(self, world: World, fail_commands: Optional[Set[GameCommand]] = None):
        super().__init__(fail_commands)
        self.world = world
        self._next_vehicle_id = max(world.vehicles, default=0) + 1

    def apply(self, request: CommandRequest) -> bool:
        handler = getattr(self, f"_apply_{request.command.value}", None)
        if handler is None:
            return True
        return handler(request)

    def _vehicle(self, request: CommandRequest) -> Optional[Vehicle]:
        vehicle = self.world.get_vehicle(request.target)
        if vehicle is None:
            logger.warning(f"{request.command.value}: no vehicle {request.target}")
        return vehicle

    # =========================================================================
    # Vehicles
    # =========================================================================

    def _apply_start_stop_vehicle(self, request: CommandRequest) -> bool:
        vehicle = self._vehicle(request)
        if vehicle is None:
            return False
        vehicle.stopped = not vehicle.stopped
        return True

    def _apply_change_service_interval(self, request: CommandRequest) -> bool:
        vehicle = self._vehicle(request)
        if vehicle is None:
            return False
        vehicle.service_interval = request.p1
        return True

    def _apply_skip_to_order(self, request: CommandRequest) -> bool:
        vehicle = self._vehicle(request)
        if vehicle is None or not 0 <= request.p1 < vehicle.num_orders:
            return False
        vehicle.current_order_index = request.p1
        vehicle.current_order = Order(OrderType.GOTO_STATION)
        return True

    def _apply_send_to_depot(self, request: CommandRequest) -> bool:
        vehicle = self._vehicle(request)
        if vehicle is None:
            return False
        if vehicle.current_order.is_type(OrderType.GOTO_DEPOT):
            # A second request cancels the pending depot order
            vehicle.current_order = Order(OrderType.NOTHING)
        else:
            halt = not (request.p1 & constants.DEPOT_SERVICE)
            vehicle.current_order = Order(OrderType.GOTO_DEPOT, halt_in_depot=halt)
        return True

    def _apply_clone_vehicle(self, request: CommandRequest) -> bool:
        vehicle = self._vehicle(request)
        if vehicle is None:
            return False
        clone_id = self._next_vehicle_id
        self._next_vehicle_id += 1
        unit_number = 1 + max(
            (v.unit_number for v in self.world.vehicles.values() if v.type == vehicle.type),
            default=0,
        )
        clone = type(vehicle)(
            id=clone_id,
            unit_number=unit_number,
            type=vehicle.type,
            owner=vehicle.owner,
            tile=vehicle.tile,
            stopped=True,
            in_depot=True,
            service_interval=vehicle.service_interval,
            max_speed=vehicle.max_speed,
            num_orders=vehicle.num_orders if request.p1 else 0,
            group_id=vehicle.group_id,
        )
        self.world.add_vehicle(clone)
        return True

    def _apply_sell_vehicle(self, request: CommandRequest) -> bool:
        if self.world.remove_vehicle(request.target):
            return True
        # Not a primary vehicle: look for a train part
        for vehicle in self.world.vehicles.values():
            if isinstance(vehicle, Train):
                for index, part in enumerate(vehicle.parts):
                    if part.id == request.target and index > 0:
                        # Articulated parts go with the part in front of them
                        end = index + 1
                        while end < len(vehicle.parts) and vehicle.parts[end].articulated:
                            end += 1
                        del vehicle.parts[index:end]
                        return True
        logger.warning(f"sell_vehicle: nothing to sell with id {request.target}")
        return False

    # =========================================================================
    # Towns and industries
    # =========================================================================

    def _apply_town_action(self, request: CommandRequest) -> bool:
        town = self.world.get_town(request.target)
        company = self.world.local_company
        if town is None or company is None:
            return False
        action = TownAction(request.p1)
        if action == TownAction.BUILD_STATUE:
            if company in town.statues:
                return False
            town.statues.add(company)
        elif action == TownAction.FUND_BUILDINGS:
            town.fund_buildings_months = 3
        elif action == TownAction.ROAD_RECONSTRUCTION:
            town.road_build_months = 6
        elif action == TownAction.BUY_EXCLUSIVITY:
            town.exclusivity = company
            town.exclusive_counter = 12
        return True

    def _apply_expand_town(self, request: CommandRequest) -> bool:
        town = self.world.get_town(request.target)
        if town is None:
            return False
        town.num_houses += 1
        return True

    def _apply_delete_town(self, request: CommandRequest) -> bool:
        return self.world.remove_town(request.target)

    def _apply_delete_industry(self, request: CommandRequest) -> bool:
        return self.world.remove_industry(request.target)


class Viewport(ABC):
    """Interface to the player's view: scrolling and opening windows."""

    @abstractmethod
    def scroll_to(self, x: int, y: int) -> None:
        """Center the main view on a map position."""

    @abstractmethod
    def scroll_to_tile(self, tile: int) -> None:
        """Center the main view on a map tile."""

    @abstractmethod
    def show_window(self, window: str, target: int) -> None:
        """Open the window of the given kind for the given entity."""


class RecordingViewport(Viewport):
    """Viewport that only records what it was asked to do."""

    def __init__(self):
        self.scrolls: List[Tuple[int, int]] = []
        self.tiles: List[int] = []
        self.windows: List[Tuple[str, int]] = []

    def scroll_to(self, x: int, y: int) -> None:
        self.scrolls.append((x, y))

    def scroll_to_tile(self, tile: int) -> None:
        self.tiles.append(tile)

    def show_window(self, window: str, target: int) -> None:
        self.windows.append((window, target))


def send_to_depot_p1(service_only: bool) -> int:
    return constants.DEPOT_SERVICE if service_only else 0


def sell_p1(vehicle: Vehicle) -> int:
    """Selling a train sells the whole consist."""
    return 1 if vehicle.type == VehicleType.TRAIN else 0
