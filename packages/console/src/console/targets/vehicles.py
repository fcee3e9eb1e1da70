"""
Vehicle Targets

Criteria and commands for the local company's vehicles. One class
serves train, road, ship, aircraft and vehicle (all types); the
instances differ only in the vehicle type listed and the requirement
mask.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from sim import constants
from sim.gateway import CommandRequest, GameCommand, send_to_depot_p1, sell_p1
from sim.parsing import parse_id, parse_integer
from sim.types import OrderType, Train, Vehicle, VehicleType

from ..compare import integer_match, money_match, string_match
from ..config import ConsoleContext
from ..descriptors import Descriptor, MatchType, Requirement, VEHICLE_COMMANDS, VehicleCommand
from ..errors import NoCompanyError
from ..expression import Operator, Predicate
from .base import Target, TargetKind

logger = logging.getLogger(__name__)

TYPE_REQUIREMENTS: Dict[VehicleType, Requirement] = {
    VehicleType.TRAIN: Requirement.FOR_TRAIN,
    VehicleType.ROAD: Requirement.FOR_ROAD,
    VehicleType.SHIP: Requirement.FOR_SHIP,
    VehicleType.AIRCRAFT: Requirement.FOR_AIRCRAFT,
}


def _max_speed(v: Vehicle) -> int:
    return v.consist_max_speed if isinstance(v, Train) else v.max_speed


def _train_length(v: Vehicle) -> Optional[int]:
    return v.length_tiles if isinstance(v, Train) else None


def _train_wagons(v: Vehicle) -> Optional[int]:
    return v.wagon_count if isinstance(v, Train) else None


# A getter returning None means the criterion does not hold.
_INTEGER_FIELDS: Dict[MatchType, Callable[[Vehicle], Optional[int]]] = {
    MatchType.SERVICE: lambda v: v.service_interval,
    MatchType.SPEED: lambda v: v.cur_speed,
    MatchType.ORDERS: lambda v: v.num_orders,
    MatchType.AGE: lambda v: v.age_years,
    MatchType.BREAKDOWNS: lambda v: v.breakdowns_since_service,
    MatchType.MAXSPEED: _max_speed,
    MatchType.LENGTH: _train_length,
    MatchType.WAGONS: _train_wagons,
}

_MONEY_FIELDS: Dict[MatchType, Callable[[Vehicle], int]] = {
    MatchType.PROFIT: lambda v: v.profit_this_year + v.profit_last_year,
    MatchType.PROFIT_THIS: lambda v: v.profit_this_year,
    MatchType.PROFIT_LAST: lambda v: v.profit_last_year,
}

_DEPOT_FAMILY = (
    VehicleCommand.DEPOT,
    VehicleCommand.SERVICE,
    VehicleCommand.UNDEPOT,
    VehicleCommand.UNSERVICE,
)


def clamp_service_interval(ctx: ConsoleContext, interval: int, owner: int) -> int:
    """Clamp a service interval to the bounds of the owner's setting."""
    company = ctx.world.get_company(owner)
    if company is not None and company.service_interval_percent:
        low, high = constants.MIN_SERVICE_INTERVAL_PERCENT, constants.MAX_SERVICE_INTERVAL_PERCENT
    else:
        low, high = constants.MIN_SERVICE_INTERVAL_DAYS, constants.MAX_SERVICE_INTERVAL_DAYS
    return max(low, min(high, interval))


def _c_remainder(dividend: int, divisor: int) -> int:
    """Remainder with the sign of the dividend."""
    remainder = abs(dividend) % abs(divisor)
    return -remainder if dividend < 0 else remainder


class VehicleTarget(Target):
    """
    Vehicles of one type (or of every type when vehicle_type is None)
    owned by the local company.
    """

    def __init__(
        self,
        kind: TargetKind,
        vehicle_type: Optional[VehicleType],
        name: str,
        mask: Requirement,
    ):
        self.kind = kind
        self.vehicle_type = vehicle_type
        self.name = name
        self.plural = f"{name}s"
        self.mask = mask
        self.commands = VEHICLE_COMMANDS

    def check_ready(self, ctx: ConsoleContext) -> None:
        if not ctx.world.has_local_company:
            raise NoCompanyError()

    def entities(self, ctx: ConsoleContext) -> List[Vehicle]:
        return ctx.world.get_vehicles(self.vehicle_type, owner=ctx.local_company)

    def entity_id(self, entity: Vehicle) -> int:
        return entity.id

    def lookup(self, ctx: ConsoleContext, entity_id: int) -> Optional[Vehicle]:
        return ctx.world.get_vehicle(entity_id)

    def usage_notes(self) -> List[str]:
        return [
            f" name of group for all {self.name}s from specified group. "
            "Can accept unique prefix of group name",
            f" {self.name} number for specific {self.name}",
        ]

    # =========================================================================
    # Criteria
    # =========================================================================

    def prepare_chain(
        self, ctx: ConsoleContext, predicates: Tuple[Predicate, ...]
    ) -> Tuple[Predicate, ...]:
        """
        Turn generic criteria naming one of the local company's groups
        into group criteria. Purely numeric identifiers stay unit numbers.
        """
        prepared = []
        for predicate in predicates:
            if predicate.field == MatchType.GENERIC and parse_id(predicate.operand) is None:
                group = ctx.world.find_group_by_name(predicate.operand)
                if group is not None:
                    logger.debug(f"Criterion {predicate.operand!r} selects group {group.id}")
                    predicate = Predicate(MatchType.GROUP_ID, Operator.EQUAL, str(group.id))
            prepared.append(predicate)
        return tuple(prepared)

    def field_matches(self, ctx: ConsoleContext, vehicle: Vehicle, predicate: Predicate) -> bool:
        field = predicate.field

        if field == MatchType.ALL:
            return True
        if field == MatchType.CRASHED:
            return vehicle.crashed
        if field == MatchType.BROKEN:
            return vehicle.breakdown_ctr != 0
        if field == MatchType.IN_DEPOT:
            return vehicle.in_depot
        if field == MatchType.GENERIC:
            # The operator is ignored: identifiers always mean equality
            return parse_id(predicate.operand) == vehicle.unit_number
        if field == MatchType.GROUP:
            name = ctx.world.group_name(vehicle.group_id)
            if name is None:
                return False
            return string_match(name, predicate.operator, predicate.operand)
        if field == MatchType.GROUP_ID:
            if vehicle.group_id is None:
                return False
            return integer_match(vehicle.group_id, predicate.operator, predicate.operand)

        if field in _MONEY_FIELDS:
            return money_match(_MONEY_FIELDS[field](vehicle), predicate.operator, predicate.operand)

        getter = _INTEGER_FIELDS.get(field)
        if getter is None:
            return False
        value = getter(vehicle)
        if value is None:
            return False
        return integer_match(value, predicate.operator, predicate.operand)

    # =========================================================================
    # Commands
    # =========================================================================

    def can_apply(self, ctx: ConsoleContext, command: Descriptor, vehicle: Vehicle) -> bool:
        if command.req & Requirement.NOT_CRASHED and vehicle.crashed:
            return False
        if command.req & Requirement.STOPPED and not vehicle.stopped:
            return False
        if command.req & Requirement.IN_DEPOT and not vehicle.in_depot:
            return False
        return bool(command.req & TYPE_REQUIREMENTS[vehicle.type])

    def execute(
        self, ctx: ConsoleContext, vehicle: Vehicle, command: Descriptor, args: List[str]
    ) -> int:
        command_id = command.id

        if command_id == VehicleCommand.COUNT:
            return 1
        if command_id == VehicleCommand.OPEN:
            ctx.viewport.show_window("vehicle", vehicle.id)
            return 1
        if command_id == VehicleCommand.CENTER:
            ctx.viewport.scroll_to(vehicle.x, vehicle.y)
            return 1
        if command_id == VehicleCommand.INTERVAL:
            return self._change_interval(ctx, vehicle, args)
        if command_id == VehicleCommand.WAGON_INFO:
            self._print_wagons(ctx, vehicle)
            return 1
        if command_id == VehicleCommand.INFO:
            self._print_info(ctx, vehicle)
            return 1
        if command_id == VehicleCommand.SKIP_ORDER:
            return self._skip_orders(ctx, vehicle, self._skip_count(ctx, args))
        if command_id == VehicleCommand.LEAVE_STATION:
            if not vehicle.current_order.is_type(OrderType.LOADING):
                return 0
            return self._skip_orders(ctx, vehicle, 1)
        if command_id == VehicleCommand.IGNORE:
            ctx.gateway.issue(CommandRequest(GameCommand.FORCE_TRAIN_PROCEED, vehicle.id))
            return 1
        if command_id == VehicleCommand.TURN:
            if vehicle.type == VehicleType.TRAIN:
                game_command = GameCommand.REVERSE_TRAIN_DIRECTION
            else:
                game_command = GameCommand.TURN_ROAD_VEHICLE
            ctx.gateway.issue(CommandRequest(game_command, vehicle.id))
            return 1
        if command_id in (VehicleCommand.START, VehicleCommand.STOP):
            if vehicle.stopped == (command_id == VehicleCommand.STOP):
                return 0
            ctx.gateway.issue(CommandRequest(GameCommand.START_STOP_VEHICLE, vehicle.id))
            return 1
        if command_id in _DEPOT_FAMILY:
            return self._send_to_depot(ctx, vehicle, command_id)
        if command_id in (VehicleCommand.CLONE, VehicleCommand.CLONE_SHARED):
            return self._clone(ctx, vehicle, command_id == VehicleCommand.CLONE_SHARED, args)
        if command_id == VehicleCommand.SELL_WAGON:
            return self._sell_wagons(ctx, vehicle, args)
        if command_id == VehicleCommand.SELL:
            ctx.gateway.issue(CommandRequest(GameCommand.SELL_VEHICLE, vehicle.id, sell_p1(vehicle)))
            return 1

        raise ValueError(f"Unhandled vehicle command: {command.name}")

    def _change_interval(self, ctx: ConsoleContext, vehicle: Vehicle, args: List[str]) -> int:
        interval = parse_integer(args[0])
        if interval is None:
            return 0
        interval = clamp_service_interval(ctx, interval, vehicle.owner)
        if interval == vehicle.service_interval:
            return 0
        ctx.gateway.issue(
            CommandRequest(GameCommand.CHANGE_SERVICE_INTERVAL, vehicle.id, interval)
        )
        return 1

    def _skip_count(self, ctx: ConsoleContext, args: List[str]) -> int:
        if not args:
            return 1
        if args[0][:1].lower() == "r":
            # Any offset will do, the remainder below picks the order
            return ctx.rng.getrandbits(31)
        count = parse_integer(args[0])
        return 1 if count is None else count

    def _skip_orders(self, ctx: ConsoleContext, vehicle: Vehicle, count: int) -> int:
        if count == 0 or vehicle.num_orders == 0:
            return 0
        new_order = _c_remainder(vehicle.current_order_index + count, vehicle.num_orders)
        if new_order < 0:
            # Skipped before the first order
            new_order = vehicle.num_orders - 1
        ctx.gateway.issue(CommandRequest(GameCommand.SKIP_TO_ORDER, vehicle.id, new_order))
        return 1

    def _send_to_depot(self, ctx: ConsoleContext, vehicle: Vehicle, command_id: VehicleCommand) -> int:
        if vehicle.stopped and vehicle.in_depot:
            return 0

        order = vehicle.current_order
        if order.is_type(OrderType.GOTO_DEPOT):
            if order.halt_in_depot:
                blocked = (VehicleCommand.DEPOT, VehicleCommand.UNSERVICE)
            else:
                blocked = (VehicleCommand.UNDEPOT, VehicleCommand.SERVICE)
            if command_id in blocked:
                return 0
        elif command_id in (VehicleCommand.UNDEPOT, VehicleCommand.UNSERVICE):
            # Nothing to cancel
            return 0

        service_only = command_id in (VehicleCommand.SERVICE, VehicleCommand.UNSERVICE)
        ctx.gateway.issue(
            CommandRequest(GameCommand.SEND_TO_DEPOT, vehicle.id, send_to_depot_p1(service_only))
        )
        return 1

    def _clone(self, ctx: ConsoleContext, vehicle: Vehicle, shared: bool, args: List[str]) -> int:
        count = 1
        if args:
            count = parse_integer(args[0])
            if count is None:
                count = 1
        if count > ctx.config.max_clones:
            logger.debug(f"clone: {count} copies capped at {ctx.config.max_clones}")
            count = ctx.config.max_clones
        for _ in range(count):
            ctx.gateway.issue(CommandRequest(GameCommand.CLONE_VEHICLE, vehicle.id, int(shared)))
        return 1

    def _sell_wagons(self, ctx: ConsoleContext, vehicle: Vehicle, args: List[str]) -> int:
        """Sell wagons first..last; 0 is the head engine, articulated parts are not counted."""
        first = parse_integer(args[0])
        if first is None or first < 0:
            return 0
        last = first
        if len(args) >= 2:
            last = parse_integer(args[1])
            if last is None or last < first:
                return 0

        countable = [part for part in vehicle.parts if not part.articulated]
        to_sell = countable[first:last + 1][:ctx.config.wagon_batch]
        for part in to_sell:
            ctx.gateway.issue(CommandRequest(GameCommand.SELL_VEHICLE, part.id))
        return 1

    def _print_info(self, ctx: ConsoleContext, v: Vehicle) -> None:
        out = ctx.output
        out.print(
            f"#{v.unit_number:4d}, Location: [{v.x}, {v.y}, {v.z}]"
            f"{' (STOPPED)' if v.stopped else ''}"
            f"{' (CRASHED)' if v.crashed else ''}"
            f"{' (BROKEN)' if v.breakdown_ctr != 0 else ''}"
            f"{' (IN DEPOT)' if v.in_depot else ''}"
        )
        out.print(f"      Age: {v.age_years}/{v.max_age_years} years")
        if isinstance(v, Train):
            out.print(f"      Speed: {v.cur_speed}/{v.consist_max_speed} km/h, Orders: {v.num_orders}")
            out.print(
                f"      Length: {v.length_tiles} tiles, Power: {v.power} hp,  Weight: {v.weight} t"
            )
        else:
            # Road vehicle and ship speeds are stored in double units
            factor = 1 if v.type == VehicleType.AIRCRAFT else 2
            out.print(
                f"      Speed: {v.cur_speed // factor}/{v.max_speed // factor} km/h, "
                f"Orders: {v.num_orders}"
            )
        out.print(
            f"      Service interval: {v.service_interval} days/%, "
            f"Breakdowns: {v.breakdowns_since_service} (reliability {v.reliability_percent}%)"
        )

    def _print_wagons(self, ctx: ConsoleContext, train: Train) -> None:
        ctx.output.print(f"Train #{train.unit_number:4d} wagons")
        for number, part in enumerate(train.parts, start=1):
            engine = " (engine)" if part.is_engine else ""
            ctx.output.print(
                f"{number:2d},  Cargo capacity: {part.capacity} ({part.cargo}),  "
                f"Max speed: {part.max_speed} km/h {engine}"
            )


TRAIN = VehicleTarget(TargetKind.TRAIN, VehicleType.TRAIN, "train", Requirement.FOR_TRAIN)
ROAD = VehicleTarget(TargetKind.ROAD, VehicleType.ROAD, "road vehicle", Requirement.FOR_ROAD)
SHIP = VehicleTarget(TargetKind.SHIP, VehicleType.SHIP, "ship", Requirement.FOR_SHIP)
AIRCRAFT = VehicleTarget(
    TargetKind.AIRCRAFT, VehicleType.AIRCRAFT, "aircraft", Requirement.FOR_AIRCRAFT
)
VEHICLE = VehicleTarget(TargetKind.VEHICLE, None, "vehicle", Requirement.FOR_VEHICLE)
