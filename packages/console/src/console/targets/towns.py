"""
Town Target

Criteria and commands for towns. Rating, statue, unwanted and
exclusivity criteria relate to the local company and never match when
the operator has no company.
"""

import logging
from typing import Callable, Dict, List, Optional

from sim.gateway import CommandRequest, GameCommand
from sim.parsing import parse_id, parse_integer
from sim.types import Town

from ..compare import integer_match
from ..config import ConsoleContext
from ..descriptors import (
    TOWN_ACTION_0,
    TOWN_COMMANDS,
    Descriptor,
    MatchType,
    Requirement,
    TownCommand,
)
from ..expression import Predicate
from .base import Target, TargetKind

logger = logging.getLogger(__name__)


def _rating(ctx: ConsoleContext, town: Town) -> Optional[int]:
    return town.rating(ctx.local_company)


def _exclusive_company(ctx: ConsoleContext, town: Town) -> Optional[int]:
    if not town.exclusive_counter:
        return None
    return town.exclusivity


def _my_exclusive_months(ctx: ConsoleContext, town: Town) -> Optional[int]:
    if town.exclusivity != ctx.local_company:
        return None
    return town.exclusive_counter


def _others_exclusive_months(ctx: ConsoleContext, town: Town) -> Optional[int]:
    if town.exclusivity is None or town.exclusivity == ctx.local_company:
        return None
    return town.exclusive_counter


def _unwanted_months(ctx: ConsoleContext, town: Town) -> Optional[int]:
    return town.unwanted_months(ctx.local_company)


# A getter returning None means the criterion does not hold.
_NUMERIC_FIELDS: Dict[MatchType, Callable[[ConsoleContext, Town], Optional[int]]] = {
    MatchType.TOWN_POPULATION: lambda ctx, t: t.population,
    MatchType.TOWN_HOUSES: lambda ctx, t: t.num_houses,
    MatchType.TOWN_NOISE: lambda ctx, t: t.noise_reached,
    MatchType.TOWN_NOISE_REMAIN: lambda ctx, t: t.noise_remaining,
    MatchType.TOWN_NOISE_MAX: lambda ctx, t: t.max_noise,
    MatchType.TOWN_FUNDING: lambda ctx, t: t.fund_buildings_months,
    MatchType.TOWN_ROADWORKS: lambda ctx, t: t.road_build_months,
    MatchType.TOWN_EXCLUSIVE_COMPANY: _exclusive_company,
    MatchType.TOWN_EXCLUSIVE_MONTHS: lambda ctx, t: t.exclusive_counter,
    MatchType.TOWN_RATING: _rating,
    MatchType.TOWN_EXCLUSIVE_MY_MONTHS: _my_exclusive_months,
    MatchType.TOWN_EXCLUSIVE_OTHERS_MONTHS: _others_exclusive_months,
    MatchType.TOWN_UNWANTED_MONTHS: _unwanted_months,
}

_NEEDS_COMPANY = {
    MatchType.TOWN_RATING,
    MatchType.TOWN_EXCLUSIVE_MY_MONTHS,
    MatchType.TOWN_EXCLUSIVE_OTHERS_MONTHS,
    MatchType.TOWN_UNWANTED_MONTHS,
    MatchType.TOWN_STATUE,
    MatchType.TOWN_NO_STATUE,
}


def town_matches_identifier(ctx: ConsoleContext, town: Town, identifier: str) -> bool:
    """Town name (case-insensitive) or town id."""
    if ctx.world.town_name(town).lower() == identifier.lower():
        return True
    return parse_id(identifier) == town.id


class TownTarget(Target):
    kind = TargetKind.TOWN
    name = "town"
    plural = "towns"
    mask = Requirement.FOR_TOWN
    commands = TOWN_COMMANDS

    def entities(self, ctx: ConsoleContext) -> List[Town]:
        return ctx.world.get_towns()

    def entity_id(self, entity: Town) -> int:
        return entity.id

    def lookup(self, ctx: ConsoleContext, entity_id: int) -> Optional[Town]:
        return ctx.world.get_town(entity_id)

    def usage_notes(self) -> List[str]:
        return [" name of town or ID of town"]

    # =========================================================================
    # Criteria
    # =========================================================================

    def field_matches(self, ctx: ConsoleContext, town: Town, predicate: Predicate) -> bool:
        field = predicate.field

        if field == MatchType.ALL:
            return True
        if field == MatchType.GENERIC:
            return town_matches_identifier(ctx, town, predicate.operand)

        if field in _NEEDS_COMPANY and not ctx.world.has_local_company:
            return False

        if field == MatchType.TOWN_STATUE:
            return ctx.local_company in town.statues
        if field == MatchType.TOWN_NO_STATUE:
            return ctx.local_company not in town.statues

        getter = _NUMERIC_FIELDS.get(field)
        if getter is None:
            return False
        value = getter(ctx, town)
        if value is None:
            return False
        return integer_match(value, predicate.operator, predicate.operand)

    # =========================================================================
    # Commands
    # =========================================================================

    def execute(
        self, ctx: ConsoleContext, town: Town, command: Descriptor, args: List[str]
    ) -> int:
        command_id = command.id

        if command_id == TownCommand.COUNT:
            return 1
        if command_id == TownCommand.CENTER:
            ctx.viewport.scroll_to_tile(town.tile)
            return 1
        if command_id == TownCommand.PRINT:
            ctx.output.print(f"{ctx.world.town_name(town):<20}  ({town.population})")
            return 1
        if command_id == TownCommand.INFO:
            self._print_info(ctx, town)
            return 1
        if command_id == TownCommand.OPEN:
            ctx.viewport.show_window("town", town.id)
            return 1
        if command_id == TownCommand.OPEN_AUTHORITY:
            ctx.viewport.show_window("town_authority", town.id)
            return 1
        if command_id == TownCommand.EXPAND:
            return self._expand(ctx, town, args)
        if command_id == TownCommand.DELETE:
            ctx.gateway.issue(CommandRequest(GameCommand.DELETE_TOWN, town.id))
            return 1
        if TownCommand.ACTION_AD_SMALL <= command_id <= TownCommand.ACTION_BRIBE:
            action = command_id - TOWN_ACTION_0
            ctx.gateway.issue(CommandRequest(GameCommand.TOWN_ACTION, town.id, action))
            return 1

        raise ValueError(f"Unhandled town command: {command.name}")

    def _expand(self, ctx: ConsoleContext, town: Town, args: List[str]) -> int:
        repetitions = 1
        if args:
            repetitions = parse_integer(args[0])
            if repetitions is None:
                logger.debug(f"expand: bad repetition count {args[0]!r}")
                return 0
        for _ in range(repetitions):
            ctx.gateway.issue(CommandRequest(GameCommand.EXPAND_TOWN, town.id))
        return 1

    def _print_info(self, ctx: ConsoleContext, town: Town) -> None:
        out = ctx.output
        larger = " (Larger town)" if town.larger_town else ""
        out.print(
            f"ID: {town.id:4d} {ctx.world.town_name(town):<20}, population: {town.population:4d} "
            f"houses: {town.num_houses:4d}{larger}"
        )
        out.print(
            f"  Noise: {town.noise_reached}/{town.max_noise}, Road layout: {town.layout.value}"
        )
        if town.fund_buildings_months:
            out.print(f"  Fund buildings : {town.fund_buildings_months} months.")
        if town.road_build_months:
            out.print(f" Road reconstruction : {town.road_build_months} months.")

        for company_id in sorted(ctx.world.companies):
            exclusive = town.exclusivity == company_id
            statue = company_id in town.statues
            unwanted = town.unwanted_months(company_id)
            if not (town.has_rating(company_id) or exclusive or statue):
                continue
            out.print(
                f" Company {company_id:2d} : rating {town.rating(company_id)}"
                f"{' (EXCLUSIVE)' if exclusive else ''}"
                f"{' (UNWANTED)' if unwanted else ''}"
                f"{' (STATUE)' if statue else ''}"
            )
            if exclusive:
                out.print(f"  Exclusivity expires in {town.exclusive_counter} months")
            if unwanted:
                out.print(f"  Unwanted for {unwanted} months")
