"""
Industry Target

Criteria and commands for industries. An industry is identified by the
name of the town it belongs to or by its own id.
"""

from typing import Callable, Dict, List, Optional

from sim.gateway import CommandRequest, GameCommand
from sim.parsing import parse_id
from sim.types import Industry

from ..compare import integer_match
from ..config import ConsoleContext
from ..descriptors import INDUSTRY_COMMANDS, Descriptor, IndustryCommand, MatchType, Requirement
from ..expression import Predicate
from .base import Target, TargetKind


def transported_percent(transported: int, production: int) -> int:
    if not production:
        return 0
    return transported * 100 // production


_NUMERIC_FIELDS: Dict[MatchType, Callable[[Industry], int]] = {
    MatchType.INDUSTRY_PRODUCTION: lambda i: i.last_month_production(),
    MatchType.INDUSTRY_PRODUCTION_THIS: lambda i: i.this_month_production(),
    MatchType.INDUSTRY_PERCENT: lambda i: transported_percent(
        i.last_month_transported(), i.last_month_production()
    ),
    MatchType.INDUSTRY_PERCENT_THIS: lambda i: transported_percent(
        i.this_month_transported(), i.this_month_production()
    ),
}


class IndustryTarget(Target):
    kind = TargetKind.INDUSTRY
    name = "industry"
    plural = "industries"
    mask = Requirement.FOR_INDUSTRY
    commands = INDUSTRY_COMMANDS

    def entities(self, ctx: ConsoleContext) -> List[Industry]:
        return ctx.world.get_industries()

    def entity_id(self, entity: Industry) -> int:
        return entity.id

    def lookup(self, ctx: ConsoleContext, entity_id: int) -> Optional[Industry]:
        return ctx.world.get_industry(entity_id)

    def usage_notes(self) -> List[str]:
        return [" name of town, to which the industry belongs, or ID of industry"]

    def field_matches(self, ctx: ConsoleContext, industry: Industry, predicate: Predicate) -> bool:
        field = predicate.field

        if field == MatchType.ALL:
            return True
        if field == MatchType.GENERIC:
            town_name = ctx.world.town_name(ctx.world.industry_town(industry))
            if town_name.lower() == predicate.operand.lower():
                return True
            return parse_id(predicate.operand) == industry.id

        getter = _NUMERIC_FIELDS.get(field)
        if getter is None:
            return False
        return integer_match(getter(industry), predicate.operator, predicate.operand)

    def execute(
        self, ctx: ConsoleContext, industry: Industry, command: Descriptor, args: List[str]
    ) -> int:
        command_id = command.id

        if command_id == IndustryCommand.COUNT:
            return 1
        if command_id == IndustryCommand.CENTER:
            ctx.viewport.scroll_to_tile(industry.tile)
            return 1
        if command_id == IndustryCommand.INFO:
            self._print_summary(ctx, industry)
            self._print_cargo(ctx, industry)
            return 1
        if command_id == IndustryCommand.OPEN:
            ctx.viewport.show_window("industry", industry.id)
            return 1
        if command_id == IndustryCommand.DELETE:
            self._print_summary(ctx, industry)
            ctx.gateway.issue(CommandRequest(GameCommand.DELETE_INDUSTRY, industry.id))
            return 1

        raise ValueError(f"Unhandled industry command: {command.name}")

    def _print_summary(self, ctx: ConsoleContext, industry: Industry) -> None:
        town_name = ctx.world.town_name(ctx.world.industry_town(industry))
        ctx.output.print(f"ID: {industry.id} Town: {town_name:<20}")
        ctx.output.print(f"  Size: {industry.width} x {industry.height}")

    def _print_cargo(self, ctx: ConsoleContext, industry: Industry) -> None:
        out = ctx.output
        for cargo in industry.produced:
            out.print(
                f"  Cargo produced: {cargo.cargo} ({cargo.rate} per month, {cargo.waiting} waiting)"
            )
            this_prod, this_tran = cargo.this_month_production, cargo.this_month_transported
            last_prod, last_tran = cargo.last_month_production, cargo.last_month_transported
            out.print(
                f"    This month transported/produced: {this_tran}/{this_prod} "
                f"({transported_percent(this_tran, this_prod)}%)"
            )
            out.print(
                f"    Last month transported/produced: {last_tran}/{last_prod} "
                f"({transported_percent(last_tran, last_prod)}%)"
            )
        out.print(f"  General production level: {industry.prod_level}")
        for cargo in industry.accepted:
            out.print(f"  Cargo accepted: {cargo.cargo} (waiting {cargo.waiting})")
