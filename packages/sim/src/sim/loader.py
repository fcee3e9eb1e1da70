"""
Scenario Loader

Loads a YAML scenario file into a World. The document is validated
with the scenario schemas first, then converted into entity records.

Example document:

    local_company: 0
    companies:
      - {id: 0, name: "Player Transport"}
    towns:
      - {id: 0, name: "Kirkstead", population: 850}
    vehicles:
      - {id: 1, unit_number: 1, type: train, owner: 0, age_years: 3}
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml
from pydantic import ValidationError

from .schemas import IndustrySchema, ScenarioSchema, TownSchema, VehicleSchema
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

E = TypeVar("E", bound=Enum)

logger = logging.getLogger(__name__)


class ScenarioError(Exception):
    """A scenario file could not be read or is invalid."""

    def __init__(self, message: str, path: str = "", original_error: Exception = None):
        super().__init__(message)
        self.path = path
        self.original_error = original_error


def _parse_enum(value: str, enum_class: Type[E], default: E) -> E:
    """Parse a string into an enum, falling back to default with a warning."""
    try:
        return enum_class(value)
    except ValueError:
        logger.warning(f"Unknown {enum_class.__name__} value: {value}, using {default.value}")
        return default


class ScenarioLoader:
    """Builds a World from a YAML scenario file or an already parsed document."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> World:
        logger.info(f"Loading scenario from: {self.path}")
        try:
            with open(self.path, encoding="utf-8") as f:
                document = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ScenarioError(f"Cannot read scenario: {e}", str(self.path), e) from e

        world = build_world(document, source=str(self.path))
        logger.info(
            f"Loaded {len(world.vehicles)} vehicles, {len(world.towns)} towns, "
            f"{len(world.industries)} industries"
        )
        return world


def build_world(document: Dict[str, Any], source: str = "<document>") -> World:
    """Validate a scenario document and convert it into a World."""
    try:
        scenario = ScenarioSchema.model_validate(document)
    except ValidationError as e:
        raise ScenarioError(f"Invalid scenario {source}: {e}", source, e) from e

    world = World(local_company=scenario.local_company)

    for company in scenario.companies:
        world.add_company(
            Company(
                id=company.id,
                name=company.name,
                service_interval_percent=company.service_interval_percent,
            )
        )
    for group in scenario.groups:
        world.add_group(Group(id=group.id, owner=group.owner, name=group.name))
    for town in scenario.towns:
        world.add_town(_build_town(town))
    for industry in scenario.industries:
        world.add_industry(_build_industry(industry))
    for vehicle in scenario.vehicles:
        world.add_vehicle(_build_vehicle(vehicle))

    return world


def _build_vehicle(data: VehicleSchema) -> Vehicle:
    vehicle_type = _parse_enum(data.type, VehicleType, VehicleType.TRAIN)
    common = dict(
        id=data.id,
        unit_number=data.unit_number,
        owner=data.owner,
        x=data.x,
        y=data.y,
        z=data.z,
        tile=data.tile,
        crashed=data.crashed,
        stopped=data.stopped,
        in_depot=data.in_depot,
        breakdown_ctr=data.breakdown_ctr,
        service_interval=data.service_interval,
        breakdowns_since_service=data.breakdowns_since_service,
        reliability=data.reliability,
        cur_speed=data.cur_speed,
        max_speed=data.max_speed,
        num_orders=data.num_orders,
        current_order=Order(
            type=_parse_enum(data.current_order.type, OrderType, OrderType.NOTHING),
            halt_in_depot=data.current_order.halt_in_depot,
        ),
        current_order_index=data.current_order_index,
        age=data.age_days,
        max_age=data.max_age,
        profit_this_year=data.profit_this_year,
        profit_last_year=data.profit_last_year,
        group_id=data.group_id,
    )

    if vehicle_type != VehicleType.TRAIN:
        return Vehicle(type=vehicle_type, **common)

    parts = [
        VehiclePart(
            id=p.id,
            cargo=p.cargo,
            capacity=p.capacity,
            max_speed=p.max_speed,
            is_engine=p.is_engine,
            articulated=p.articulated,
        )
        for p in data.parts
    ]
    return Train(
        total_length=data.total_length,
        consist_max_speed=(
            data.consist_max_speed if data.consist_max_speed is not None else data.max_speed
        ),
        power=data.power,
        weight=data.weight,
        parts=parts,
        **common,
    )


def _build_town(data: TownSchema) -> Town:
    return Town(
        id=data.id,
        name=data.name,
        tile=data.tile,
        population=data.population,
        num_houses=data.num_houses,
        larger_town=data.larger_town,
        layout=_parse_enum(data.layout, TownLayout, TownLayout.ORIGINAL),
        noise_reached=data.noise_reached,
        max_noise=data.max_noise,
        fund_buildings_months=data.fund_buildings_months,
        road_build_months=data.road_build_months,
        exclusivity=data.exclusivity,
        exclusive_counter=data.exclusive_counter,
        ratings=dict(data.ratings),
        statues=set(data.statues),
        unwanted=dict(data.unwanted),
    )


def _build_industry(data: IndustrySchema) -> Industry:
    return Industry(
        id=data.id,
        town_id=data.town_id,
        type_name=data.type_name,
        tile=data.tile,
        width=data.width,
        height=data.height,
        produced=[ProducedCargo(**p.model_dump()) for p in data.produced],
        accepted=[AcceptedCargo(**a.model_dump()) for a in data.accepted],
        prod_level=data.prod_level,
    )
