"""
Scenario Schemas

Pydantic models validating a YAML scenario document before it is turned
into live entity records.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from . import constants


class CompanySchema(BaseModel):
    """Schema for a company."""

    id: int = Field(..., ge=0)
    name: str = ""
    service_interval_percent: bool = False


class GroupSchema(BaseModel):
    """Schema for a vehicle group."""

    id: int = Field(..., ge=0)
    owner: int = Field(..., ge=0)
    name: Optional[str] = None


class OrderSchema(BaseModel):
    """Schema for a vehicle's current order."""

    type: str = "nothing"
    halt_in_depot: bool = False


class VehiclePartSchema(BaseModel):
    """Schema for one train part."""

    id: int = Field(..., ge=0)
    cargo: str = "passengers"
    capacity: int = Field(default=0, ge=0)
    max_speed: int = Field(default=0, ge=0)
    is_engine: bool = False
    articulated: bool = False


class VehicleSchema(BaseModel):
    """Schema for a primary vehicle. Train-only fields are ignored for other types."""

    id: int = Field(..., ge=0)
    unit_number: int = Field(..., ge=0)
    type: str = "train"
    owner: int = Field(default=0, ge=0)

    x: int = 0
    y: int = 0
    z: int = 0
    tile: int = 0

    crashed: bool = False
    stopped: bool = False
    in_depot: bool = False
    breakdown_ctr: int = Field(default=0, ge=0)

    service_interval: int = Field(default=150, ge=0)
    breakdowns_since_service: int = Field(default=0, ge=0)
    reliability: int = Field(default=0xFFFF, ge=0, le=0xFFFF)

    cur_speed: int = Field(default=0, ge=0)
    max_speed: int = Field(default=0, ge=0)

    num_orders: int = Field(default=0, ge=0)
    current_order: OrderSchema = Field(default_factory=OrderSchema)
    current_order_index: int = Field(default=0, ge=0)

    # Either days or whole years may be given
    age: Optional[int] = Field(default=None, ge=0)
    age_years: Optional[int] = Field(default=None, ge=0)
    max_age: int = Field(default=0, ge=0)

    profit_this_year: int = 0
    profit_last_year: int = 0
    group_id: Optional[int] = None

    # Trains
    total_length: int = Field(default=0, ge=0)
    consist_max_speed: Optional[int] = Field(default=None, ge=0)
    power: int = Field(default=0, ge=0)
    weight: int = Field(default=0, ge=0)
    parts: List[VehiclePartSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_age(self) -> "VehicleSchema":
        if self.age is not None and self.age_years is not None:
            raise ValueError("give either age (days) or age_years, not both")
        return self

    @property
    def age_days(self) -> int:
        if self.age_years is not None:
            return self.age_years * constants.DAYS_PER_YEAR
        return self.age or 0


class TownSchema(BaseModel):
    """Schema for a town."""

    id: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    tile: int = 0

    population: int = Field(default=0, ge=0)
    num_houses: int = Field(default=0, ge=0)
    larger_town: bool = False
    layout: str = "original"

    noise_reached: int = Field(default=0, ge=0)
    max_noise: int = Field(default=0, ge=0)
    fund_buildings_months: int = Field(default=0, ge=0)
    road_build_months: int = Field(default=0, ge=0)

    exclusivity: Optional[int] = None
    exclusive_counter: int = Field(default=0, ge=0)

    ratings: Dict[int, int] = Field(default_factory=dict)
    statues: List[int] = Field(default_factory=list)
    unwanted: Dict[int, int] = Field(default_factory=dict)


class ProducedCargoSchema(BaseModel):
    cargo: str
    rate: int = Field(default=0, ge=0)
    waiting: int = Field(default=0, ge=0)
    this_month_production: int = Field(default=0, ge=0)
    this_month_transported: int = Field(default=0, ge=0)
    last_month_production: int = Field(default=0, ge=0)
    last_month_transported: int = Field(default=0, ge=0)


class AcceptedCargoSchema(BaseModel):
    cargo: str
    waiting: int = Field(default=0, ge=0)


class IndustrySchema(BaseModel):
    """Schema for an industry."""

    id: int = Field(..., ge=0)
    town_id: int = Field(..., ge=0)
    type_name: str = ""
    tile: int = 0
    width: int = Field(default=1, ge=1)
    height: int = Field(default=1, ge=1)
    produced: List[ProducedCargoSchema] = Field(
        default_factory=list, max_length=constants.MAX_PRODUCED_CARGO
    )
    accepted: List[AcceptedCargoSchema] = Field(
        default_factory=list, max_length=constants.MAX_ACCEPTED_CARGO
    )
    prod_level: int = Field(default=16, ge=0)


class ScenarioSchema(BaseModel):
    """Top level scenario document."""

    local_company: Optional[int] = None
    companies: List[CompanySchema] = Field(default_factory=list)
    groups: List[GroupSchema] = Field(default_factory=list)
    vehicles: List[VehicleSchema] = Field(default_factory=list)
    towns: List[TownSchema] = Field(default_factory=list)
    industries: List[IndustrySchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_references(self) -> "ScenarioSchema":
        town_ids = {t.id for t in self.towns}
        for industry in self.industries:
            if industry.town_id not in town_ids:
                raise ValueError(
                    f"industry {industry.id} refers to unknown town {industry.town_id}"
                )
        return self
