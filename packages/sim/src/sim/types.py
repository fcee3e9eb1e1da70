"""
Simulation Entity Records

Plain data records for the live simulation entities the console reads:
vehicles (and train consists), towns, industries, companies and groups.
The simulation owns and mutates these; the console only reads them and
issues mutations through the command gateway.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from .constants import DAYS_PER_YEAR, TILE_LENGTH_UNITS


class VehicleType(str, Enum):
    """Kinds of vehicles."""

    TRAIN = "train"
    ROAD = "road"
    SHIP = "ship"
    AIRCRAFT = "aircraft"


class OrderType(str, Enum):
    """Type of the order a vehicle is currently executing."""

    NOTHING = "nothing"
    GOTO_STATION = "goto_station"
    GOTO_DEPOT = "goto_depot"
    GOTO_WAYPOINT = "goto_waypoint"
    LOADING = "loading"
    LEAVE_STATION = "leave_station"


class TownLayout(str, Enum):
    """Road layout used by a town."""

    ORIGINAL = "original"
    BETTER_ROADS = "better roads"
    GRID_2X2 = "2x2"
    GRID_3X3 = "3x3"
    RANDOM = "random"


@dataclass
class Order:
    """The order a vehicle is currently executing."""

    type: OrderType = OrderType.NOTHING

    # Only meaningful for GOTO_DEPOT: stop in the depot instead of just servicing
    halt_in_depot: bool = False

    def is_type(self, order_type: OrderType) -> bool:
        return self.type == order_type


@dataclass
class Company:
    """A company owning vehicles and groups."""

    id: int
    name: str = ""

    # Service intervals of this company's vehicles are given in percent
    service_interval_percent: bool = False


@dataclass
class Group:
    """A vehicle group."""

    id: int
    owner: int
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Name shown to players; unnamed groups get a numbered default."""
        return self.name if self.name else f"Group {self.id}"


@dataclass
class Vehicle:
    """
    A primary vehicle (road vehicle, ship, aircraft or the front of a train).
    """

    id: int
    unit_number: int
    type: VehicleType
    owner: int = 0

    # Location
    x: int = 0
    y: int = 0
    z: int = 0
    tile: int = 0

    # Status
    crashed: bool = False
    stopped: bool = False
    in_depot: bool = False
    breakdown_ctr: int = 0  # Non-zero while broken down

    # Servicing
    service_interval: int = 150
    breakdowns_since_service: int = 0
    reliability: int = 0xFFFF  # 16-bit fraction

    # Movement
    cur_speed: int = 0
    max_speed: int = 0

    # Orders
    num_orders: int = 0
    current_order: Order = field(default_factory=Order)
    current_order_index: int = 0

    # Age in days
    age: int = 0
    max_age: int = 0

    # Money
    profit_this_year: int = 0
    profit_last_year: int = 0

    group_id: Optional[int] = None

    @property
    def age_years(self) -> int:
        return self.age // DAYS_PER_YEAR

    @property
    def max_age_years(self) -> int:
        return self.max_age // DAYS_PER_YEAR

    @property
    def reliability_percent(self) -> int:
        return (100 * (self.reliability >> 8)) >> 8


@dataclass
class VehiclePart:
    """One segment of a train consist (engine, wagon or articulated part)."""

    id: int
    cargo: str = "passengers"
    capacity: int = 0
    max_speed: int = 0
    is_engine: bool = False
    articulated: bool = False


@dataclass
class Train(Vehicle):
    """
    Front engine of a train, with the cached consist properties.
    """

    type: VehicleType = VehicleType.TRAIN

    # Sum of part lengths, in 1/16 tile units
    total_length: int = 0
    # Max speed of the whole consist, which may differ from the engine's own
    consist_max_speed: int = 0
    power: int = 0
    weight: int = 0

    # Head part first
    parts: List[VehiclePart] = field(default_factory=list)

    @property
    def length_tiles(self) -> int:
        return (self.total_length + TILE_LENGTH_UNITS - 1) // TILE_LENGTH_UNITS

    @property
    def wagon_count(self) -> int:
        """Number of linked segments, engines and articulated parts included."""
        return len(self.parts)


@dataclass
class Town:
    """A town."""

    id: int
    name: str
    tile: int = 0

    population: int = 0
    num_houses: int = 0
    larger_town: bool = False
    layout: TownLayout = TownLayout.ORIGINAL

    # Airport noise
    noise_reached: int = 0
    max_noise: int = 0

    # Months remaining in funded works
    fund_buildings_months: int = 0
    road_build_months: int = 0

    # Exclusive transport rights
    exclusivity: Optional[int] = None
    exclusive_counter: int = 0

    # Per-company state, keyed by company id
    ratings: Dict[int, int] = field(default_factory=dict)
    statues: Set[int] = field(default_factory=set)
    unwanted: Dict[int, int] = field(default_factory=dict)

    @property
    def noise_remaining(self) -> int:
        return self.max_noise - self.noise_reached

    def has_rating(self, company: int) -> bool:
        return company in self.ratings

    def rating(self, company: int) -> int:
        return self.ratings.get(company, 0)

    def unwanted_months(self, company: int) -> int:
        return self.unwanted.get(company, 0)


@dataclass
class ProducedCargo:
    """One produced-cargo slot of an industry."""

    cargo: str
    rate: int = 0
    waiting: int = 0
    this_month_production: int = 0
    this_month_transported: int = 0
    last_month_production: int = 0
    last_month_transported: int = 0


@dataclass
class AcceptedCargo:
    """One accepted-cargo slot of an industry."""

    cargo: str
    waiting: int = 0


@dataclass
class Industry:
    """An industry, always attached to a town."""

    id: int
    town_id: int
    type_name: str = ""
    tile: int = 0
    width: int = 1
    height: int = 1

    produced: List[ProducedCargo] = field(default_factory=list)
    accepted: List[AcceptedCargo] = field(default_factory=list)
    prod_level: int = 16

    def last_month_production(self) -> int:
        return sum(p.last_month_production for p in self.produced)

    def last_month_transported(self) -> int:
        return sum(p.last_month_transported for p in self.produced)

    def this_month_production(self) -> int:
        return sum(p.this_month_production for p in self.produced)

    def this_month_transported(self) -> int:
        return sum(p.this_month_transported for p in self.produced)
