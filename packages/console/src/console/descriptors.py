"""
Descriptor Tables

Static tables describing every console command and match criterion,
per target kind. Each entry carries a name, the number of required
parameters, a requirement bitmask and help text.

Alias entries (id ALIAS) stand for the entry right after them. An alias
is always immediately followed by a non-alias entry, so resolving an
alias never needs more than one step.
"""

from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Generic, Tuple, TypeVar


class Requirement(IntFlag):
    """Applicability and precondition bits of a command or match."""

    # Vehicle kinds
    FOR_TRAIN = 0x01
    FOR_ROAD = 0x02
    FOR_SHIP = 0x04
    FOR_AIRCRAFT = 0x08
    # Vehicle state
    NOT_CRASHED = 0x10
    IN_DEPOT = 0x20
    STOPPED = 0x40
    # Marks an alias entry; never combined with other bits
    IS_ALIAS = 0x80
    # Other targets
    FOR_TOWN = 0x100
    FOR_INDUSTRY = 0x200
    # Help text contains one %s for the target name
    USE_PRINTF = 0x400
    # Scenario editor only
    IN_EDITOR = 0x800

    FOR_VEHICLE = FOR_TRAIN | FOR_ROAD | FOR_SHIP | FOR_AIRCRAFT


NONE = Requirement(0)


class VehicleCommand(int, Enum):
    ALIAS = -1
    INVALID = 0
    CENTER = 1
    CLONE = 2
    CLONE_SHARED = 3
    DEPOT = 4
    IGNORE = 5
    WAGON_INFO = 6
    SELL_WAGON = 7
    INFO = 8
    LEAVE_STATION = 9
    OPEN = 10
    SELL = 11
    SERVICE = 12
    SKIP_ORDER = 13
    START = 14
    STOP = 15
    TURN = 16
    INTERVAL = 17
    UNDEPOT = 18
    UNSERVICE = 19
    COUNT = 20


class TownCommand(int, Enum):
    ALIAS = -1
    INVALID = 0
    CENTER = 1
    INFO = 2
    PRINT = 3
    OPEN = 4
    OPEN_AUTHORITY = 5
    # Town authority actions, in authority window order
    ACTION_AD_SMALL = 6
    ACTION_AD_MEDIUM = 7
    ACTION_AD_LARGE = 8
    ACTION_ROAD = 9
    ACTION_STATUE = 10
    ACTION_FUND = 11
    ACTION_EXCLUSIVE = 12
    ACTION_BRIBE = 13
    EXPAND = 14
    DELETE = 15
    COUNT = 16


# First town authority action
TOWN_ACTION_0 = TownCommand.ACTION_AD_SMALL


class IndustryCommand(int, Enum):
    ALIAS = -1
    INVALID = 0
    CENTER = 1
    INFO = 2
    OPEN = 3
    COUNT = 4
    DELETE = 5


class MatchType(int, Enum):
    """Field a criterion tests."""

    ALIAS = -1
    INVALID = 0
    GENERIC = 1
    ALL = 2

    # Vehicles
    GROUP = 3
    CRASHED = 4
    LENGTH = 5
    WAGONS = 6
    ORDERS = 7
    SPEED = 8
    AGE = 9
    BREAKDOWNS = 10
    MAXSPEED = 11
    PROFIT = 12
    PROFIT_THIS = 13
    PROFIT_LAST = 14
    SERVICE = 15
    IN_DEPOT = 16
    BROKEN = 17

    # Towns
    TOWN_POPULATION = 18
    TOWN_HOUSES = 19
    TOWN_RATING = 20
    TOWN_STATUE = 21
    TOWN_NO_STATUE = 22
    TOWN_FUNDING = 23
    TOWN_ROADWORKS = 24
    TOWN_EXCLUSIVE_COMPANY = 25
    TOWN_EXCLUSIVE_MONTHS = 26
    TOWN_EXCLUSIVE_MY_MONTHS = 27
    TOWN_EXCLUSIVE_OTHERS_MONTHS = 28
    TOWN_UNWANTED_MONTHS = 29
    TOWN_NOISE = 30
    TOWN_NOISE_REMAIN = 31
    TOWN_NOISE_MAX = 32

    # Industries
    INDUSTRY_PRODUCTION = 33
    INDUSTRY_PRODUCTION_THIS = 34
    INDUSTRY_PERCENT = 35
    INDUSTRY_PERCENT_THIS = 36

    # Generic vehicle criterion resolved to a group of the local company;
    # never parsed from text, so it has no table entry
    GROUP_ID = 37


T = TypeVar("T", bound=Enum)


@dataclass(frozen=True)
class Descriptor(Generic[T]):
    """One command or match entry of a descriptor table."""

    id: T
    name: str
    params: int = 0
    req: Requirement = NONE
    help: str = ""

    @property
    def is_alias(self) -> bool:
        return self.id.value == -1

    def applies_to(self, mask: Requirement) -> bool:
        return bool(self.req & mask)


DescriptorTable = Tuple[Descriptor, ...]


def alias(command_type: type, name: str) -> Descriptor:
    return Descriptor(command_type.ALIAS, name, 0, Requirement.IS_ALIAS)


_R = Requirement

VEHICLE_COMMANDS: DescriptorTable = (
    alias(VehicleCommand, "centre"),
    Descriptor(VehicleCommand.CENTER, "center", 0, _R.FOR_VEHICLE,
               "Center main view on vehicle's location"),
    Descriptor(VehicleCommand.CLONE, "clone", 0, _R.FOR_VEHICLE | _R.IN_DEPOT,
               "Clone vehicle, if it is in depot. Parameter specifies number of created clones (default 1)"),
    Descriptor(VehicleCommand.CLONE_SHARED, "clone_shared", 0, _R.FOR_VEHICLE | _R.IN_DEPOT,
               "Same as clone, but with shared orders"),
    Descriptor(VehicleCommand.COUNT, "count", 0, _R.FOR_VEHICLE,
               "Count vehicles matching given criteria"),
    Descriptor(VehicleCommand.DEPOT, "depot", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Send to depot"),
    Descriptor(VehicleCommand.IGNORE, "ignore", 0, _R.FOR_TRAIN | _R.NOT_CRASHED,
               "Ignore signals"),
    Descriptor(VehicleCommand.INFO, "info", 0, _R.FOR_VEHICLE,
               "Show vehicle info in console"),
    Descriptor(VehicleCommand.INTERVAL, "interval", 1, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Set servicing interval. Parameter specifies new interval in days/percent"),
    Descriptor(VehicleCommand.LEAVE_STATION, "leave", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Leave station by skipping to next order"),
    alias(VehicleCommand, "show"),
    Descriptor(VehicleCommand.OPEN, "open", 0, _R.FOR_VEHICLE,
               "Open vehicle window"),
    Descriptor(VehicleCommand.SELL, "sell", 0, _R.FOR_VEHICLE | _R.STOPPED | _R.IN_DEPOT,
               "Sell vehicle, if it is stopped in depot"),
    Descriptor(VehicleCommand.SERVICE, "service", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Send for servicing"),
    Descriptor(VehicleCommand.SKIP_ORDER, "skip", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Skip to next order. Optional parameter specifies how many orders to skip "
               "('r' = skip to random order, default is 1)"),
    alias(VehicleCommand, "go"),
    Descriptor(VehicleCommand.START, "start", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Start vehicle"),
    Descriptor(VehicleCommand.STOP, "stop", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Stop vehicle"),
    alias(VehicleCommand, "reverse"),
    Descriptor(VehicleCommand.TURN, "turn", 0, _R.FOR_TRAIN | _R.FOR_ROAD | _R.NOT_CRASHED,
               "Turn around"),
    Descriptor(VehicleCommand.UNSERVICE, "unservice", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Cancel order to be sent for servicing"),
    Descriptor(VehicleCommand.UNDEPOT, "undepot", 0, _R.FOR_VEHICLE | _R.NOT_CRASHED,
               "Cancel order to be sent to depot"),
    Descriptor(VehicleCommand.WAGON_INFO, "winfo", 0, _R.FOR_TRAIN,
               "Show info about train wagons in console"),
    Descriptor(VehicleCommand.SELL_WAGON, "wsell", 1, _R.FOR_TRAIN | _R.STOPPED | _R.IN_DEPOT,
               "Sell train wagons(s). If one parameter is given, single wagon will be sold. "
               "If two parameters are given, they will specify range of wagons to sell."),
)

TOWN_COMMANDS: DescriptorTable = (
    alias(TownCommand, "centre"),
    Descriptor(TownCommand.CENTER, "center", 0, _R.FOR_TOWN,
               "Center main view on town location"),
    Descriptor(TownCommand.COUNT, "count", 0, _R.FOR_TOWN,
               "Count towns matching given criteria"),
    Descriptor(TownCommand.INFO, "info", 0, _R.FOR_TOWN,
               "Show town info in console"),
    Descriptor(TownCommand.PRINT, "print", 0, _R.FOR_TOWN,
               "Print town name in console"),
    alias(TownCommand, "show"),
    Descriptor(TownCommand.OPEN, "open", 0, _R.FOR_TOWN,
               "Open town window"),
    Descriptor(TownCommand.OPEN_AUTHORITY, "auth", 0, _R.FOR_TOWN,
               "Open town authority window"),
    alias(TownCommand, "small_ad"),
    Descriptor(TownCommand.ACTION_AD_SMALL, "ad_small", 0, _R.FOR_TOWN,
               "Launch small advertising campaign in the town"),
    alias(TownCommand, "medium_ad"),
    Descriptor(TownCommand.ACTION_AD_MEDIUM, "ad_medium", 0, _R.FOR_TOWN,
               "Launch medium advertising campaign in the town"),
    alias(TownCommand, "large_ad"),
    Descriptor(TownCommand.ACTION_AD_LARGE, "ad_large", 0, _R.FOR_TOWN,
               "Launch large advertising campaign in the town"),
    alias(TownCommand, "reconstruction"),
    Descriptor(TownCommand.ACTION_ROAD, "road", 0, _R.FOR_TOWN,
               "Fund road reconstruction in town"),
    Descriptor(TownCommand.ACTION_STATUE, "statue", 0, _R.FOR_TOWN,
               "Build statue in town"),
    alias(TownCommand, "building"),
    Descriptor(TownCommand.ACTION_FUND, "fund", 0, _R.FOR_TOWN,
               "Fund construction of new buildings"),
    Descriptor(TownCommand.ACTION_EXCLUSIVE, "exclusive", 0, _R.FOR_TOWN,
               "Buy exclusive rights in town"),
    Descriptor(TownCommand.ACTION_BRIBE, "bribe", 0, _R.FOR_TOWN,
               "Bribe town authority"),
    Descriptor(TownCommand.EXPAND, "expand", 0, _R.FOR_TOWN | _R.IN_EDITOR,
               "Expand town (scenario editor only) Parameter specifies number of repetitions (default 1)"),
    Descriptor(TownCommand.DELETE, "delete", 0, _R.FOR_TOWN | _R.IN_EDITOR,
               "Delete the town (scenario editor only)"),
)

INDUSTRY_COMMANDS: DescriptorTable = (
    alias(IndustryCommand, "centre"),
    Descriptor(IndustryCommand.CENTER, "center", 0, _R.FOR_INDUSTRY,
               "Center main view on industry location"),
    Descriptor(IndustryCommand.COUNT, "count", 0, _R.FOR_INDUSTRY,
               "Count industries matching given criteria"),
    Descriptor(IndustryCommand.INFO, "info", 0, _R.FOR_INDUSTRY,
               "Show industry info in console"),
    alias(IndustryCommand, "show"),
    Descriptor(IndustryCommand.OPEN, "open", 0, _R.FOR_INDUSTRY,
               "Open industry window"),
    Descriptor(IndustryCommand.DELETE, "delete", 0, _R.FOR_INDUSTRY,
               "Delete the industry"),
)

_ALL_TARGETS = _R.FOR_VEHICLE | _R.FOR_INDUSTRY | _R.FOR_TOWN

# Criteria taking no operand; matched against the whole token
BOOLEAN_MATCHES: DescriptorTable = (
    Descriptor(MatchType.ALL, "all", 0, _ALL_TARGETS | _R.USE_PRINTF, " for all %ss"),
    Descriptor(MatchType.ALL, "*", 0, _ALL_TARGETS | _R.USE_PRINTF, " for all %ss"),
    Descriptor(MatchType.BROKEN, "broken", 0, _R.FOR_VEHICLE | _R.USE_PRINTF,
               " for all broken down %ss"),
    Descriptor(MatchType.CRASHED, "crashed", 0, _R.FOR_VEHICLE | _R.USE_PRINTF,
               " for all crashed %ss"),
    Descriptor(MatchType.IN_DEPOT, "depot", 0, _R.FOR_VEHICLE | _R.USE_PRINTF,
               " for all %ss in depot"),
    Descriptor(MatchType.TOWN_STATUE, "statue", 0, _R.FOR_TOWN,
               " for all towns where you have a statue"),
    Descriptor(MatchType.TOWN_NO_STATUE, "no_statue", 0, _R.FOR_TOWN,
               " for all towns where you don't have a statue"),
)

# Criteria of the form key<op>value
NUMERIC_MATCHES: DescriptorTable = (
    # Vehicles
    Descriptor(MatchType.AGE, "age", 1, _R.FOR_VEHICLE,
               "=[value] for matching age (in years)"),
    Descriptor(MatchType.BREAKDOWNS, "breakdowns", 1, _R.FOR_VEHICLE,
               "=[value] for matching breakdowns since last service"),
    Descriptor(MatchType.LENGTH, "len", 1, _R.FOR_TRAIN,
               "=[value] for matching train length (in tiles)"),
    Descriptor(MatchType.MAXSPEED, "maxspeed", 1, _R.FOR_VEHICLE,
               "=[value] for matching maximum speed (in km/h)"),
    Descriptor(MatchType.ORDERS, "orders", 1, _R.FOR_VEHICLE,
               "=[value] for matching number of orders"),
    Descriptor(MatchType.GROUP, "group", 1, _R.FOR_VEHICLE,
               "=[name] for matching group by name"),
    Descriptor(MatchType.PROFIT, "profit", 1, _R.FOR_VEHICLE,
               "=[value] for matching sum of this and last year's profit (in pounds)"),
    Descriptor(MatchType.PROFIT_THIS, "profit_this", 1, _R.FOR_VEHICLE,
               "=[value] for matching this year's profit (in pounds)"),
    Descriptor(MatchType.PROFIT_LAST, "profit_last", 1, _R.FOR_VEHICLE,
               "=[value] for matching last year's profit (in pounds)"),
    Descriptor(MatchType.SERVICE, "service", 1, _R.FOR_VEHICLE,
               "=[value] for matching service interval (in days/percent)"),
    Descriptor(MatchType.SPEED, "speed", 1, _R.FOR_VEHICLE,
               "=[value] for matching current speed (in km/h)"),
    Descriptor(MatchType.WAGONS, "wagons", 1, _R.FOR_TRAIN,
               "=[value] for matching number of train wagons"),
    # Towns
    Descriptor(MatchType.TOWN_POPULATION, "population", 1, _R.FOR_TOWN,
               "=[value] for matching town population"),
    Descriptor(MatchType.TOWN_HOUSES, "houses", 1, _R.FOR_TOWN,
               "=[value] for matching number of town houses"),
    Descriptor(MatchType.TOWN_RATING, "rating", 1, _R.FOR_TOWN,
               "=[value] for matching your rating in town"),
    Descriptor(MatchType.TOWN_NOISE, "currnoise", 1, _R.FOR_TOWN,
               "=[value] for matching currently used noise level"),
    Descriptor(MatchType.TOWN_NOISE_REMAIN, "noise", 1, _R.FOR_TOWN,
               "=[value] for matching remaining (usable by you) noise level"),
    Descriptor(MatchType.TOWN_NOISE_MAX, "maxnoise", 1, _R.FOR_TOWN,
               "=[value] for matching maximal noise level"),
    Descriptor(MatchType.TOWN_FUNDING, "fund", 1, _R.FOR_TOWN,
               "=[value] for matching months remaining in building funding"),
    Descriptor(MatchType.TOWN_ROADWORKS, "roadworks", 1, _R.FOR_TOWN,
               "=[value] for matching months remaining in road reconstructions"),
    Descriptor(MatchType.TOWN_EXCLUSIVE_COMPANY, "exclusive", 1, _R.FOR_TOWN,
               "=[value] for matching company having exclusive rights"),
    Descriptor(MatchType.TOWN_EXCLUSIVE_MONTHS, "any_exclusive", 1, _R.FOR_TOWN,
               "=[value] for matching months of remaining exclusive rights for any company"),
    Descriptor(MatchType.TOWN_EXCLUSIVE_MY_MONTHS, "my_exclusive", 1, _R.FOR_TOWN,
               "=[value] for matching months of remaining exclusive rights for your company"),
    Descriptor(MatchType.TOWN_EXCLUSIVE_OTHERS_MONTHS, "other_exclusive", 1, _R.FOR_TOWN,
               "=[value] for matching months of remaining exclusive rights for any competitor company"),
    Descriptor(MatchType.TOWN_UNWANTED_MONTHS, "unwanted", 1, _R.FOR_TOWN,
               "=[value] for matching months you are unwanted in town due to bribe"),
    # Industries
    Descriptor(MatchType.INDUSTRY_PRODUCTION, "production", 1, _R.FOR_INDUSTRY,
               "=[value] for matching industry production last month"),
    Descriptor(MatchType.INDUSTRY_PRODUCTION_THIS, "thisproduction", 1, _R.FOR_INDUSTRY,
               "=[value] for matching industry production this month"),
    Descriptor(MatchType.INDUSTRY_PERCENT, "percent", 1, _R.FOR_INDUSTRY,
               "=[value] for percent transported last month"),
    Descriptor(MatchType.INDUSTRY_PERCENT_THIS, "thispercent", 1, _R.FOR_INDUSTRY,
               "=[value] for percent transported this month"),
)
