"""
Live Entity Store

Holds every live simulation entity by id. The console enumerates and
reads entities through this store; only the command gateway mutates it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .types import Company, Group, Industry, Town, Vehicle, VehicleType

logger = logging.getLogger(__name__)


def _is_prefix(prefix: str, text: str) -> bool:
    """Case-insensitive prefix test; the empty string is never a prefix."""
    return bool(prefix) and text.lower().startswith(prefix.lower())


@dataclass
class World:
    """
    All live entities of one game, keyed by id.

    The local company is the company the console operator plays as;
    None when spectating.
    """

    vehicles: Dict[int, Vehicle] = field(default_factory=dict)
    towns: Dict[int, Town] = field(default_factory=dict)
    industries: Dict[int, Industry] = field(default_factory=dict)
    companies: Dict[int, Company] = field(default_factory=dict)
    groups: Dict[int, Group] = field(default_factory=dict)

    local_company: Optional[int] = None

    # =========================================================================
    # Registration
    # =========================================================================

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        self.vehicles[vehicle.id] = vehicle
        return vehicle

    def add_town(self, town: Town) -> Town:
        self.towns[town.id] = town
        return town

    def add_industry(self, industry: Industry) -> Industry:
        if industry.town_id not in self.towns:
            raise ValueError(f"Industry {industry.id} refers to unknown town {industry.town_id}")
        self.industries[industry.id] = industry
        return industry

    def add_company(self, company: Company) -> Company:
        self.companies[company.id] = company
        return company

    def add_group(self, group: Group) -> Group:
        self.groups[group.id] = group
        return group

    # =========================================================================
    # Enumeration
    # =========================================================================

    def get_vehicles(
        self, vehicle_type: Optional[VehicleType] = None, owner: Optional[int] = None
    ) -> List[Vehicle]:
        """All live vehicles in id order, optionally filtered by type and owner."""
        return [
            v
            for _, v in sorted(self.vehicles.items())
            if (vehicle_type is None or v.type == vehicle_type)
            and (owner is None or v.owner == owner)
        ]

    def get_towns(self) -> List[Town]:
        return [t for _, t in sorted(self.towns.items())]

    def get_industries(self) -> List[Industry]:
        return [i for _, i in sorted(self.industries.items())]

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        return self.vehicles.get(vehicle_id)

    def get_town(self, town_id: int) -> Optional[Town]:
        return self.towns.get(town_id)

    def get_industry(self, industry_id: int) -> Optional[Industry]:
        return self.industries.get(industry_id)

    def get_company(self, company_id: Optional[int]) -> Optional[Company]:
        if company_id is None:
            return None
        return self.companies.get(company_id)

    def get_group(self, group_id: Optional[int]) -> Optional[Group]:
        if group_id is None:
            return None
        return self.groups.get(group_id)

    @property
    def has_local_company(self) -> bool:
        return self.get_company(self.local_company) is not None

    def town_name(self, town: Town) -> str:
        return town.name

    def industry_town(self, industry: Industry) -> Town:
        return self.towns[industry.town_id]

    def group_name(self, group_id: Optional[int]) -> Optional[str]:
        """Display name of a group, or None if the id is not a live group."""
        group = self.get_group(group_id)
        return group.display_name if group else None

    def find_group_by_name(self, name: str) -> Optional[Group]:
        """
        Find one of the local company's groups by name.

        A case-sensitive match wins outright. Otherwise a case-insensitive
        match is returned if it is unique, then a case-insensitive prefix
        match if that is unique. For example 'XYZ' against groups 'xyz'
        and 'Xyz' finds nothing.
        """
        nocase: Optional[Group] = None
        prefix: Optional[Group] = None
        unique_nocase = True
        unique_prefix = True

        for _, group in sorted(self.groups.items()):
            if group.owner != self.local_company:
                continue
            group_name = group.display_name
            if group_name == name:
                return group
            if group_name.lower() == name.lower():
                if nocase:
                    unique_nocase = False
                nocase = group
                continue
            if _is_prefix(name, group_name):
                if prefix:
                    unique_prefix = False
                prefix = group

        if nocase and unique_nocase:
            return nocase
        if prefix and unique_prefix:
            return prefix
        return None

    # =========================================================================
    # Removal (used by the gateway)
    # =========================================================================

    def remove_vehicle(self, vehicle_id: int) -> bool:
        return self.vehicles.pop(vehicle_id, None) is not None

    def remove_town(self, town_id: int) -> bool:
        if town_id not in self.towns:
            return False
        # Industries cannot outlive their town
        for industry_id in [i.id for i in self.industries.values() if i.town_id == town_id]:
            del self.industries[industry_id]
            logger.debug(f"Removed industry {industry_id} with town {town_id}")
        del self.towns[town_id]
        return True

    def remove_industry(self, industry_id: int) -> bool:
        return self.industries.pop(industry_id, None) is not None
