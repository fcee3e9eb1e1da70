"""
Console Targets

One Target per console command that selects entities:
train, road, ship, aircraft, vehicle, town and industry.
"""

from typing import Dict, Optional

from .base import Target, TargetKind
from .industries import IndustryTarget
from .towns import TownTarget
from .vehicles import AIRCRAFT, ROAD, SHIP, TRAIN, VEHICLE, VehicleTarget

TARGETS: Dict[TargetKind, Target] = {
    TargetKind.TRAIN: TRAIN,
    TargetKind.ROAD: ROAD,
    TargetKind.SHIP: SHIP,
    TargetKind.AIRCRAFT: AIRCRAFT,
    TargetKind.VEHICLE: VEHICLE,
    TargetKind.TOWN: TownTarget(),
    TargetKind.INDUSTRY: IndustryTarget(),
}


def get_target(kind: str) -> Optional[Target]:
    """Target for a console command name, or None if there is none."""
    try:
        return TARGETS[TargetKind(kind.lower())]
    except ValueError:
        return None


__all__ = [
    "Target",
    "TargetKind",
    "VehicleTarget",
    "TownTarget",
    "IndustryTarget",
    "TARGETS",
    "get_target",
]
