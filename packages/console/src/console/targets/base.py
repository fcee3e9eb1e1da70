"""
Console Targets

A Target is one kind of entity the console can select and command.
It knows how to list its live entities, evaluate criteria against one
entity and execute a command on one entity. The interpreter does the
rest (parsing, resolution, iteration, reporting) the same way for all
kinds.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from ..config import ConsoleContext
from ..descriptors import Descriptor, DescriptorTable, Requirement
from ..expression import Predicate


class TargetKind(str, Enum):
    """Console commands that select entities, one per kind."""

    TRAIN = "train"
    ROAD = "road"
    SHIP = "ship"
    AIRCRAFT = "aircraft"
    VEHICLE = "vehicle"
    TOWN = "town"
    INDUSTRY = "industry"


class Target(ABC):
    """
    Capabilities of one target kind.

    Attributes:
        kind: console command selecting this target
        name: singular display name, e.g. "road vehicle"
        plural: plural display name used in the summary line
        mask: requirement bits a command or match must have to apply
        commands: the command descriptor table
    """

    kind: TargetKind
    name: str
    plural: str
    mask: Requirement
    commands: DescriptorTable

    def check_ready(self, ctx: ConsoleContext) -> None:
        """Raise a ConsoleError if the target cannot be commanded right now."""

    @abstractmethod
    def entities(self, ctx: ConsoleContext) -> List[Any]:
        """All live entities of this kind, in a stable order."""

    @abstractmethod
    def entity_id(self, entity: Any) -> int:
        pass

    @abstractmethod
    def lookup(self, ctx: ConsoleContext, entity_id: int) -> Optional[Any]:
        """The live entity with this id, or None if it no longer exists."""

    def prepare_chain(
        self, ctx: ConsoleContext, predicates: Tuple[Predicate, ...]
    ) -> Tuple[Predicate, ...]:
        """Rewrite parsed criteria before evaluation."""
        return predicates

    def matches(
        self, ctx: ConsoleContext, entity: Any, predicates: Sequence[Predicate]
    ) -> bool:
        """True if every criterion holds for the entity."""
        return all(self.field_matches(ctx, entity, p) for p in predicates)

    @abstractmethod
    def field_matches(self, ctx: ConsoleContext, entity: Any, predicate: Predicate) -> bool:
        """Evaluate a single criterion against one entity."""

    def can_apply(self, ctx: ConsoleContext, command: Descriptor, entity: Any) -> bool:
        """Per-entity preconditions of a command; failing entities are skipped."""
        return True

    @abstractmethod
    def execute(
        self, ctx: ConsoleContext, entity: Any, command: Descriptor, args: List[str]
    ) -> int:
        """Run a command on one entity. Returns 1 if it was affected, else 0."""

    def usage_notes(self) -> List[str]:
        """Extra usage lines describing generic identifiers."""
        return []
