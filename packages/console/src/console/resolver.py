"""
Name Resolver

Looks up a command or match name in a descriptor table. Supports
abbreviations: any unambiguous case-insensitive prefix of a name
resolves to its entry.
"""

import logging
from typing import Optional

from .descriptors import Descriptor, DescriptorTable

logger = logging.getLogger(__name__)


def is_prefix(prefix: str, name: str) -> bool:
    """
    True if prefix is a non-empty case-insensitive prefix of (or equal to) name.
    """
    return len(prefix) > 0 and name.lower().startswith(prefix.lower())


def canonical(table: DescriptorTable, index: int) -> Descriptor:
    """The entry at index, or the entry an alias at index stands for."""
    entry = table[index]
    if entry.is_alias:
        return table[index + 1]
    return entry


def resolve(name: str, table: DescriptorTable) -> Optional[Descriptor]:
    """
    Resolve a name against a descriptor table.

    A case-insensitive exact match (against an entry or an alias) wins
    immediately. Otherwise the name must be a prefix of entries that all
    stand for the same canonical id; two different ids make the prefix
    ambiguous. Aliases resolve to the entry after them.

    Returns the canonical descriptor, or None if the name is unknown or
    ambiguous.

    Examples:
        resolve("CENTRE", VEHICLE_COMMANDS) -> center
        resolve("cl", VEHICLE_COMMANDS) -> None  (clone, clone_shared)
        resolve("wi", VEHICLE_COMMANDS) -> winfo
    """
    found: Optional[Descriptor] = None
    unique_prefix = True

    for index, entry in enumerate(table):
        target = canonical(table, index)
        if name.lower() == entry.name.lower():
            return target
        if is_prefix(name, entry.name) and (found is None or target.id != found.id):
            if found is not None:
                unique_prefix = False
            found = target

    if found is not None and unique_prefix:
        return found
    if found is not None:
        logger.debug(f"Ambiguous name: {name}")
    return None
