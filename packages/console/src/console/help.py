"""
Usage Text

Help printed when a target command is invoked without arguments.
"""

from typing import List

from .descriptors import BOOLEAN_MATCHES, NUMERIC_MATCHES, DescriptorTable, Requirement
from .targets import Target


def command_help(target: Target) -> List[str]:
    """
    One line per command applicable to the target. Alias names are
    collected and shown after the command they stand for.
    """
    lines = []
    aliases: List[str] = []
    for entry in target.commands:
        if entry.is_alias:
            aliases.append(entry.name)
            continue
        if not entry.applies_to(target.mask):
            aliases = []
            continue
        alias_text = f" (Aliases: {', '.join(aliases)})" if aliases else ""
        lines.append(f"  {entry.name:<15} {entry.help}{alias_text}")
        aliases = []
    return lines


def match_help(table: DescriptorTable, target: Target) -> List[str]:
    lines = []
    for entry in table:
        if not entry.applies_to(target.mask):
            continue
        text = entry.help
        if entry.req & Requirement.USE_PRINTF:
            text = text % target.name
        lines.append(f"  {entry.name}{text}")
    return lines


def usage(target: Target) -> List[str]:
    """Complete usage text for a target command."""
    lines = [
        f"Invoke command on specified {target.name}(s). Usage: "
        f"'{target.kind.value} <identifier> <command> [<optional command parameters...>]'",
        "Command can be:",
    ]
    lines.extend(command_help(target))
    lines.append("Identifier can be:")
    lines.extend(match_help(BOOLEAN_MATCHES, target))
    lines.append(
        "Operators < > <= >= and <> can be also used instead of = for following matches:"
    )
    lines.extend(match_help(NUMERIC_MATCHES, target))
    lines.append("You can specify multiple match conditions before the command.")
    lines.append(
        "If you use more than one match condition, you have to separate them by 'and' "
        "or '&' parameter. Number of match conditions is not limited."
    )
    notes = target.usage_notes()
    if notes:
        lines.append("You can also use:")
        lines.extend(notes)
    return lines
