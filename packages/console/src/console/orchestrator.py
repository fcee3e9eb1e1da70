"""
Console Interpreter

Runs one target invocation:

    <kind> <criterion> [(and|&) <criterion> ...] <command> [<args...>]

The invocation is parsed and checked completely before anything is
touched. Matching entities are then collected by id, and the command is
applied to each of them in a second pass, so commands that delete
entities never disturb the walk.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Union

from .chain import build_chain
from .config import ConsoleContext
from .descriptors import Requirement
from .errors import (
    ConsoleError,
    EditorOnlyError,
    InapplicableCommandError,
    MissingParametersError,
    UnknownCommandError,
)
from .help import usage
from .resolver import resolve
from .targets import Target, TargetKind, get_target

logger = logging.getLogger(__name__)


@dataclass
class InvocationResult:
    """
    Outcome of one invocation.

    handled is False when the console front-end should print the
    command's usage again.
    """

    handled: bool
    matched: int = 0
    affected: int = 0


class Interpreter:
    """Runs target invocations against one ConsoleContext."""

    def __init__(self, ctx: ConsoleContext):
        self.ctx = ctx

    def run(self, kind: Union[str, TargetKind], args: Sequence[str]) -> InvocationResult:
        """
        Run one invocation. args excludes the kind itself.

        Raises:
            ValueError: kind is not a target command
        """
        target = get_target(kind.value if isinstance(kind, TargetKind) else kind)
        if target is None:
            raise ValueError(f"Unknown target kind: {kind}")

        if not args:
            for line in usage(target):
                self.ctx.output.help(line)
            return InvocationResult(handled=True)

        try:
            return self._invoke(target, list(args))
        except ConsoleError as e:
            logger.debug(f"{target.kind.value} {' '.join(args)}: {e.message}")
            self.ctx.output.error(e.message)
            return InvocationResult(handled=not e.reprint_usage)

    def _invoke(self, target: Target, args: List[str]) -> InvocationResult:
        ctx = self.ctx
        target.check_ready(ctx)

        chain = build_chain(args, target.mask)
        command = resolve(chain.command, target.commands)
        if command is None:
            raise UnknownCommandError(chain.command)
        if len(chain.command_args) < command.params:
            raise MissingParametersError(command.name, command.params)
        if not command.applies_to(target.mask):
            raise InapplicableCommandError(command.name, target.name)
        if command.req & Requirement.IN_EDITOR and not ctx.config.in_editor:
            raise EditorOnlyError()

        predicates = target.prepare_chain(ctx, chain.predicates)

        matched_ids = [
            target.entity_id(entity)
            for entity in target.entities(ctx)
            if target.matches(ctx, entity, predicates)
        ]

        affected = 0
        for entity_id in matched_ids:
            entity = target.lookup(ctx, entity_id)
            if entity is None:
                # Removed by the command on an earlier entity
                continue
            if not target.can_apply(ctx, command, entity):
                continue
            affected += target.execute(ctx, entity, command, chain.command_args)

        matched = len(matched_ids)
        summary = f"Number of {target.plural} matched: {matched}, affected: {affected}"
        ctx.output.print(summary)
        logger.info(f"{target.kind.value} {command.name}: {summary}")
        return InvocationResult(handled=True, matched=matched, affected=affected)


def run(kind: Union[str, TargetKind], args: Sequence[str], ctx: ConsoleContext) -> InvocationResult:
    """Run one invocation with a throwaway Interpreter."""
    return Interpreter(ctx).run(kind, args)
