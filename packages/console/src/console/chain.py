"""
Criteria Chain Builder

Reads the criteria at the start of an argument list:

    <criterion> [ (and|&) <criterion> ... ] <command> [<args...>]

Criteria are combined with logical AND only.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .descriptors import Requirement
from .errors import MissingCommandError, TooFewArgumentsError
from .expression import Predicate, parse_criterion

logger = logging.getLogger(__name__)

CONJUNCTIONS = ("and", "&")


def is_conjunction(token: str) -> bool:
    return token.lower() in CONJUNCTIONS


@dataclass(frozen=True)
class ParsedChain:
    """
    Criteria of one invocation, in the order they were written, plus
    the remaining arguments (command name first).
    """

    predicates: Tuple[Predicate, ...]
    rest: List[str]

    @property
    def command(self) -> str:
        return self.rest[0]

    @property
    def command_args(self) -> List[str]:
        return self.rest[1:]


def build_chain(args: Sequence[str], mask: Requirement) -> ParsedChain:
    """
    Build the conjunction of criteria at the start of args.

    Stops at the first token after a criterion that is not 'and' / '&';
    that token is the command. Any criterion error aborts the whole
    chain.

    Raises:
        TooFewArgumentsError: fewer than two arguments
        CriterionError: a criterion could not be parsed
        MissingCommandError: the criteria are not followed by a command
    """
    if len(args) < 2:
        raise TooFewArgumentsError()

    predicates: List[Predicate] = []
    pos = 0
    while pos < len(args):
        predicates.append(parse_criterion(args[pos], mask))
        pos += 1
        if pos >= len(args) or not is_conjunction(args[pos]):
            break
        pos += 1

    if pos >= len(args):
        raise MissingCommandError()

    logger.debug(f"Built chain of {len(predicates)} criteria, command {args[pos]!r}")
    return ParsedChain(tuple(predicates), list(args[pos:]))
