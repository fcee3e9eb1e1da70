"""
Criterion Parser

Turns one criterion token into a Predicate. Tokens come in three forms:

    key<op>value   numeric field comparison, e.g. speed>=120, age=5
    keyword        boolean field, e.g. all, crashed, *
    identifier     anything else: name or number of the entity

Supported operators are = <> < <= > >=.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .descriptors import BOOLEAN_MATCHES, NUMERIC_MATCHES, MatchType, Requirement
from .errors import CriterionError, InapplicableMatchError
from .resolver import resolve

logger = logging.getLogger(__name__)

OPERATOR_CHARS = "<>="


class Operator(str, Enum):
    """Comparison operator of a criterion."""

    NONE = ""
    EQUAL = "="
    NOT_EQUAL = "<>"
    LESS = "<"
    LESS_OR_EQUAL = "<="
    GREATER_OR_EQUAL = ">="
    GREATER = ">"


@dataclass(frozen=True)
class Predicate:
    """
    One parsed criterion.

    operand is the text after the operator (or the whole token when
    there is no operator). It is the caller's argument text, never
    interpreted until the predicate is evaluated.
    """

    field: MatchType
    operator: Operator
    operand: str


def split_operator(token: str) -> Tuple[int, Operator, str]:
    """
    Find the first operator in a token.

    Returns (key length, operator, operand). Without an operator the key
    length is the token length and the operand is the whole token.
    """
    keylen = len(token)
    for pos, char in enumerate(token):
        if char in OPERATOR_CHARS:
            keylen = pos
            break
    else:
        return keylen, Operator.NONE, token

    first = token[keylen]
    second = token[keylen + 1:keylen + 2]
    if first == "=":
        return keylen, Operator.EQUAL, token[keylen + 1:]
    if first == "<":
        if second == "=":
            return keylen, Operator.LESS_OR_EQUAL, token[keylen + 2:]
        if second == ">":
            return keylen, Operator.NOT_EQUAL, token[keylen + 2:]
        return keylen, Operator.LESS, token[keylen + 1:]
    if second == "=":
        return keylen, Operator.GREATER_OR_EQUAL, token[keylen + 2:]
    return keylen, Operator.GREATER, token[keylen + 1:]


def parse_criterion(token: str, mask: Requirement) -> Predicate:
    """
    Parse one criterion token for a target described by mask.

    A key that resolves to a numeric field not applicable to the target
    raises InapplicableMatchError. A key that does not resolve at all
    leaves the criterion generic, matched against the operand.
    A boolean keyword matching the whole token takes precedence over
    everything else.
    """
    field = MatchType.GENERIC
    keylen, operator, operand = split_operator(token)

    if operator != Operator.NONE and not operand:
        raise CriterionError(f"Missing value after '{operator.value}' in criterion '{token}'.")

    if keylen and operator != Operator.NONE:
        match = resolve(token[:keylen], NUMERIC_MATCHES)
        if match is not None:
            if not match.applies_to(mask):
                raise InapplicableMatchError(token[:keylen])
            field = match.id
        else:
            # TODO: decide whether an unknown key should be an error instead of a generic match
            logger.debug(f"Unknown match key in {token!r}, using generic match")

    for entry in BOOLEAN_MATCHES:
        if entry.applies_to(mask) and token.lower() == entry.name.lower():
            field = entry.id
            break

    predicate = Predicate(field, operator, operand)
    logger.debug(f"Parsed criterion {token!r} -> {predicate}")
    return predicate
