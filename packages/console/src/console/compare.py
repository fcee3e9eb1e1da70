"""
Value Comparison

Shared comparison of an entity field against a criterion operand.
An operand that does not parse makes the comparison false.
"""

import operator as op
from typing import Callable, Dict, Optional

from sim.parsing import parse_integer, parse_money

from .expression import Operator

_COMPARATORS: Dict[Operator, Callable[[int, int], bool]] = {
    Operator.EQUAL: op.eq,
    Operator.NOT_EQUAL: op.ne,
    Operator.LESS: op.lt,
    Operator.LESS_OR_EQUAL: op.le,
    Operator.GREATER_OR_EQUAL: op.ge,
    Operator.GREATER: op.gt,
}


def numeric_match(value: int, operator: Operator, target: int) -> bool:
    """Compare value with target. Operator.NONE never matches."""
    comparator = _COMPARATORS.get(operator)
    if comparator is None:
        return False
    return comparator(value, target)


def _match_parsed(value: int, operator: Operator, target: Optional[int]) -> bool:
    if target is None:
        return False
    return numeric_match(value, operator, target)


def integer_match(value: int, operator: Operator, operand: str) -> bool:
    return _match_parsed(value, operator, parse_integer(operand))


def money_match(value: int, operator: Operator, operand: str) -> bool:
    return _match_parsed(value, operator, parse_money(operand))


def string_match(value: str, operator: Operator, operand: str) -> bool:
    """
    Case-insensitive lexicographic comparison, so 'group<M' matches
    every group named before 'M'.
    """
    left, right = value.lower(), operand.lower()
    difference = (left > right) - (left < right)
    return numeric_match(difference, operator, 0)
