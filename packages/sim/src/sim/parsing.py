"""
Argument Parsers

String to integer / money conversion for console arguments. Parsers
never raise: a malformed argument yields None and the caller decides
what "no value" means.
"""

import re
from typing import Optional

# Optional sign, then hex, octal or decimal digits; trailing text is ignored
_NUMBER_RE = re.compile(r"\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")

_ID_RE = re.compile(r"[0-9]+")

_TRUE_WORDS = ("on", "true")
_FALSE_WORDS = ("off", "false")


def _parse_number(text: str) -> Optional[int]:
    match = _NUMBER_RE.match(text)
    if not match:
        return None
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif len(digits) > 1 and digits[0] == "0":
        value = int(digits[1:], 8)
    else:
        value = int(digits)
    return -value if sign == "-" else value


def parse_integer(text: str) -> Optional[int]:
    """
    Parse a console integer argument.

    Accepts 'on'/'true' as 1 and 'off'/'false' as 0, otherwise the
    longest leading C-style integer ('0x' hex, leading '0' octal or
    decimal). Returns None when no digits can be read.

    Examples:
        '42' -> 42
        '0x10' -> 16
        '12abc' -> 12
        'abc' -> None
    """
    if text in _TRUE_WORDS:
        return 1
    if text in _FALSE_WORDS:
        return 0
    return _parse_number(text)


def parse_id(text: str) -> Optional[int]:
    """
    Parse an entity id: the whole token must be decimal digits.

    Unlike parse_integer there are no keyword forms and no trailing
    text, so 'true' and '12abc' are not ids.
    """
    if not _ID_RE.fullmatch(text):
        return None
    return int(text)


def parse_money(text: str) -> Optional[int]:
    """Parse a monetary amount (whole pounds), no currency conversion."""
    return _parse_number(text)
