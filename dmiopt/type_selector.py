"""
Type selector for the -t/--type option.

A TypeSelector is a 256-entry include map over DMI structure type codes.
Each -t argument is either a category keyword ("bios", "memory", ...) or a
list of numbers separated by commas and/or spaces, and every occurrence is
unioned into the selector built so far:

    -t memory -t 7        -> {5, 6, 16, 17, 7}
    -t "0x10, 017,4"      -> {16, 15, 4}

Numbers follow C strtoul(..., 0) rules: 0x/0X prefix is hex, a leading 0
is octal, anything else is decimal.
"""

from __future__ import annotations
import logging
import re
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

from .errors import ParseError, RangeError

__all__ = ['TypeSelector', 'TYPE_KEYWORDS', 'parse_type', 'type_keywords']

log = logging.getLogger(__name__)

TYPE_CODE_COUNT = 256


# ──────────────────────────────────────────────
# Category keywords
# ──────────────────────────────────────────────

TYPE_KEYWORDS: Mapping[str, Tuple[int, ...]] = MappingProxyType({
    "bios":      (0, 13),
    "system":    (1, 12, 15, 23, 32),
    "baseboard": (2, 10),
    "chassis":   (3,),
    "processor": (4,),
    "memory":    (5, 6, 16, 17),
    "cache":     (7,),
    "connector": (8,),
    "slot":      (9,),
})


def type_keywords() -> Tuple[str, ...]:
    """Valid category keywords, in table order."""
    return tuple(TYPE_KEYWORDS)


# ──────────────────────────────────────────────
# Selector value
# ──────────────────────────────────────────────

class TypeSelector:
    """Set of included structure type codes (0-255). Grows only by union."""

    __slots__ = ('_bits',)

    def __init__(self, codes: Iterable[int] = ()):
        self._bits = bytearray(TYPE_CODE_COUNT)
        for code in codes:
            self._include(code)

    def _include(self, code: int):
        if not 0 <= code < TYPE_CODE_COUNT:
            raise RangeError(code)
        self._bits[code] = 1

    def union(self, codes: Iterable[int]) -> TypeSelector:
        """Return a new selector including ``codes`` as well."""
        merged = self.copy()
        for code in codes:
            merged._include(code)
        return merged

    def copy(self) -> TypeSelector:
        clone = TypeSelector()
        clone._bits[:] = self._bits
        return clone

    @property
    def codes(self) -> Tuple[int, ...]:
        """Included codes in ascending order."""
        return tuple(i for i, bit in enumerate(self._bits) if bit)

    def as_bitmap(self) -> bytes:
        """One byte per type code, 1 = include (what the decoder indexes)."""
        return bytes(self._bits)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and 0 <= code < TYPE_CODE_COUNT and bool(self._bits[code])

    def __iter__(self) -> Iterator[int]:
        return iter(self.codes)

    def __len__(self) -> int:
        return sum(self._bits)

    def __bool__(self) -> bool:
        # An allocated-but-empty selector still counts as "--type given".
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeSelector):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self):
        return hash(bytes(self._bits))

    def __repr__(self) -> str:
        return f"TypeSelector({list(self.codes)})"


# ──────────────────────────────────────────────
# Token parsing
# ──────────────────────────────────────────────

# One strtoul() step: optional whitespace and sign, then hex / octal / decimal.
_NUMBER_RE = re.compile(r'\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)')
_SEPARATORS = ", "


def _to_int(digits: str) -> int:
    if digits[:2] in ("0x", "0X"):
        return int(digits[2:], 16)
    if len(digits) > 1 and digits[0] == "0":
        return int(digits[1:], 8)
    return int(digits)


def _parse_numbers(token: str) -> Tuple[int, ...]:
    """Split a numeric type list into codes, raising on the first bad entry."""
    codes = []
    pos = 0
    while pos < len(token):
        m = _NUMBER_RE.match(token, pos)
        if m is None:
            rest = token[pos:]
            raise ParseError(f"Invalid type keyword: {rest}", token=rest,
                             catalog=type_keywords(), catalog_title="type")
        value = _to_int(m.group(2))
        if m.group(1) == "-":
            value = -value
        if not 0 <= value < TYPE_CODE_COUNT:
            raise RangeError(value, token=token)
        codes.append(value)
        pos = m.end()
        while pos < len(token) and token[pos] in _SEPARATORS:
            pos += 1
    return tuple(codes)


def parse_type(existing: Optional[TypeSelector], token: str) -> TypeSelector:
    """Resolve one -t argument and union it into ``existing``.

    Args:
        existing: Selector accumulated by earlier -t options, or None.
        token: Category keyword or number list.

    Returns:
        A new TypeSelector; ``existing`` is never modified, so a failing
        call leaves no partial update behind.

    Raises:
        ParseError: token is neither a keyword nor a valid number list.
        RangeError: a number is outside 0-255.
    """
    base = existing if existing is not None else TypeSelector()

    category = TYPE_KEYWORDS.get(token.lower())
    if category is not None:
        log.debug("type keyword %r -> %s", token, category)
        return base.union(category)

    codes = _parse_numbers(token)
    log.debug("type numbers %r -> %s", token, codes)
    return base.union(codes)
