"""
String keyword table for the -s/--string option.

Each keyword names one field of one DMI structure: the structure type, the
byte offset of the field inside the formatted area, and, for the four
fields that are not plain strings, the hook the decoder must apply.

A linear scan is fine here; the table has 22 entries.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .errors import NotFoundError
from .hooks import chassis_type, processor_family, processor_frequency, system_uuid

__all__ = ['StringKeyword', 'STRING_KEYWORDS', 'lookup_string', 'string_keywords']


@dataclass(frozen=True)
class StringKeyword:
    keyword: str
    structure_type: int
    offset: int
    formatter: Optional[Callable[[int], str]] = None
    extractor: Optional[Callable[[bytes], str]] = None

    @property
    def has_hook(self) -> bool:
        return self.formatter is not None or self.extractor is not None


STRING_KEYWORDS: Tuple[StringKeyword, ...] = (
    StringKeyword("bios-vendor", 0, 0x04),
    StringKeyword("bios-version", 0, 0x05),
    StringKeyword("bios-release-date", 0, 0x08),
    StringKeyword("system-manufacturer", 1, 0x04),
    StringKeyword("system-product-name", 1, 0x05),
    StringKeyword("system-version", 1, 0x06),
    StringKeyword("system-serial-number", 1, 0x07),
    StringKeyword("system-uuid", 1, 0x08, extractor=system_uuid),
    StringKeyword("baseboard-manufacturer", 2, 0x04),
    StringKeyword("baseboard-product-name", 2, 0x05),
    StringKeyword("baseboard-version", 2, 0x06),
    StringKeyword("baseboard-serial-number", 2, 0x07),
    StringKeyword("baseboard-asset-tag", 2, 0x08),
    StringKeyword("chassis-manufacturer", 3, 0x04),
    StringKeyword("chassis-type", 3, 0x05, formatter=chassis_type),
    StringKeyword("chassis-version", 3, 0x06),
    StringKeyword("chassis-serial-number", 3, 0x07),
    StringKeyword("chassis-asset-tag", 3, 0x08),
    StringKeyword("processor-family", 4, 0x06, formatter=processor_family),
    StringKeyword("processor-manufacturer", 4, 0x07),
    StringKeyword("processor-version", 4, 0x10),
    StringKeyword("processor-frequency", 4, 0x16, extractor=processor_frequency),
)


def string_keywords() -> Tuple[str, ...]:
    """Valid string keywords, in table order."""
    return tuple(entry.keyword for entry in STRING_KEYWORDS)


def lookup_string(token: str) -> StringKeyword:
    """Case-insensitive exact lookup of a --string keyword.

    Raises:
        NotFoundError: no such keyword; carries the full keyword list.
    """
    wanted = token.lower()
    for entry in STRING_KEYWORDS:
        if entry.keyword == wanted:
            return entry
    raise NotFoundError(f"Invalid string keyword: {token}", token=token,
                        catalog=string_keywords(), catalog_title="string")
