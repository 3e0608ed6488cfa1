"""
Error taxonomy for dmiopt.

Every failure while turning command-line tokens into a selection state is
an ``OptionError``. They are all fatal to the parse phase: the caller
discards the OptionState and exits non-zero.

Keyword-driven errors carry ``catalog``, the tuple of valid keywords, so the
CLI can print "Valid ... keywords are:" the way dmidecode does.
"""

from __future__ import annotations
from typing import Optional, Sequence, Tuple

__all__ = [
    'OptionError', 'ParseError', 'RangeError', 'NotFoundError',
    'DuplicateSelectionError', 'MissingArgumentError', 'UnknownOptionError',
    'MutualExclusionError', 'OptionStateError',
]


class OptionError(Exception):
    """Base class for all option parsing and validation errors."""
    def __init__(self, message: str, token: Optional[str] = None,
                 catalog: Sequence[str] = (), catalog_title: str = ""):
        self.message = message
        self.token = token
        self.catalog: Tuple[str, ...] = tuple(catalog)
        self.catalog_title = catalog_title
        super().__init__(message)

    def diagnostics(self) -> str:
        """Full stderr text: message plus the keyword catalog, if any."""
        lines = [self.message]
        if self.catalog:
            lines.append(f"Valid {self.catalog_title} keywords are:")
            lines.extend(f"  {kw}" for kw in self.catalog)
        return "\n".join(lines)


class ParseError(OptionError):
    """Unrecognised type keyword or malformed type number."""


class RangeError(OptionError):
    """Type number outside 0-255."""
    def __init__(self, value: int, token: Optional[str] = None):
        self.value = value
        super().__init__(f"Invalid type number: {value}", token=token)


class NotFoundError(OptionError):
    """Unknown --string keyword."""


class DuplicateSelectionError(OptionError):
    """A second --string request in the same run."""


class MissingArgumentError(OptionError):
    """An option that takes a value was given none."""
    def __init__(self, option: str, message: str = "",
                 catalog: Sequence[str] = (), catalog_title: str = ""):
        self.option = option
        super().__init__(message or f"Option {option} requires an argument",
                         token=option, catalog=catalog,
                         catalog_title=catalog_title)


class UnknownOptionError(OptionError):
    """Unrecognised (or ambiguous) option."""


class MutualExclusionError(OptionError):
    """Two or more options that cannot be combined were given together."""
    def __init__(self, options: Sequence[str]):
        self.options: Tuple[str, ...] = tuple(options)
        if len(self.options) == 2:
            names = " and ".join(self.options)
        else:
            names = ", ".join(self.options[:-1]) + " and " + self.options[-1]
        super().__init__(f"Options {names} are mutually exclusive")


class OptionStateError(OptionError):
    """An OptionState was used outside the phase that allows it."""
