"""
dmiopt - command-line selection core for a DMI/SMBIOS table decoder
====================================================================
Turns dmidecode-style options into a validated, read-only selection that
the decoder consumes. Decoding the tables, reading /dev/mem or dump files,
and printing records all happen elsewhere.

Architecture:
    ┌────────┐    ┌──────────────────┐    ┌─────────────┐    ┌───────────┐    ┌─────────┐
    │  argv  │───>│ cli (argparse)   │───>│ OptionState │───>│ validator │───>│ decoder │
    └────────┘    │  type_selector   │    │ (collecting)│    │ (5 rules) │    │(external)│
                  │  string_keywords │    └─────────────┘    └───────────┘    └─────────┘
                  └──────────────────┘

    - type_selector.py:   -t keyword / number list -> 256-entry include map
    - string_keywords.py: -s keyword -> (structure type, offset, hook)
    - hooks.py:           formatters / extractors the decoder applies for -s
    - options.py:         OptionState, flags, lifecycle, ValidatedOptions
    - validator.py:       mutual-exclusion rules, first violation wins
    - cli.py:             argv mapping, help text
"""

from .config import VERSION as __version__

from .errors import (
    OptionError, ParseError, RangeError, NotFoundError, DuplicateSelectionError,
    MissingArgumentError, UnknownOptionError, MutualExclusionError, OptionStateError,
)
from .type_selector import TypeSelector, TYPE_KEYWORDS, parse_type
from .string_keywords import StringKeyword, STRING_KEYWORDS, lookup_string
from .options import OptionFlag, OptionState, ParsePhase, ValidatedOptions
from .validator import validate
from .cli import parse_command_line, parse_and_validate, format_help
