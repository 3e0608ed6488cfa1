#!/usr/bin/env python3
"""
dmicli - dmidecode-style option front end

Usage:
    python dmicli.py [-d FILE] [-q] [-s KEYWORD | -t TYPE ...] [-u]
                     [--dump-bin FILE | --from-dump FILE] [-h] [-V]

Parses and validates the options, then prints the selection the decoder
would receive. Exit status is 0 on success and 1 on any option error.

Examples:
    python dmicli.py -t memory -t 7
    python dmicli.py -s system-uuid
    python dmicli.py --from-dump table.bin -t 0x11
    python dmicli.py -s foo                  # lists valid string keywords
"""

import sys
import os
from typing import Optional, Sequence

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dmiopt import OptionError, OptionFlag, ValidatedOptions, __version__
from dmiopt.cli import format_help, parse_and_validate
from dmiopt.config import PROGRAM_NAME
from dmiopt.log import setup_logging


def describe(opts: ValidatedOptions) -> str:
    """Human-readable summary of what the decoder is asked to do."""
    lines = []
    if not opts.quiet:
        lines.append(f"# {PROGRAM_NAME} {__version__}")

    if opts.from_dump_path is not None:
        lines.append(f"Source: dump file {opts.from_dump_path}")
    else:
        lines.append(f"Source: memory device {opts.devmem}")

    if opts.dump_bin_path is not None:
        lines.append(f"Output: binary dump to {opts.dump_bin_path}")
    elif opts.has(OptionFlag.DUMP):
        lines.append("Output: raw entries (no decoding)")
    else:
        lines.append("Output: decoded entries")

    if opts.string is not None:
        s = opts.string
        hook = s.extractor or s.formatter
        via = f", via {hook.__name__}" if hook is not None else ""
        lines.append(f"String: {s.keyword} (type {s.structure_type}, offset 0x{s.offset:02X}{via})")
    elif opts.type is not None:
        codes = ", ".join(str(c) for c in opts.type.codes) or "(none)"
        lines.append(f"Types: {codes}")
    else:
        lines.append("Types: all")
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    log = setup_logging()
    try:
        opts = parse_and_validate(argv)
    except OptionError as e:
        log.debug("option error: %r", e)
        print(e.diagnostics(), file=sys.stderr)
        return 1

    if opts.has(OptionFlag.HELP):
        print(format_help(), end="")
        return 0
    if opts.has(OptionFlag.VERSION):
        print(__version__)
        return 0

    print(describe(opts))
    return 0


if __name__ == "__main__":
    sys.exit(main())
