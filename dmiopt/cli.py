"""
Command-line surface for dmicli.

Maps argv onto an OptionState with argparse. Every option is a small
Action that calls the matching OptionState mutation as soon as argparse
consumes it, so options take effect left to right and the first bad one
stops processing.

    -d, --dev-mem FILE     override memory device
    -h, --help             help flag
    -q, --quiet            quiet flag
    -s, --string KEYWORD   select one DMI string (implies --quiet)
    -t, --type TYPE        accumulate type selector
    -u, --dump             raw dump flag
        --dump-bin FILE    dump-to-binary path
        --from-dump FILE   read-from-dump path
    -V, --version          version flag

Before argparse sees anything, argv is scanned the way getopt_long does
it: bundled short flags (-qu), attached values (-tbios, --type=bios),
unique long prefixes (--str), a required value is always the next word
even if it starts with "-", and "--" ends option processing. Each
recognised option is rewritten to its canonical "--long" / "--long=VALUE"
form. The scan stops at the first unknown option or missing value, and
argparse runs only the options before it, so an earlier bad token is
still the one reported.
"""

from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_MEM_DEV, PROGRAM_NAME
from .errors import MissingArgumentError, OptionError, UnknownOptionError
from .options import OptionFlag, OptionState, ValidatedOptions
from .string_keywords import string_keywords
from .type_selector import type_keywords
from .validator import validate

__all__ = ['build_parser', 'parse_command_line', 'parse_and_validate', 'format_help']

log = logging.getLogger(__name__)


HELP_TEXT = (
    f"Usage: {PROGRAM_NAME} [OPTIONS]\n"
    "Options are:\n"
    f" -d, --dev-mem FILE     Read memory from device FILE (default: {DEFAULT_MEM_DEV})\n"
    " -h, --help             Display this help text and exit\n"
    " -q, --quiet            Less verbose output\n"
    " -s, --string KEYWORD   Only display the value of the given DMI string\n"
    " -t, --type TYPE        Only display the entries of given type\n"
    " -u, --dump             Do not decode the entries\n"
    "     --dump-bin FILE    Dump the DMI data to a binary file\n"
    "     --from-dump FILE   Read the DMI data from a binary file\n"
    " -V, --version          Display the version and exit\n"
)


def format_help() -> str:
    return HELP_TEXT


# ──────────────────────────────────────────────
# Option table
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class OptionSpec:
    long: str                           # "--dev-mem"
    short: Optional[str]                # "-d"
    handler: Callable[[OptionState, object], None]
    metavar: Optional[str] = None       # set for options that take a value

    @property
    def takes_value(self) -> bool:
        return self.metavar is not None


def _flag(bit: OptionFlag) -> Callable[[OptionState, object], None]:
    return lambda st, _v: st.set_flag(bit)


OPTIONS: Tuple[OptionSpec, ...] = (
    OptionSpec("--dev-mem", "-d", OptionState.set_devmem, "FILE"),
    OptionSpec("--help", "-h", _flag(OptionFlag.HELP)),
    OptionSpec("--quiet", "-q", _flag(OptionFlag.QUIET)),
    OptionSpec("--string", "-s", OptionState.select_string, "KEYWORD"),
    OptionSpec("--type", "-t", OptionState.add_type, "TYPE"),
    OptionSpec("--dump", "-u", _flag(OptionFlag.DUMP)),
    OptionSpec("--dump-bin", None, OptionState.set_dump_bin, "FILE"),
    OptionSpec("--from-dump", None, OptionState.set_from_dump, "FILE"),
    OptionSpec("--version", "-V", _flag(OptionFlag.VERSION)),
)

_BY_LONG: Dict[str, OptionSpec] = {spec.long: spec for spec in OPTIONS}
_BY_SHORT: Dict[str, OptionSpec] = {spec.short[1]: spec for spec in OPTIONS if spec.short}

# Shown when -s / -t is given without a value.
_MISSING_VALUE_HINTS: Dict[str, Tuple[str, Callable[[], Tuple[str, ...]], str]] = {
    "--string": ("String keyword expected", string_keywords, "string"),
    "--type": ("Type number or keyword expected", type_keywords, "type"),
}


def _missing_value(spec: OptionSpec) -> MissingArgumentError:
    hint = _MISSING_VALUE_HINTS.get(spec.long)
    if hint is None:
        return MissingArgumentError(spec.long)
    message, catalog, title = hint
    return MissingArgumentError(spec.long, message, catalog=catalog(), catalog_title=title)


# ──────────────────────────────────────────────
# getopt-style scan
# ──────────────────────────────────────────────

@dataclass
class ScannedArgs:
    options: List[str]                  # canonical "--long" / "--long=VALUE"
    operands: List[str]
    error: Optional[OptionError] = None  # first bad token; scanning stopped there


def _match_long(name: str) -> OptionSpec:
    if name in _BY_LONG:
        return _BY_LONG[name]
    candidates = [spec for spec in OPTIONS if spec.long.startswith(name)]
    if len(candidates) == 1:
        return candidates[0]
    if candidates:
        choices = " ".join(f"'{spec.long}'" for spec in candidates)
        raise UnknownOptionError(f"option '{name}' is ambiguous; possibilities: {choices}",
                                 token=name)
    raise UnknownOptionError(f"unrecognized option '{name}'", token=name)


def _canonical(spec: OptionSpec, value: Optional[str]) -> str:
    return spec.long if value is None else f"{spec.long}={value}"


def scan_args(argv: Sequence[str]) -> ScannedArgs:
    """Split argv into canonical options and operands, getopt_long style."""
    scanned = ScannedArgs(options=[], operands=[])
    i = 0
    try:
        while i < len(argv):
            arg = argv[i]
            i += 1
            if arg == "--":
                scanned.operands.extend(argv[i:])
                break
            if arg.startswith("--"):
                name, eq, value = arg.partition("=")
                spec = _match_long(name)
                if not spec.takes_value:
                    if eq:
                        raise UnknownOptionError(
                            f"option '{spec.long}' doesn't allow an argument", token=arg)
                    scanned.options.append(_canonical(spec, None))
                    continue
                if not eq:
                    if i >= len(argv):
                        raise _missing_value(spec)
                    value = argv[i]
                    i += 1
                scanned.options.append(_canonical(spec, value))
            elif arg.startswith("-") and arg != "-":
                pos = 1
                while pos < len(arg):
                    spec = _BY_SHORT.get(arg[pos])
                    if spec is None:
                        raise UnknownOptionError(f"invalid option -- '{arg[pos]}'",
                                                 token=f"-{arg[pos]}")
                    pos += 1
                    if not spec.takes_value:
                        scanned.options.append(_canonical(spec, None))
                        continue
                    if pos < len(arg):
                        value = arg[pos:]
                    elif i < len(argv):
                        value = argv[i]
                        i += 1
                    else:
                        raise _missing_value(spec)
                    scanned.options.append(_canonical(spec, value))
                    break
            else:
                scanned.operands.append(arg)
    except OptionError as err:
        scanned.error = err
    return scanned


# ──────────────────────────────────────────────
# argparse plumbing
# ──────────────────────────────────────────────

class _StateAction(argparse.Action):
    """Forward a parsed option straight to an OptionState method."""

    def __init__(self, option_strings, dest, handler: Callable[[OptionState, object], None],
                 nargs=None, **kwargs):
        # Nothing is stored on the namespace by argparse itself.
        kwargs.pop("default", None)
        self.handler = handler
        super().__init__(option_strings, dest=argparse.SUPPRESS,
                         default=argparse.SUPPRESS, nargs=nargs, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if self.nargs is None and values == []:
            # argparse strips a bare "--" value ("-t --")
            values = "--"
        log.debug("option %s %r", option_string, values)
        self.handler(namespace, values)


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises OptionError instead of exiting."""

    def error(self, message):
        raise UnknownOptionError(message)


def build_parser() -> OptionParser:
    parser = OptionParser(prog=PROGRAM_NAME, add_help=False, exit_on_error=False)
    for spec in OPTIONS:
        names = [spec.short, spec.long] if spec.short else [spec.long]
        if spec.takes_value:
            parser.add_argument(*names, action=_StateAction, handler=spec.handler,
                                metavar=spec.metavar)
        else:
            parser.add_argument(*names, action=_StateAction, handler=spec.handler, nargs=0)
    return parser


def _translate(err: argparse.ArgumentError) -> OptionError:
    """Turn an argparse error into MissingArgumentError / UnknownOptionError."""
    name = err.argument_name
    if name is not None and "expected one argument" in err.message:
        spec = _BY_LONG.get(name.split("/")[-1])
        if spec is not None:
            return _missing_value(spec)
        return MissingArgumentError(name)
    return UnknownOptionError(str(err), token=name)


# ──────────────────────────────────────────────
# Public entry points
# ──────────────────────────────────────────────

def parse_command_line(argv: Optional[Sequence[str]] = None) -> OptionState:
    """Consume argv (default: sys.argv[1:]) into a fresh OptionState.

    The returned state is still COLLECTING; pass it to validate().

    Raises:
        OptionError: first bad token (unknown option, missing value,
            bad type/string keyword, duplicate --string).
    """
    if argv is None:
        argv = sys.argv[1:]
    scanned = scan_args(list(argv))

    state = OptionState()
    parser = build_parser()
    try:
        parser.parse_args(scanned.options, namespace=state)
    except argparse.ArgumentError as err:
        raise _translate(err) from None
    if scanned.error is not None:
        raise scanned.error

    for arg in scanned.operands:
        state.add_operand(arg)
    if state.operands:
        log.debug("ignoring operands: %s", state.operands)
    return state


def parse_and_validate(argv: Optional[Sequence[str]] = None) -> ValidatedOptions:
    return validate(parse_command_line(argv))
