"""
Tests for argv -> OptionState mapping (dmiopt.cli) and OptionState itself.

Tests cover:
  - Each option's effect on the state
  - getopt conventions (bundling, attached values, long prefixes)
  - Missing values, unknown options, duplicate --string
  - Fail-fast: the first bad token wins
  - End-to-end parse + validate
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from dmiopt.cli import build_parser, parse_and_validate, parse_command_line
from dmiopt.config import DEFAULT_MEM_DEV
from dmiopt.errors import (
    DuplicateSelectionError, MissingArgumentError, MutualExclusionError,
    NotFoundError, OptionStateError, ParseError, RangeError, UnknownOptionError,
)
from dmiopt.options import OptionFlag, OptionState, ParsePhase
from dmiopt.string_keywords import string_keywords
from dmiopt.type_selector import type_keywords
from dmiopt.validator import validate


# ─── Single options ────────────────────────

class TestOptionEffects:
    def test_empty_argv(self):
        state = parse_command_line([])
        assert state.flags == OptionFlag.NONE
        assert state.type is None and state.string is None
        assert state.mem_device == DEFAULT_MEM_DEV
        assert state.phase is ParsePhase.COLLECTING

    def test_dev_mem_last_wins(self):
        state = parse_command_line(["-d", "/tmp/a", "--dev-mem", "/tmp/b"])
        assert state.devmem == "/tmp/b"
        assert state.mem_device == "/tmp/b"

    @pytest.mark.parametrize("argv, flag", [
        (["-h"], OptionFlag.HELP),
        (["--help"], OptionFlag.HELP),
        (["-q"], OptionFlag.QUIET),
        (["--quiet"], OptionFlag.QUIET),
        (["-u"], OptionFlag.DUMP),
        (["--dump"], OptionFlag.DUMP),
        (["-V"], OptionFlag.VERSION),
        (["--version"], OptionFlag.VERSION),
    ])
    def test_flags(self, argv, flag):
        assert parse_command_line(argv).flags == flag

    def test_flags_are_idempotent(self):
        assert parse_command_line(["-q", "-q", "--quiet"]).flags == OptionFlag.QUIET

    def test_string_sets_quiet(self):
        state = parse_command_line(["-s", "system-uuid"])
        assert state.string.keyword == "system-uuid"
        assert state.has(OptionFlag.QUIET)

    def test_type_accumulates(self):
        state = parse_command_line(["-t", "bios", "--type", "4"])
        assert set(state.type.codes) == {0, 13, 4}

    def test_dump_bin(self):
        state = parse_command_line(["--dump-bin", "out.bin"])
        assert state.dump_bin_path == "out.bin"
        assert state.has(OptionFlag.DUMP_BIN)
        assert state.from_dump_path is None

    def test_from_dump(self):
        state = parse_command_line(["--from-dump", "in.bin"])
        assert state.from_dump_path == "in.bin"
        assert state.has(OptionFlag.FROM_DUMP)
        assert state.dump_bin_path is None

    def test_operands_are_collected(self):
        state = parse_command_line(["-q", "extra", "--", "more"])
        assert state.operands == ["extra", "more"]

    def test_double_dash_ends_options(self):
        state = parse_command_line(["--", "-q", "-x"])
        assert state.operands == ["-q", "-x"]
        assert state.flags == OptionFlag.NONE

    def test_lone_dash_is_operand(self):
        assert parse_command_line(["-"]).operands == ["-"]


# ─── getopt conventions ────────────────────

class TestConventions:
    def test_bundled_short_flags(self):
        state = parse_command_line(["-qV"])
        assert state.flags == OptionFlag.QUIET | OptionFlag.VERSION

    def test_attached_short_value(self):
        assert parse_command_line(["-tbios"]).type.codes == (0, 13)

    def test_long_equals_value(self):
        assert parse_command_line(["--type=0x11"]).type.codes == (17,)

    def test_unique_long_prefix(self):
        state = parse_command_line(["--str", "chassis-type"])
        assert state.string.keyword == "chassis-type"

    def test_ambiguous_long_prefix(self):
        with pytest.raises(UnknownOptionError):
            parse_command_line(["--d", "x"])


# ─── Errors ────────────────────────────────

class TestErrors:
    def test_missing_type_value_lists_type_keywords(self):
        with pytest.raises(MissingArgumentError) as exc:
            parse_command_line(["-t"])
        err = exc.value
        assert err.option == "--type"
        assert err.message == "Type number or keyword expected"
        assert err.catalog == type_keywords()

    def test_missing_string_value_lists_string_keywords(self):
        with pytest.raises(MissingArgumentError) as exc:
            parse_command_line(["--string"])
        assert exc.value.message == "String keyword expected"
        assert exc.value.catalog == string_keywords()

    def test_value_starting_with_dash_is_taken(self):
        with pytest.raises(ParseError) as exc:
            parse_command_line(["-t", "-q"])
        assert exc.value.token == "-q"
        assert exc.value.catalog == type_keywords()

    def test_dash_value_for_path_options(self):
        state = parse_command_line(["-d", "-q", "--dump-bin", "--x"])
        assert state.devmem == "-q"
        assert state.dump_bin_path == "--x"
        assert not state.has(OptionFlag.QUIET)

    def test_double_dash_as_value(self):
        with pytest.raises(ParseError) as exc:
            parse_command_line(["--type", "--"])
        assert exc.value.token == "--"

    @pytest.mark.parametrize("argv, option", [
        (["-d"], "--dev-mem"),
        (["--dump-bin"], "--dump-bin"),
        (["--from-dump"], "--from-dump"),
    ])
    def test_missing_path_value(self, argv, option):
        with pytest.raises(MissingArgumentError) as exc:
            parse_command_line(argv)
        assert exc.value.option == option
        assert exc.value.catalog == ()

    @pytest.mark.parametrize("argv", [["-x"], ["--bogus"], ["-qz"], ["-5"], ["--quiet=1"]])
    def test_unknown_option(self, argv):
        with pytest.raises(UnknownOptionError):
            parse_command_line(argv)

    def test_unknown_string(self):
        with pytest.raises(NotFoundError) as exc:
            parse_command_line(["-s", "foo"])
        assert len(exc.value.catalog) == 22

    def test_second_string_rejected_even_if_valid(self):
        with pytest.raises(DuplicateSelectionError, match="Only one string"):
            parse_command_line(["-s", "bios-vendor", "-s", "bios-version"])

    def test_second_string_rejected_before_lookup(self):
        with pytest.raises(DuplicateSelectionError):
            parse_command_line(["-s", "bios-vendor", "-s", "foo"])

    def test_bad_type(self):
        with pytest.raises(ParseError):
            parse_command_line(["-t", "nonsense"])
        with pytest.raises(RangeError):
            parse_command_line(["-t", "300"])

    def test_first_error_wins(self):
        with pytest.raises(NotFoundError):
            parse_command_line(["-s", "foo", "-s", "bar"])
        with pytest.raises(ParseError):
            parse_command_line(["-t", "nonsense", "-s", "foo"])

    def test_earlier_bad_value_beats_later_unknown_option(self):
        with pytest.raises(NotFoundError):
            parse_command_line(["-s", "foo", "-x"])
        with pytest.raises(ParseError):
            parse_command_line(["-t", "nonsense", "--bogus"])

    @pytest.mark.parametrize("argv", [
        ["--bogus", "-s", "foo"],
        ["-x", "-t"],
        ["-x", "-s", "bios-vendor", "-s", "bios-version"],
        ["-5", "-t", "999"],
    ])
    def test_unknown_option_stops_processing(self, argv):
        with pytest.raises(UnknownOptionError):
            parse_command_line(argv)

    def test_missing_value_after_good_options(self):
        with pytest.raises(MissingArgumentError) as exc:
            parse_command_line(["-q", "-t", "bios", "-s"])
        assert exc.value.option == "--string"


# ─── OptionState lifecycle ─────────────────

class TestOptionState:
    def test_mutation_after_validation_rejected(self):
        state = parse_command_line(["-q"])
        validate(state)
        assert state.phase is ParsePhase.READY
        with pytest.raises(OptionStateError):
            state.set_flag(OptionFlag.DUMP)
        with pytest.raises(OptionStateError):
            state.add_type("bios")

    def test_direct_mutations(self):
        state = OptionState()
        state.add_type("slot")
        state.set_devmem("/dev/fake")
        assert state.type.codes == (9,)
        assert state.mem_device == "/dev/fake"

    def test_parser_is_fresh_each_call(self):
        first = parse_command_line(["-s", "bios-vendor"])
        second = parse_command_line(["-s", "bios-version"])
        assert first.string.keyword == "bios-vendor"
        assert second.string.keyword == "bios-version"

    def test_build_parser_does_not_exit_on_help(self):
        state = OptionState()
        build_parser().parse_known_args(["-h"], namespace=state)
        assert state.has(OptionFlag.HELP)


# ─── End to end ────────────────────────────

class TestEndToEnd:
    def test_memory_plus_cache(self):
        opts = parse_and_validate(["--type", "memory", "--type", "7"])
        assert set(opts.type.codes) == {5, 6, 16, 17, 7}
        assert opts.wants_type(17) and not opts.wants_type(4)

    def test_string_and_type_conflict(self):
        with pytest.raises(MutualExclusionError) as exc:
            parse_and_validate(["--string", "system-uuid", "--type", "bios"])
        assert exc.value.options == ("--string", "--type")

    def test_string_selection_ready(self):
        opts = parse_and_validate(["-s", "processor-frequency"])
        assert opts.quiet
        assert opts.wants_type(4) and not opts.wants_type(1)
        assert opts.string.extractor is not None

    def test_from_dump_with_type(self):
        opts = parse_and_validate(["--from-dump", "t.bin", "-t", "slot"])
        assert opts.from_dump_path == "t.bin"
        assert opts.type.codes == (9,)
