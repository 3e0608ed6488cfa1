"""
Tests for the -s/--string keyword table and the decoder hooks it references.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import dataclasses

import pytest
from dmiopt.errors import NotFoundError
from dmiopt.hooks import (
    OUT_OF_SPEC, chassis_type, processor_family, processor_frequency, system_uuid,
)
from dmiopt.string_keywords import STRING_KEYWORDS, StringKeyword, lookup_string, string_keywords


# ─── Table ─────────────────────────────────

class TestTable:
    def test_table_has_22_entries(self):
        assert len(STRING_KEYWORDS) == 22
        assert len(set(string_keywords())) == 22

    def test_known_entries(self):
        assert lookup_string("bios-vendor") == StringKeyword("bios-vendor", 0, 0x04)
        entry = lookup_string("processor-version")
        assert (entry.structure_type, entry.offset) == (4, 0x10)

    def test_exactly_four_entries_carry_hooks(self):
        hooked = {e.keyword for e in STRING_KEYWORDS if e.has_hook}
        assert hooked == {"system-uuid", "chassis-type",
                          "processor-family", "processor-frequency"}

    def test_hook_kinds(self):
        assert lookup_string("system-uuid").extractor is system_uuid
        assert lookup_string("processor-frequency").extractor is processor_frequency
        assert lookup_string("chassis-type").formatter is chassis_type
        assert lookup_string("processor-family").formatter is processor_family
        assert lookup_string("chassis-type").extractor is None

    def test_entries_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            lookup_string("bios-vendor").offset = 0


# ─── Lookup ────────────────────────────────

class TestLookup:
    def test_case_insensitive(self):
        assert lookup_string("System-UUID").keyword == "system-uuid"

    def test_prefix_is_not_a_match(self):
        with pytest.raises(NotFoundError):
            lookup_string("bios")

    def test_unknown_keyword(self):
        with pytest.raises(NotFoundError, match="Invalid string keyword: foo") as exc:
            lookup_string("foo")
        err = exc.value
        assert err.token == "foo"
        assert err.catalog == string_keywords()
        assert len(err.catalog) == 22

    def test_diagnostics_lists_catalog(self):
        with pytest.raises(NotFoundError) as exc:
            lookup_string("foo")
        text = exc.value.diagnostics()
        assert text.startswith("Invalid string keyword: foo\nValid string keywords are:\n")
        for keyword in string_keywords():
            assert f"  {keyword}" in text


# ─── Hooks ─────────────────────────────────

class TestHooks:
    def test_uuid_format(self):
        assert system_uuid(bytes(range(16))) == "00010203-0405-0607-0809-0A0B0C0D0E0F"

    def test_uuid_uses_first_16_bytes(self):
        assert system_uuid(bytes(range(1, 20))).startswith("01020304-")

    def test_uuid_not_present(self):
        assert system_uuid(b"\xFF" * 16) == "Not Present"

    def test_uuid_not_settable(self):
        assert system_uuid(bytes(16)) == "Not Settable"

    def test_uuid_too_short(self):
        with pytest.raises(ValueError):
            system_uuid(bytes(15))

    def test_frequency(self):
        assert processor_frequency(b"\xD0\x07") == "2000 MHz"
        assert processor_frequency(b"\x00\x00") == "Unknown"

    def test_frequency_too_short(self):
        with pytest.raises(ValueError):
            processor_frequency(b"\x01")

    def test_chassis_type_ignores_lock_bit(self):
        assert chassis_type(0x03) == "Desktop"
        assert chassis_type(0x83) == "Desktop"
        assert chassis_type(0x17) == "Rack Mount Chassis"

    def test_chassis_type_out_of_spec(self):
        assert chassis_type(0x00) == OUT_OF_SPEC
        assert chassis_type(0x7F) == OUT_OF_SPEC

    def test_processor_family(self):
        assert processor_family(0xB3) == "Xeon"
        assert processor_family(0x02) == "Unknown"
        assert processor_family(0x00) == OUT_OF_SPEC
