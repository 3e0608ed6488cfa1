"""
Decoder hooks referenced by the --string keyword table.

Four of the string keywords do not point at a plain DMI string but at a
coded byte or a multi-byte field. The table in string_keywords.py carries
one of these callables for them:

  formatter  (code: int -> str)    chassis-type, processor-family
  extractor  (raw: bytes -> str)   system-uuid, processor-frequency

The parser never calls them. The decoder reads the structure, slices the
bytes starting at the keyword's offset, and hands them to the hook.
"""

from __future__ import annotations
import struct
from typing import Dict

__all__ = ['chassis_type', 'processor_family', 'system_uuid', 'processor_frequency']

OUT_OF_SPEC = "<OUT OF SPEC>"


# ──────────────────────────────────────────────
# Value formatters (coded byte -> text)
# ──────────────────────────────────────────────

CHASSIS_TYPES: Dict[int, str] = {
    0x01: "Other",
    0x02: "Unknown",
    0x03: "Desktop",
    0x04: "Low Profile Desktop",
    0x05: "Pizza Box",
    0x06: "Mini Tower",
    0x07: "Tower",
    0x08: "Portable",
    0x09: "Laptop",
    0x0A: "Notebook",
    0x0B: "Hand Held",
    0x0C: "Docking Station",
    0x0D: "All In One",
    0x0E: "Sub Notebook",
    0x0F: "Space-saving",
    0x10: "Lunch Box",
    0x11: "Main Server Chassis",
    0x12: "Expansion Chassis",
    0x13: "Sub Chassis",
    0x14: "Bus Expansion Chassis",
    0x15: "Peripheral Chassis",
    0x16: "RAID Chassis",
    0x17: "Rack Mount Chassis",
    0x18: "Sealed-case PC",
    0x19: "Multi-system",
    0x1A: "CompactPCI",
    0x1B: "AdvancedTCA",
    0x1C: "Blade",
    0x1D: "Blade Enclosing",
    0x1E: "Tablet",
    0x1F: "Convertible",
    0x20: "Detachable",
    0x21: "IoT Gateway",
    0x22: "Embedded PC",
    0x23: "Mini PC",
    0x24: "Stick PC",
}

PROCESSOR_FAMILIES: Dict[int, str] = {
    0x01: "Other",
    0x02: "Unknown",
    0x03: "8086",
    0x04: "80286",
    0x05: "80386",
    0x06: "80486",
    0x07: "8087",
    0x08: "80287",
    0x09: "80387",
    0x0A: "80487",
    0x0B: "Pentium",
    0x0C: "Pentium Pro",
    0x0D: "Pentium II",
    0x0E: "Pentium MMX",
    0x0F: "Celeron",
    0x10: "Pentium II Xeon",
    0x11: "Pentium III",
    0x12: "M1",
    0x13: "M2",
    0x14: "Celeron M",
    0x15: "Pentium 4 HT",
    0x18: "Duron",
    0x19: "K5",
    0x1A: "K6",
    0x1B: "K6-2",
    0x1C: "K6-3",
    0x1D: "Athlon",
    0x1E: "AMD29000",
    0x1F: "K6-2+",
    0x20: "Power PC",
    0x21: "Power PC 601",
    0x22: "Power PC 603",
    0x23: "Power PC 603+",
    0x24: "Power PC 604",
    0x25: "Power PC 620",
    0x26: "Power PC x704",
    0x27: "Power PC 750",
    0x28: "Core Duo",
    0x29: "Core Duo Mobile",
    0x2A: "Core Solo Mobile",
    0x2B: "Atom",
    0x30: "Alpha",
    0x40: "MIPS",
    0x50: "SPARC",
    0x60: "68040",
    0x61: "68xxx",
    0x62: "68000",
    0x63: "68010",
    0x64: "68020",
    0x65: "68030",
    0x70: "Hobbit",
    0x78: "Crusoe TM5000",
    0x79: "Crusoe TM3000",
    0x7A: "Efficeon TM8000",
    0x80: "Weitek",
    0x82: "Itanium",
    0x83: "Athlon 64",
    0x84: "Opteron",
    0x85: "Sempron",
    0x86: "Turion 64",
    0x87: "Dual-Core Opteron",
    0x88: "Athlon 64 X2",
    0x89: "Turion 64 X2",
    0x90: "PA-RISC",
    0xA0: "V30",
    0xB0: "Pentium III Xeon",
    0xB1: "Pentium III Speedstep",
    0xB2: "Pentium 4",
    0xB3: "Xeon",
    0xB4: "AS400",
    0xB5: "Xeon MP",
    0xB6: "Athlon XP",
    0xB7: "Athlon MP",
    0xB8: "Itanium 2",
    0xB9: "Pentium M",
    0xBA: "Celeron D",
    0xBB: "Pentium D",
    0xBC: "Pentium EE",
    0xBD: "Core Solo",
    0xBF: "Core 2 Duo",
    0xC8: "IBM390",
    0xC9: "G4",
    0xCA: "G5",
    0xCB: "ESA/390 G6",
    0xCC: "z/Architecture",
    0xD2: "C7-M",
    0xD3: "C7-D",
    0xD4: "C7",
    0xD5: "Eden",
    0xFA: "i860",
    0xFB: "i960",
}


def chassis_type(code: int) -> str:
    """Chassis type name. Bit 7 is the chassis lock flag and is ignored."""
    return CHASSIS_TYPES.get(code & 0x7F, OUT_OF_SPEC)


def processor_family(code: int) -> str:
    return PROCESSOR_FAMILIES.get(code, OUT_OF_SPEC)


# ──────────────────────────────────────────────
# Scalar extractors (raw field bytes -> text)
# ──────────────────────────────────────────────

UUID_LEN = 16


def system_uuid(raw: bytes) -> str:
    """Format the 16-byte system UUID field.

    All-FF means the vendor left the field unset, all-00 means it can be
    set but was not. Bytes are printed in the order they are stored.
    """
    if len(raw) < UUID_LEN:
        raise ValueError(f"UUID field needs {UUID_LEN} bytes, got {len(raw)}")
    p = bytes(raw[:UUID_LEN])
    if p == b"\xFF" * UUID_LEN:
        return "Not Present"
    if p == b"\x00" * UUID_LEN:
        return "Not Settable"
    h = p.hex().upper()
    return f"{h[0:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:32]}"


def processor_frequency(raw: bytes) -> str:
    """Format a little-endian 16-bit MHz value (current/max speed field)."""
    if len(raw) < 2:
        raise ValueError(f"frequency field needs 2 bytes, got {len(raw)}")
    (mhz,) = struct.unpack_from("<H", raw)
    if mhz == 0:
        return "Unknown"
    return f"{mhz} MHz"
