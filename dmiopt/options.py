"""
Option state for one dmicli invocation.

An OptionState is created empty, mutated once per recognised option in
command-line order, then validated exactly once:

    COLLECTING --end of argv--> VALIDATING --> READY     (ValidatedOptions)
                                           `-> REJECTED  (MutualExclusionError)

Only a COLLECTING state accepts mutations. What the decoder receives is the
frozen ValidatedOptions snapshot, never the OptionState itself.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import DEFAULT_MEM_DEV
from .errors import DuplicateSelectionError, OptionStateError
from .string_keywords import StringKeyword, lookup_string
from .type_selector import TypeSelector, parse_type

__all__ = ['OptionFlag', 'ParsePhase', 'OptionState', 'ValidatedOptions']

log = logging.getLogger(__name__)


class OptionFlag(enum.Flag):
    NONE = 0
    HELP = enum.auto()
    QUIET = enum.auto()
    DUMP = enum.auto()          # -u: print raw entries instead of decoding
    VERSION = enum.auto()
    DUMP_BIN = enum.auto()
    FROM_DUMP = enum.auto()


class ParsePhase(enum.Enum):
    COLLECTING = "collecting"
    VALIDATING = "validating"
    READY = "ready"
    REJECTED = "rejected"


@dataclass
class OptionState:
    """Mutable option record, filled in while argv is consumed."""
    devmem: Optional[str] = None
    string: Optional[StringKeyword] = None
    type: Optional[TypeSelector] = None
    flags: OptionFlag = OptionFlag.NONE
    dump_bin_path: Optional[str] = None
    from_dump_path: Optional[str] = None
    operands: List[str] = field(default_factory=list)
    phase: ParsePhase = ParsePhase.COLLECTING

    def _require_collecting(self):
        if self.phase is not ParsePhase.COLLECTING:
            raise OptionStateError(
                f"option state is {self.phase.value}, no longer accepting options")

    # ── mutations (one per recognised option) ──

    def set_devmem(self, path: str):
        self._require_collecting()
        self.devmem = path

    def set_flag(self, flag: OptionFlag):
        self._require_collecting()
        self.flags |= flag

    def select_string(self, token: str):
        """-s: only one string may be requested per run."""
        self._require_collecting()
        if self.string is not None:
            raise DuplicateSelectionError("Only one string can be specified", token=token)
        self.string = lookup_string(token)
        self.flags |= OptionFlag.QUIET
        log.debug("string %r -> type %d offset 0x%02X",
                  self.string.keyword, self.string.structure_type, self.string.offset)

    def add_type(self, token: str):
        self._require_collecting()
        self.type = parse_type(self.type, token)

    def set_dump_bin(self, path: str):
        self._require_collecting()
        self.flags |= OptionFlag.DUMP_BIN
        self.dump_bin_path = path

    def set_from_dump(self, path: str):
        self._require_collecting()
        self.flags |= OptionFlag.FROM_DUMP
        self.from_dump_path = path

    def add_operand(self, arg: str):
        self._require_collecting()
        self.operands.append(arg)

    # ── queries ──

    def has(self, flag: OptionFlag) -> bool:
        return bool(self.flags & flag)

    @property
    def mem_device(self) -> str:
        return self.devmem if self.devmem is not None else DEFAULT_MEM_DEV

    def freeze(self) -> ValidatedOptions:
        return ValidatedOptions(
            devmem=self.mem_device,
            devmem_override=self.devmem,
            string=self.string,
            type=self.type.copy() if self.type is not None else None,
            flags=self.flags,
            dump_bin_path=self.dump_bin_path,
            from_dump_path=self.from_dump_path,
            operands=tuple(self.operands),
        )


@dataclass(frozen=True)
class ValidatedOptions:
    """Read-only selection handed to the decoder."""
    devmem: str
    devmem_override: Optional[str]
    string: Optional[StringKeyword]
    type: Optional[TypeSelector]
    flags: OptionFlag
    dump_bin_path: Optional[str]
    from_dump_path: Optional[str]
    operands: Tuple[str, ...] = ()

    def has(self, flag: OptionFlag) -> bool:
        return bool(self.flags & flag)

    @property
    def quiet(self) -> bool:
        return self.has(OptionFlag.QUIET)

    def wants_type(self, code: int) -> bool:
        """Whether the decoder should print structures of type ``code``."""
        if self.string is not None:
            return code == self.string.structure_type
        if self.type is None:
            return True
        return code in self.type
