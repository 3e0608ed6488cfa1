"""
Cross-option validation.

Runs once after argv is consumed. The rules are checked in a fixed order
and only the first violation is reported.
"""

from __future__ import annotations
import logging
from typing import Callable, List, Tuple

from .errors import MutualExclusionError, OptionStateError
from .options import OptionFlag, OptionState, ParsePhase, ValidatedOptions

__all__ = ['validate', 'EXCLUSION_RULES']

log = logging.getLogger(__name__)


# (conflict test, option names reported), in check order
EXCLUSION_RULES: List[Tuple[Callable[[OptionState], bool], Tuple[str, ...]]] = [
    (lambda s: s.string is not None and s.type is not None,
     ("--string", "--type")),
    (lambda s: s.has(OptionFlag.DUMP) and s.string is not None,
     ("--string", "--dump")),
    (lambda s: s.has(OptionFlag.DUMP) and s.has(OptionFlag.QUIET),
     ("--quiet", "--dump")),
    (lambda s: s.dump_bin_path is not None and (s.type is not None or s.string is not None),
     ("--dump-bin", "--string", "--type")),
    (lambda s: s.from_dump_path is not None and s.dump_bin_path is not None,
     ("--from-dump", "--dump-bin")),
]


def validate(state: OptionState) -> ValidatedOptions:
    """Check the mutual-exclusion rules and freeze the state.

    Raises:
        MutualExclusionError: first rule violated; state becomes REJECTED.
        OptionStateError: state was already validated.
    """
    if state.phase is not ParsePhase.COLLECTING:
        raise OptionStateError(f"option state already {state.phase.value}")
    state.phase = ParsePhase.VALIDATING

    for conflicts, names in EXCLUSION_RULES:
        if conflicts(state):
            state.phase = ParsePhase.REJECTED
            log.info("rejected: %s", ", ".join(names))
            raise MutualExclusionError(names)

    state.phase = ParsePhase.READY
    return state.freeze()
