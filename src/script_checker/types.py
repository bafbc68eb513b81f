"""
Shared type definitions for the script checker.

This module contains the small value types used across the registry,
the callback bridge and the session driver.

Types:
    ScriptKind: What a script filename denotes
    ScriptClassification: Result of classifying one filename
    ValidationStatus: Aggregate outcome of a run
    LogType: Severity of a diagnostic reported by the engine
    NewCardInfo: Placement record for one instantiated card
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

# Location / position constants (from common.h)
LOCATION_DECK = 0x01
POS_FACEDOWN = 0xa


class ScriptKind(Enum):
    CARD = "card"
    UTILITY = "utility"
    IGNORED = "ignored"


@dataclass(frozen=True)
class ScriptClassification:
    """Result of classifying a script filename.

    Attributes:
        kind: CARD, UTILITY or IGNORED
        code: Card passcode (CARD only)
        key: Full filename used as the lookup key (UTILITY only)
    """
    kind: ScriptKind
    code: Optional[int] = None
    key: Optional[str] = None


class ValidationStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def exit_code(self) -> int:
        return 0 if self is ValidationStatus.SUCCESS else 1


class LogType(IntEnum):
    """OCG_LogTypes as reported through the engine's log handler."""
    ERROR = 0
    FROM_SCRIPT = 1
    FOR_DEBUG = 2
    UNDEFINED = 3

    @property
    def label(self) -> str:
        return _LOG_TYPE_LABELS[self]


_LOG_TYPE_LABELS = {
    LogType.ERROR: "Error",
    LogType.FROM_SCRIPT: "From script",
    LogType.FOR_DEBUG: "For debug",
    LogType.UNDEFINED: "Undefined",
}


@dataclass(frozen=True)
class NewCardInfo:
    """Mirror of OCG_NewCardInfo."""
    code: int
    team: int = 0
    duelist: int = 0
    con: int = 0
    loc: int = LOCATION_DECK
    seq: int = 1
    pos: int = POS_FACEDOWN

    @classmethod
    def in_deck(cls, code: int) -> "NewCardInfo":
        """Face-down card in player 0's deck, the only placement the checker uses."""
        return cls(code=code)


__all__ = [
    'LOCATION_DECK', 'POS_FACEDOWN',
    'ScriptKind', 'ScriptClassification', 'ValidationStatus', 'LogType', 'NewCardInfo',
]
