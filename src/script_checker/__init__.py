"""
YGO Script Checker: validate card scripts against ygopro-core.

Scans folders of Lua card scripts, then creates a single duel in the engine
and instantiates every card so the engine parses each script, reporting
missing dependencies and script errors through its callbacks.

Submodules:
    registry - Filename classification and folder scanning
    bridge   - Engine callback handlers and shared checker state
    checker  - Session driver
    engine   - CFFI bindings and the OcgCore wrapper
    cli      - Command-line entry point

Usage:
    from script_checker import check_scripts
    status = check_scripts(["script/"])
    raise SystemExit(status.exit_code)
"""

from .bridge import CheckerContext
from .checker import CheckerStage, ScriptChecker, check_scripts, check_version
from .errors import CheckerError
from .registry import ScriptRegistry, classify, is_excluded_code, parse_card_code, scan
from .types import (
    LogType,
    NewCardInfo,
    ScriptClassification,
    ScriptKind,
    ValidationStatus,
)

__version__ = "0.1.0"

__all__ = [
    "CheckerContext",
    "CheckerStage",
    "ScriptChecker",
    "check_scripts",
    "check_version",
    "CheckerError",
    "ScriptRegistry",
    "classify",
    "is_excluded_code",
    "parse_card_code",
    "scan",
    "LogType",
    "NewCardInfo",
    "ScriptClassification",
    "ScriptKind",
    "ValidationStatus",
]
