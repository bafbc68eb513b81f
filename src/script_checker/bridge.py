"""
Engine callback handlers.

The engine pulls card data and script source through synchronous callbacks
whose signatures are fixed by the C API, so the only way to report a problem
is to record it on the shared CheckerContext. The handlers here are plain
functions over that context; engine/callbacks.py adapts them to cffi.

read_script() can be re-entered: submitting one script to the engine may make
it request further scripts before the outer call returns.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from .errors import EngineContractError
from .registry import ScriptRegistry, classify
from .types import LogType, ScriptKind, ValidationStatus

logger = logging.getLogger(__name__)

# Passcode the engine may request even though no script exists for it
PLACEHOLDER_CODE = 0


class CheckerContext:
    """State shared between the session driver and the engine callbacks.

    Attributes:
        registry: Scanned scripts
        core: Engine capability (OcgCore or a test fake)
        status: Aggregate result, only ever moves from SUCCESS to FAILURE
        loading_card: Passcode currently being instantiated, for diagnostics
        pending_error: First exception raised inside a callback, re-raised
            by the driver once the engine returns control
    """

    def __init__(self, registry: ScriptRegistry, core: Any):
        self.registry = registry
        self.core = core
        self.status = ValidationStatus.SUCCESS
        self.loading_card = 0
        self.pending_error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.status is ValidationStatus.FAILURE

    def fail(self) -> None:
        self.status = ValidationStatus.FAILURE

    def guard(self, handler: Callable, *args, default=None):
        """Run a handler on behalf of the engine, deferring any exception.

        Exceptions cannot unwind through the engine's C frames, so the first
        one is kept in pending_error and the default value is returned.
        """
        try:
            return handler(self, *args)
        except Exception as e:
            if self.pending_error is None:
                self.pending_error = e
            self.fail()
            return default

    def raise_pending(self) -> None:
        if self.pending_error is not None:
            error, self.pending_error = self.pending_error, None
            raise error


# =============================================================================
# Handlers
# =============================================================================

def read_card(ctx: CheckerContext, code: int, data) -> None:
    """Fill OCG_CardData for a passcode. Only the code is needed to parse scripts."""
    data.code = code


def submit_script(ctx: CheckerContext, duel, path: Path) -> bool:
    """Read a script file whole and hand it to the engine.

    Returns:
        True if the engine accepted the script. Unreadable and empty files
        fail the run; empty files are never submitted.
    """
    try:
        source = path.read_bytes()
    except OSError:
        logger.error(f"Failed to open script: {path}")
        ctx.fail()
        return False
    if not source:
        logger.error(f"Empty script: {path}")
        ctx.fail()
        return False
    return bool(ctx.core.load_script(duel, source, path.name))


def read_script(ctx: CheckerContext, duel, name: str) -> bool:
    """Resolve a script requested by the engine and submit it."""
    classification = classify(name)
    path = ctx.registry.resolve(name)
    if path is None:
        if classification.kind is ScriptKind.CARD and classification.code == PLACEHOLDER_CODE:
            return False
        logger.debug(f"Script not found: {name}")
        ctx.fail()
        return False
    return submit_script(ctx, duel, path)


def handle_log(ctx: CheckerContext, message: str, log_type: int) -> None:
    """Report an engine diagnostic. Every message counts as a failure."""
    try:
        level = LogType(log_type)
    except ValueError:
        raise EngineContractError(f"Unknown log type {log_type} for message: {message}") from None
    ctx.fail()
    logger.error(f"{level.label}: {message}, while parsing c{ctx.loading_card}.lua")


__all__ = [
    'PLACEHOLDER_CODE', 'CheckerContext',
    'read_card', 'submit_script', 'read_script', 'handle_log',
]
