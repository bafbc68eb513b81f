"""
Session driver: runs every discovered card through one engine duel.

The run is a straight line. load_core() opens the library and resolves its
entry points; the driver takes over from there:

    FUNCTIONS_RESOLVED -> VERSION_CHECKED -> DUEL_CREATED
        -> BASE_SCRIPTS_LOADED -> CARDS_INSTANTIATED -> DESTROYED

Any fatal step raises a CheckerError. Problems reported by the engine while
it parses scripts do not stop the run; they mark the context as failed and
the final ValidationStatus carries them to the exit code.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from .bridge import CheckerContext, submit_script
from .engine.bindings import (
    OCG_DUEL_CREATION_SUCCESS, OCG_VERSION_MAJOR, OCG_VERSION_MINOR, creation_status_name,
)
from .engine.core import load_core
from .errors import DuelCreationError, ScriptLoadError, UnsupportedCoreError
from .registry import ScriptRegistry, scan
from .types import NewCardInfo, ValidationStatus

logger = logging.getLogger(__name__)


class CheckerStage(Enum):
    FUNCTIONS_RESOLVED = "functions resolved"
    VERSION_CHECKED = "version checked"
    DUEL_CREATED = "duel created"
    BASE_SCRIPTS_LOADED = "base scripts loaded"
    CARDS_INSTANTIATED = "cards instantiated"
    DESTROYED = "destroyed"


def check_version(core) -> None:
    """Require the same major API version and at least the expected minor.

    Raises:
        UnsupportedCoreError: On any mismatch.
    """
    major, minor = core.get_version()
    if major != OCG_VERSION_MAJOR or minor < OCG_VERSION_MINOR:
        raise UnsupportedCoreError(
            f"Unsupported core version {major}.{minor} "
            f"(expected {OCG_VERSION_MAJOR}.{OCG_VERSION_MINOR} or newer minor)"
        )


class ScriptChecker:
    """Drives one engine duel over a scanned registry.

    Args:
        registry: Scanned scripts; must contain constant.lua and utility.lua
        core: Loaded engine with its entry points resolved
    """

    def __init__(self, registry: ScriptRegistry, core):
        self.registry = registry
        self.core = core
        self.context = CheckerContext(registry, core)
        # load_core() resolves every entry point before returning
        self.stage = CheckerStage.FUNCTIONS_RESOLVED

    def _advance(self, stage: CheckerStage) -> None:
        logger.debug(f"{self.stage.value} -> {stage.value}")
        self.stage = stage

    def run(self) -> ValidationStatus:
        constant, utility = self.registry.base_scripts()

        check_version(self.core)
        self._advance(CheckerStage.VERSION_CHECKED)

        status, duel = self.core.create_duel(self.context)
        try:
            self.context.raise_pending()
            if status != OCG_DUEL_CREATION_SUCCESS:
                raise DuelCreationError(
                    f"Failed to create duel instance: {creation_status_name(status)} ({status})"
                )
            self._advance(CheckerStage.DUEL_CREATED)

            self._load_base_script(duel, constant)
            self._load_base_script(duel, utility)
            self._advance(CheckerStage.BASE_SCRIPTS_LOADED)

            self._instantiate_cards(duel)
            self._advance(CheckerStage.CARDS_INSTANTIATED)
        finally:
            if duel:
                self.core.destroy_duel(duel)
                self._advance(CheckerStage.DESTROYED)

        return self.context.status

    def _load_base_script(self, duel, path: Path) -> None:
        accepted = submit_script(self.context, duel, path)
        self.context.raise_pending()
        if not accepted:
            raise ScriptLoadError(f"Failed to load {path.name}")

    def _instantiate_cards(self, duel) -> None:
        for code, path in self.registry.cards():
            self.context.loading_card = code
            self.core.new_card(duel, NewCardInfo.in_deck(code))
            self.context.raise_pending()
        logger.debug(f"Instantiated {len(self.registry.by_code)} cards")


CoreFactory = Callable[[], object]


def check_scripts(
    folders: Iterable[Union[str, Path]] = (),
    core_factory: Optional[CoreFactory] = None,
) -> ValidationStatus:
    """Scan the folders and validate every script against the engine.

    Args:
        folders: Script folders; the current directory when empty
        core_factory: Builds the engine capability; defaults to load_core()

    Raises:
        CheckerError: On any fatal step.
    """
    registry = scan(folders)
    # Fail before touching the engine if the base scripts are missing
    registry.base_scripts()

    core = (core_factory or load_core)()
    return ScriptChecker(registry, core).run()


__all__ = ['CheckerStage', 'check_version', 'ScriptChecker', 'check_scripts']
