"""
Engine capability wrapper.

OcgCore exposes one method per OCG entry point the checker needs, so the
session driver and the callback bridge can be exercised against an
in-process fake with the same methods instead of a real libocgcore.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..errors import CoreLoadError, MissingEntryPointError
from ..types import NewCardInfo
from .bindings import DUEL_FLAGS_MR5, REQUIRED_FUNCTIONS, ffi, load_library
from .callbacks import py_card_reader, py_log_handler, py_script_reader
from .paths import get_library_path

logger = logging.getLogger(__name__)

# Fixed seed; the checker never advances the duel
DUEL_SEED = (12345, 67890, 11111, 22222)


class OcgCore:
    """Loaded engine library with its entry points resolved."""

    def __init__(self, lib, path: Optional[Path] = None):
        self.lib = lib
        self.path = path
        self._handles = {}

    def get_version(self) -> Tuple[int, int]:
        major = ffi.new("int*")
        minor = ffi.new("int*")
        self.lib.OCG_GetVersion(major, minor)
        return major[0], minor[0]

    def create_duel(self, context) -> Tuple[int, object]:
        """Create a duel whose callbacks report into ``context``.

        Returns:
            (creation status, duel handle). The handle may be NULL on failure.
        """
        handle = ffi.new_handle(context)

        options = ffi.new("OCG_DuelOptions*")
        for i, value in enumerate(DUEL_SEED):
            options.seed[i] = value
        options.flags = DUEL_FLAGS_MR5
        for team in (options.team1, options.team2):
            team.startingLP = 8000
            team.startingDrawCount = 0
            team.drawCountPerTurn = 0

        options.cardReader = py_card_reader
        options.payload1 = handle
        options.scriptReader = py_script_reader
        options.payload2 = handle
        options.logHandler = py_log_handler
        options.payload3 = handle

        duel_ptr = ffi.new("OCG_Duel*")
        status = self.lib.OCG_CreateDuel(duel_ptr, options)
        duel = duel_ptr[0]
        if duel != ffi.NULL:
            # The engine keeps the payload pointer; the handle must outlive the duel
            self._handles[int(ffi.cast("uintptr_t", duel))] = handle
        return status, duel

    def destroy_duel(self, duel) -> None:
        self.lib.OCG_DestroyDuel(duel)
        self._handles.pop(int(ffi.cast("uintptr_t", duel)), None)

    def load_script(self, duel, source: bytes, name: str) -> bool:
        return bool(self.lib.OCG_LoadScript(duel, source, len(source), name.encode("utf-8")))

    def new_card(self, duel, info: NewCardInfo) -> None:
        card_info = ffi.new("OCG_NewCardInfo*")
        card_info.team = info.team
        card_info.duelist = info.duelist
        card_info.code = info.code
        card_info.con = info.con
        card_info.loc = info.loc
        card_info.seq = info.seq
        card_info.pos = info.pos
        self.lib.OCG_DuelNewCard(duel, card_info)


def resolve_functions(lib) -> None:
    """Check that every required entry point is exported.

    Raises:
        MissingEntryPointError: Listing the symbols that could not be found.
    """
    missing = []
    for name in REQUIRED_FUNCTIONS:
        try:
            getattr(lib, name)
        except AttributeError:
            missing.append(name)
    if missing:
        raise MissingEntryPointError(
            f"Failed to load the needed functions from the core: {', '.join(missing)}"
        )


def load_core(lib_path: Optional[Union[str, Path]] = None) -> OcgCore:
    """Open the engine library and resolve its entry points.

    Raises:
        CoreLoadError: If the library cannot be opened.
        MissingEntryPointError: If an entry point is missing.
    """
    path = get_library_path(lib_path)
    try:
        lib = load_library(path)
    except OSError as e:
        raise CoreLoadError(f"Failed to load the core from {path}: {e}") from e
    resolve_functions(lib)
    logger.debug(f"Loaded core from {path}")
    return OcgCore(lib, path)
