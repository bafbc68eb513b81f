"""
Fatal checker errors.

Anything raised from here aborts the run with exit status 1. Problems found
while the engine is parsing scripts are not exceptions: they flip the
ValidationStatus held by the CheckerContext instead.
"""


class CheckerError(Exception):
    """Base class for fatal startup/driver errors."""


class ScriptFolderError(CheckerError):
    """A folder passed for scanning does not exist or is not a directory."""


class MissingBaseScriptsError(CheckerError):
    """utility.lua or constant.lua was not found while scanning."""


class CoreLoadError(CheckerError):
    """The engine shared library could not be opened."""


class MissingEntryPointError(CheckerError):
    """A required OCG_* function is not exported by the library."""


class UnsupportedCoreError(CheckerError):
    """The engine reports an incompatible API version."""


class DuelCreationError(CheckerError):
    """OCG_CreateDuel did not report success."""


class ScriptLoadError(CheckerError):
    """constant.lua or utility.lua was rejected by the engine."""


class EngineContractError(CheckerError):
    """The engine passed a value outside its own documented contract."""


__all__ = [
    'CheckerError', 'ScriptFolderError', 'MissingBaseScriptsError',
    'CoreLoadError', 'MissingEntryPointError', 'UnsupportedCoreError',
    'DuelCreationError', 'ScriptLoadError', 'EngineContractError',
]
