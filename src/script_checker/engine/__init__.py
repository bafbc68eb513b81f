"""
Engine layer: ygopro-core interface.

This module provides:
- CFFI bindings to ygopro-core (bindings.py)
- Callback trampolines into the checker (callbacks.py)
- The OcgCore capability wrapper (core.py)
- Library path resolution (paths.py)
"""

from .bindings import (
    ffi, load_library,
    OCG_VERSION_MAJOR, OCG_VERSION_MINOR, OCG_DUEL_CREATION_SUCCESS,
    REQUIRED_FUNCTIONS, creation_status_name,
)
from .core import OcgCore, load_core, resolve_functions
from .paths import get_library_path, get_library_name

__all__ = [
    'ffi', 'load_library',
    'OCG_VERSION_MAJOR', 'OCG_VERSION_MINOR', 'OCG_DUEL_CREATION_SUCCESS',
    'REQUIRED_FUNCTIONS', 'creation_status_name',
    'OcgCore', 'load_core', 'resolve_functions',
    'get_library_path', 'get_library_name',
]
