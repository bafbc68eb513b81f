"""
Engine library location.

The checker looks for the core next to where it is run, using the platform's
library naming, unless a path is given explicitly (--core or OCGCORE_PATH).
"""

import platform
from pathlib import Path
from typing import Optional, Union


def get_lib_extension() -> str:
    """Get platform-appropriate shared library extension.

    Returns:
        Library extension including the dot (.dylib, .dll, or .so).
    """
    system = platform.system()
    if system == "Darwin":
        return ".dylib"
    elif system == "Windows":
        return ".dll"
    return ".so"  # Linux and others


def get_library_name() -> str:
    """ocgcore.dll on Windows, libocgcore.so / libocgcore.dylib elsewhere."""
    ext = get_lib_extension()
    if ext == ".dll":
        return f"ocgcore{ext}"
    return f"libocgcore{ext}"


def get_library_path(override: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the engine library path, defaulting to the current directory."""
    if override:
        return Path(override)
    return Path.cwd() / get_library_name()
