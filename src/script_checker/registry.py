"""
Script registry: maps card passcodes and utility script names to files.

Card scripts are named ``c<passcode>.lua``; every other ``.lua`` file is a
utility script looked up by its exact filename. A handful of passcodes
collide with the card naming convention but are support scripts, so they
are routed to the utility table instead.

The registry is populated once by scan() and is read-only afterwards.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from .errors import MissingBaseScriptsError, ScriptFolderError
from .types import ScriptClassification, ScriptKind

logger = logging.getLogger(__name__)

SCRIPT_EXTENSION = ".lua"
CONSTANT_SCRIPT = "constant.lua"
UTILITY_SCRIPT = "utility.lua"

MAX_CODE = 0xFFFFFFFF
_DIGITS = re.compile(r"[0-9]+")

# Deepest level visited below a scan root (0 = entries of the root itself)
MAX_SCAN_DEPTH = 1


# =============================================================================
# Filename classification
# =============================================================================

def is_card_candidate(name: Union[str, PurePath]) -> bool:
    """True if the filename looks like ``c*.lua``."""
    path = PurePath(name)
    return path.stem[:1] == "c" and path.suffix == SCRIPT_EXTENSION


def parse_card_code(name: Union[str, PurePath]) -> Optional[int]:
    """Extract the passcode from a card script filename.

    Only plain unsigned decimal digits are accepted after the leading ``c``;
    signs, whitespace, trailing characters and values that do not fit in
    32 bits all yield None.
    """
    if not is_card_candidate(name):
        return None
    digits = PurePath(name).stem[1:]
    if not _DIGITS.fullmatch(digits):
        return None
    code = int(digits)
    if code > MAX_CODE:
        return None
    return code


def is_excluded_code(code: int) -> bool:
    """Passcodes that must never be instantiated as cards."""
    return 419 <= code <= 422 or code == 151000000


def classify(name: Union[str, PurePath]) -> ScriptClassification:
    """Classify a filename as a card script, a utility script, or neither.

    Works on bare names as well as real paths; the file does not need to exist.
    """
    path = PurePath(name)
    code = parse_card_code(path)
    if code is not None and not is_excluded_code(code):
        return ScriptClassification(ScriptKind.CARD, code=code)
    if path.suffix == SCRIPT_EXTENSION:
        return ScriptClassification(ScriptKind.UTILITY, key=path.name)
    return ScriptClassification(ScriptKind.IGNORED)


# =============================================================================
# Registry
# =============================================================================

@dataclass
class ScriptRegistry:
    """Lookup tables built from the scanned script folders.

    Attributes:
        by_code: Card passcode -> card script path
        by_name: Utility script filename -> path
    """
    by_code: Dict[int, Path] = field(default_factory=dict)
    by_name: Dict[str, Path] = field(default_factory=dict)

    def add(self, path: Path) -> ScriptClassification:
        """Register a file. The first path registered for a key is kept."""
        classification = classify(path)
        if classification.kind is ScriptKind.CARD:
            self.by_code.setdefault(classification.code, path)
        elif classification.kind is ScriptKind.UTILITY:
            self.by_name.setdefault(classification.key, path)
        return classification

    def merge(self, other: "ScriptRegistry") -> None:
        for code, path in other.by_code.items():
            self.by_code.setdefault(code, path)
        for name, path in other.by_name.items():
            self.by_name.setdefault(name, path)

    def resolve(self, name: str) -> Optional[Path]:
        """Find the file for a script name requested by the engine."""
        classification = classify(name)
        if classification.kind is ScriptKind.CARD:
            return self.by_code.get(classification.code)
        return self.by_name.get(name)

    def cards(self) -> Iterator[Tuple[int, Path]]:
        """Card scripts in ascending passcode order."""
        for code in sorted(self.by_code):
            yield code, self.by_code[code]

    def base_scripts(self) -> Tuple[Path, Path]:
        """Return (constant.lua, utility.lua).

        Raises:
            MissingBaseScriptsError: If either one was not found.
        """
        constant = self.by_name.get(CONSTANT_SCRIPT)
        utility = self.by_name.get(UTILITY_SCRIPT)
        if constant is None or utility is None:
            raise MissingBaseScriptsError("Utility or constant scripts were not found")
        return constant, utility

    def __len__(self) -> int:
        return len(self.by_code) + len(self.by_name)


# =============================================================================
# Folder scanning
# =============================================================================

def _iter_script_files(root: Path, depth: int = 0) -> Iterator[Path]:
    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            if entry.name.startswith("."):
                continue
            logger.info(f"Found script folder {entry}")
            if depth < MAX_SCAN_DEPTH:
                yield from _iter_script_files(entry, depth + 1)
        elif entry.is_file():
            yield entry


def scan_folder(root: Union[str, Path], registry: Optional[ScriptRegistry] = None) -> ScriptRegistry:
    """Scan one folder (and one level of subfolders) into a registry.

    Raises:
        ScriptFolderError: If root is missing or not a directory.
    """
    root = Path(root)
    if registry is None:
        registry = ScriptRegistry()
    if not root.is_dir():
        raise ScriptFolderError(f"Script folder not found: {root}")
    for path in _iter_script_files(root):
        registry.add(path)
    return registry


def scan(roots: Iterable[Union[str, Path]] = ()) -> ScriptRegistry:
    """Build a registry from every root; the current directory if none are given."""
    roots = list(roots) or [Path(".")]
    registry = ScriptRegistry()
    for root in roots:
        scan_folder(root, registry)
    logger.debug(
        f"Registered {len(registry.by_code)} card scripts, "
        f"{len(registry.by_name)} utility scripts"
    )
    return registry


__all__ = [
    'SCRIPT_EXTENSION', 'CONSTANT_SCRIPT', 'UTILITY_SCRIPT', 'MAX_SCAN_DEPTH',
    'is_card_candidate', 'parse_card_code', 'is_excluded_code', 'classify',
    'ScriptRegistry', 'scan_folder', 'scan',
]
