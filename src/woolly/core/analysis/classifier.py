from __future__ import annotations

"""
Path Classifier.

Pure predicates over filesystem paths and file names. None of these raise:
a nonexistent or unreadable path is simply "not a match".
"""

import os
import re

from woolly.domain.constants import INIT_FILE_NAMES

_MODULE_RX = re.compile(r"\.luau?$", re.IGNORECASE)
_ASSET_RX = re.compile(r"\.rbxmx?$", re.IGNORECASE)
_STRIP_RX = re.compile(r"\.(luau|lua|rbxmx|rbxm)$", re.IGNORECASE)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_directory(path: str) -> bool:
    return os.path.isdir(path)


def is_file(path: str) -> bool:
    return os.path.isfile(path)


def is_module_file(name: str) -> bool:
    """True if `name` carries a source-module extension (.luau / .lua)."""
    return bool(_MODULE_RX.search(name))


def is_asset_file(name: str) -> bool:
    """True if `name` carries a packaged-model extension (.rbxm / .rbxmx)."""
    return bool(_ASSET_RX.search(name))


def is_folder_backed_module(directory: str) -> bool:
    """
    Check whether a directory is mounted as a single module.

    A directory qualifies when it contains an 'init' entry file with a
    recognized module extension. The rest of its content is not inspected.

    Args:
        directory: Candidate directory.

    Returns:
        bool: True for folder-backed modules.
    """
    if not os.path.isdir(directory):
        return False
    return any(os.path.isfile(os.path.join(directory, n)) for n in INIT_FILE_NAMES)


def strip_extension(name: str) -> str:
    """Remove one trailing module or asset extension, case-insensitively."""
    return _STRIP_RX.sub("", name, count=1)
