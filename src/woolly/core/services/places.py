from __future__ import annotations

"""
Place Discovery and Skeletons.

Enumerates the places and system bundles known to a repository and creates
the directory skeleton of a new place override.
"""

import logging
import os
from typing import Dict, List, Optional, Tuple

from woolly.domain.constants import (
    DEFAULT_PLACES_DIR,
    MANIFEST_SUFFIX,
    OVERRIDES_DIR,
    PLACE_SKELETON,
    SRC_DIR,
    SYSTEMS_DIR,
)
from woolly.domain.layout import validate_place_name
from woolly.infra.fs import ensure_dir, list_entries, list_subdirectories

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DISCOVERY
# -----------------------------------------------------------------------------

def list_places(repo_root: str, places_dir: str = DEFAULT_PLACES_DIR) -> List[str]:
    """
    Collect every place that has overrides or a generated manifest.

    Returns:
        List[str]: Sorted, de-duplicated place names.
    """
    root = os.path.abspath(repo_root)
    names = set(list_subdirectories(os.path.join(root, OVERRIDES_DIR)))

    for entry in list_entries(os.path.join(root, places_dir)):
        if entry.is_file() and entry.name.endswith(MANIFEST_SUFFIX):
            names.add(entry.name[: -len(MANIFEST_SUFFIX)])

    return sorted(names)


def list_systems(repo_root: str, place: Optional[str] = None) -> Dict[str, List[str]]:
    """
    Collect system bundle names per systems root.

    Args:
        repo_root: Repository root.
        place: When given, also report the place's own '_systems' bundles.

    Returns:
        Dict[str, List[str]]: Mapping of root label ('src' or the place) to bundle names.
    """
    root = os.path.abspath(repo_root)
    out: Dict[str, List[str]] = {SRC_DIR: list_subdirectories(os.path.join(root, SRC_DIR, SYSTEMS_DIR))}
    if place:
        out[place] = list_subdirectories(os.path.join(root, OVERRIDES_DIR, place, SYSTEMS_DIR))
    return out

# -----------------------------------------------------------------------------
# ROOT RESOLUTION
# -----------------------------------------------------------------------------

def overrides_root_for(repo_root: str, place: str) -> Optional[str]:
    """Return 'place_overrides/<place>' if it exists as a directory."""
    candidate = os.path.join(os.path.abspath(repo_root), OVERRIDES_DIR, place)
    return candidate if os.path.isdir(candidate) else None


def source_root_for(repo_root: str, place: Optional[str], prefer_src: bool = False) -> str:
    """
    Pick the tree new files are written to.

    Args:
        repo_root: Repository root.
        place: Place whose overrides should receive new files.
        prefer_src: Ignore overrides and always use 'src/'.

    Returns:
        str: 'place_overrides/<place>' when it exists and is wanted, else 'src/'.
    """
    src = os.path.join(os.path.abspath(repo_root), SRC_DIR)
    if prefer_src or not place:
        return src
    override = overrides_root_for(repo_root, place)
    if override:
        logger.debug(f"Override place found: {override}")
    return override or src

# -----------------------------------------------------------------------------
# SKELETONS
# -----------------------------------------------------------------------------

def create_skeleton(base: str, layout: Dict[str, Tuple[str, ...]]) -> List[str]:
    """
    Create `zone/section` directories under `base`.

    Returns:
        List[str]: Directories that did not exist before.
    """
    created: List[str] = []
    for zone, sections in layout.items():
        for section in sections:
            path = os.path.join(base, zone, *section.split("/"))
            if not os.path.isdir(path):
                ensure_dir(path)
                created.append(path)
    return created


def ensure_place_skeleton(repo_root: str, place: str) -> str:
    """
    Make sure 'place_overrides/<place>' has the expected folders.

    Raises:
        UsageError: If `place` is not a valid place name.

    Returns:
        str: The place override root.
    """
    validate_place_name(place)
    base = os.path.join(os.path.abspath(repo_root), OVERRIDES_DIR, place)
    created = create_skeleton(base, PLACE_SKELETON)
    logger.info(f"Place scaffolding: {base} ({len(created)} new folders)")
    return base
