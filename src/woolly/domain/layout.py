from __future__ import annotations

"""
Project Layout Resolution.

Maps a repository root and an optional place onto the concrete directories
consumed by the manifest assembler: the base source tree, the systems roots,
the place overlay and the destination manifest file.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional

from woolly.domain.constants import (
    DEFAULT_PLACES_DIR,
    DEFAULT_PROJECT_NAME,
    MANIFEST_SUFFIX,
    OVERRIDES_DIR,
    PLACE_NAME_PATTERN,
    SINGLE_MANIFEST_NAME,
    SRC_DIR,
    SYSTEMS_DIR,
    VENDOR_PACKAGES_DIR,
)
from woolly.domain.errors import UsageError

logger = logging.getLogger(__name__)

_PLACE_RX = re.compile(PLACE_NAME_PATTERN)


@dataclass(frozen=True)
class ProjectLayout:
    """
    Immutable description of every input and output location of one run.

    Attributes:
        repo_root: Absolute repository root.
        source_root: Base source tree ('src/').
        output_path: Absolute manifest destination.
        project_name: Top-level 'name' of the manifest.
        place: Place identifier, empty in single-manifest mode.
        overlay_root: Place override tree, or None when the place has none.
        systems_roots: Directories whose entries are system bundles.
        vendor_root: Directory holding vendored packages.
    """
    repo_root: str
    source_root: str
    output_path: str
    project_name: str
    place: str = ""
    overlay_root: Optional[str] = None
    systems_roots: List[str] = field(default_factory=list)
    vendor_root: str = ""

    @property
    def manifest_dir(self) -> str:
        return os.path.dirname(self.output_path)


def validate_place_name(place: Optional[str]) -> str:
    """
    Reject place identifiers that cannot be used as file names.

    Raises:
        UsageError: If the name is empty or has characters outside [A-Za-z0-9_-].
    """
    if not place or not _PLACE_RX.fullmatch(place):
        raise UsageError(
            f"Invalid place name '{place or ''}': use letters, digits, dashes or underscores."
        )
    return place


def resolve_place_layout(
        repo_root: str,
        place: str,
        project_name: str = DEFAULT_PROJECT_NAME,
        places_dir: str = DEFAULT_PLACES_DIR,
) -> ProjectLayout:
    """
    Build the layout for a per-place manifest.

    The overlay root is only used when 'place_overrides/<place>' is a directory;
    otherwise the place falls back to the base source tree alone.

    Args:
        repo_root: Repository root directory.
        place: Validated place identifier.
        project_name: Base project name; the manifest is named '<name>-<place>'.
        places_dir: Directory (relative to the repo root) holding place manifests.

    Returns:
        ProjectLayout: Resolved locations.
    """
    validate_place_name(place)
    root = os.path.abspath(repo_root)
    source_root = os.path.join(root, SRC_DIR)

    overlay_candidate = os.path.join(root, OVERRIDES_DIR, place)
    overlay_root: Optional[str] = None
    if os.path.isdir(overlay_candidate):
        overlay_root = overlay_candidate
    else:
        logger.info(f"No overrides for place '{place}'. Using the base source tree only.")

    systems_roots = [os.path.join(source_root, SYSTEMS_DIR)]
    if overlay_root:
        place_systems = os.path.join(overlay_root, SYSTEMS_DIR)
        if os.path.isdir(place_systems):
            systems_roots.append(place_systems)

    output_path = os.path.join(root, places_dir, f"{place}{MANIFEST_SUFFIX}")

    return ProjectLayout(
        repo_root=root,
        source_root=source_root,
        output_path=output_path,
        project_name=f"{project_name}-{place}",
        place=place,
        overlay_root=overlay_root,
        systems_roots=systems_roots,
        vendor_root=os.path.join(root, VENDOR_PACKAGES_DIR),
    )


def resolve_single_layout(repo_root: str, project_name: str = DEFAULT_PROJECT_NAME) -> ProjectLayout:
    """Build the layout for the single global 'default.project.json' manifest."""
    root = os.path.abspath(repo_root)
    source_root = os.path.join(root, SRC_DIR)
    return ProjectLayout(
        repo_root=root,
        source_root=source_root,
        output_path=os.path.join(root, SINGLE_MANIFEST_NAME),
        project_name=project_name,
        systems_roots=[os.path.join(source_root, SYSTEMS_DIR)],
        vendor_root=os.path.join(root, VENDOR_PACKAGES_DIR),
    )


def place_manifest_path(repo_root: str, place: str, places_dir: str = DEFAULT_PLACES_DIR) -> str:
    """Absolute path of the manifest generated for `place`."""
    return os.path.join(os.path.abspath(repo_root), places_dir, f"{place}{MANIFEST_SUFFIX}")
