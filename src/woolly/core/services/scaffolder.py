from __future__ import annotations

"""
Source Scaffolder.

Implements `woolly create`: resolves where a new module belongs (explicit
directory, system bundle, place override or base source tree) and writes
template stubs without ever clobbering an existing file.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from woolly.core.analysis.naming import normalize
from woolly.core.services import templates
from woolly.core.services.places import create_skeleton, ensure_place_skeleton, source_root_for
from woolly.domain.constants import (
    GAME_DATA_DIR,
    SYSTEM_SKELETON,
    SYSTEMS_DIR,
)
from woolly.domain.errors import UsageError
from woolly.infra.fs import ensure_dir, write_if_missing

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# KIND TABLE
# -----------------------------------------------------------------------------

KINDS: Tuple[str, ...] = (
    "service",
    "controller",
    "component",
    "system",
    "data_type",
    "class",
    "package",
    "config",
    "util",
    "place",
)

TARGETS: Tuple[str, ...] = ("shared", "server")

# (template key, zone, section) for kinds that emit a single module
_SINGLE_FILE_KINDS: Dict[str, Tuple[str, str]] = {
    "service": ("server", "services"),
    "controller": ("client", "controllers"),
    "component": ("client", "components"),
    "config": ("shared", "config"),
    "util": ("shared", "utils"),
}

# kind -> section per target zone
_TARGETED_SECTIONS: Dict[str, str] = {
    "class": "classes",
    "package": "packages",
}

_DATA_TYPES_DIR = "data_types"
_SYSTEM_MONETISATION_DIR = "monetisation"
_SYSTEM_MONETISATION_FILES: Tuple[Tuple[str, str], ...] = (
    ("DevProducts", "devProducts"),
    ("Gamepasses", "gamepasses"),
)


@dataclass
class ScaffoldResult:
    """
    Outcome of one `create` invocation.

    Attributes:
        kind: Requested kind.
        name: Name used on disk (normalized for module kinds).
        created: Files written by this call.
        skipped: Files left untouched because they already existed.
        directories: Directories the call created or made sure of.
    """
    kind: str
    name: str
    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)

    @property
    def first_created(self) -> Optional[str]:
        return self.created[0] if self.created else None

    def add_file(self, path: str, content: str) -> None:
        ensure_dir(os.path.dirname(path))
        if write_if_missing(path, content):
            self.created.append(path)
        else:
            self.skipped.append(path)

# -----------------------------------------------------------------------------
# DESTINATION RESOLUTION
# -----------------------------------------------------------------------------

def resolve_root(repo_root: str, place: Optional[str], prefer_src: bool = False) -> str:
    """Root receiving new files: the place override when present, else 'src/'."""
    return source_root_for(repo_root, place, prefer_src=prefer_src)


def resolve_destination(
        repo_root: str,
        zone: str,
        section: str,
        *,
        at: Optional[str] = None,
        place: Optional[str] = None,
        system: Optional[str] = None,
) -> str:
    """
    Directory a module for `zone/section` is written to.

    Precedence: `at` (relative to the repo root) wins; then the system bundle
    '<root>/_systems/<system>/<zone>/<section>'; then '<root>/<zone>/<section>'.
    """
    if at:
        return os.path.abspath(os.path.join(repo_root, at))
    root = resolve_root(repo_root, place)
    if system:
        return os.path.join(root, SYSTEMS_DIR, system, zone, section)
    return os.path.join(root, zone, section)


def _data_type_destination(repo_root: str, at: Optional[str], place: Optional[str], system: Optional[str]) -> str:
    if at:
        return os.path.abspath(os.path.join(repo_root, at))
    root = resolve_root(repo_root, place, prefer_src=True)
    if system:
        return os.path.join(root, SYSTEMS_DIR, system, _DATA_TYPES_DIR)
    return os.path.join(root, GAME_DATA_DIR, "source", _DATA_TYPES_DIR)

# -----------------------------------------------------------------------------
# CREATORS
# -----------------------------------------------------------------------------

def _create_module(result: ScaffoldResult, directory: str, template_key: str) -> None:
    path = os.path.join(directory, f"{result.name}.luau")
    result.add_file(path, templates.render(template_key, result.name))


def _create_system(result: ScaffoldResult, parent_dir: str) -> None:
    base = os.path.join(parent_dir, result.name)
    result.directories.extend(create_skeleton(base, SYSTEM_SKELETON))

    data_types = os.path.join(base, _DATA_TYPES_DIR)
    if not os.path.isdir(data_types):
        ensure_dir(data_types)
        result.directories.append(data_types)

    monetisation = os.path.join(base, _SYSTEM_MONETISATION_DIR)
    for file_stem, field_name in _SYSTEM_MONETISATION_FILES:
        result.add_file(
            os.path.join(monetisation, f"{file_stem}.luau"),
            templates.render("monetisation", file_stem, Field=field_name),
        )


def _create_targeted(
        result: ScaffoldResult,
        repo_root: str,
        kind: str,
        target: Optional[str],
        both: bool,
        at: Optional[str],
        place: Optional[str],
        system: Optional[str],
) -> None:
    if not both and target not in TARGETS:
        raise UsageError(f"'create {kind}' needs --target shared|server or --both.")

    zones = TARGETS if both else (target,)
    section = _TARGETED_SECTIONS[kind]
    for zone in zones:
        directory = resolve_destination(repo_root, zone, section, at=at, place=place, system=system)
        template_key = f"class_{zone}" if kind == "class" else "package"
        _create_module(result, directory, template_key)


def create(
        repo_root: str,
        kind: str,
        name: str,
        *,
        at: Optional[str] = None,
        place: Optional[str] = None,
        system: Optional[str] = None,
        target: Optional[str] = None,
        both: bool = False,
) -> ScaffoldResult:
    """
    Scaffold one new unit of source.

    Args:
        repo_root: Repository root.
        kind: One of KINDS.
        name: Raw name; module kinds are normalized to PascalCase.
        at: Explicit destination directory (relative to the repo root).
        place: Place whose override tree should receive the files.
        system: System bundle receiving the files.
        target: 'shared' or 'server' for classes and packages.
        both: Create both the shared and the server variant.

    Raises:
        UsageError: Unknown kind, empty name or missing target.

    Returns:
        ScaffoldResult: Created and skipped files.
    """
    if kind not in KINDS:
        raise UsageError(f"Unknown kind '{kind}'. Expected one of: {', '.join(KINDS)}.")
    if not name or not name.strip():
        raise UsageError(f"'create {kind}' needs a name.")

    if kind == "place":
        result = ScaffoldResult(kind=kind, name=name)
        result.directories.append(ensure_place_skeleton(repo_root, name))
        return result

    if kind == "system":
        result = ScaffoldResult(kind=kind, name=name)
        parent = (
            os.path.abspath(os.path.join(repo_root, at))
            if at else os.path.join(resolve_root(repo_root, place), SYSTEMS_DIR)
        )
        _create_system(result, parent)
        logger.info(f"System '{name}' scaffolded under {parent}")
        return result

    result = ScaffoldResult(kind=kind, name=normalize(name))

    if kind == "data_type":
        _create_module(result, _data_type_destination(repo_root, at, place, system), "data_type")
    elif kind in _TARGETED_SECTIONS:
        _create_targeted(result, repo_root, kind, target, both, at, place, system)
    else:
        zone, section = _SINGLE_FILE_KINDS[kind]
        directory = resolve_destination(repo_root, zone, section, at=at, place=place, system=system)
        _create_module(result, directory, kind)

    logger.debug(f"create {kind} {result.name}: {len(result.created)} created, {len(result.skipped)} skipped")
    return result

