from __future__ import annotations

"""
Toolchain Orchestration.

Step sequences behind `setup`, `build` and `serve`. Each step is an external
tool run from the repository root; the first failing required step decides
the exit status.
"""

import logging
import os
from typing import Any, Dict

from woolly.core.pipeline.engine import run_generation
from woolly.core.services.places import ensure_place_skeleton
from woolly.domain.constants import BUILDS_DIR
from woolly.domain.layout import place_manifest_path
from woolly.infra.fs import ensure_dir, relative_posix
from woolly.infra.process import run_tool

logger = logging.getLogger(__name__)

BUILD_SUFFIX = ".rbxlx"

# Dependency installers; a failure here is reported but never fatal
_INSTALL_STEPS = (
    ("wally", ["install"]),
    ("rokit", ["install"]),
)


def build_output_path(repo_root: str, place: str) -> str:
    """Absolute path of 'builds/<place>.rbxlx'."""
    return os.path.join(os.path.abspath(repo_root), BUILDS_DIR, f"{place}{BUILD_SUFFIX}")


def ensure_manifest(repo_root: str, place: str, cfg: Dict[str, Any]) -> int:
    """
    Generate the place manifest if it does not exist yet.

    Returns:
        int: 0 when the manifest is available, 1 if generation failed.
    """
    manifest = place_manifest_path(repo_root, place, cfg["placesDir"])
    if os.path.isfile(manifest):
        return 0
    logger.info(f"No project for {place} yet. Generating...")
    result = run_generation(repo_root, place, config=cfg)
    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def build_place(repo_root: str, place: str, cfg: Dict[str, Any]) -> int:
    """Run 'rojo build' for `place` into the builds directory."""
    code = ensure_manifest(repo_root, place, cfg)
    if code != 0:
        return code

    root = os.path.abspath(repo_root)
    out_file = build_output_path(root, place)
    ensure_dir(os.path.dirname(out_file))
    manifest = relative_posix(place_manifest_path(root, place, cfg["placesDir"]), root)

    code = run_tool("rojo", ["build", manifest, "-o", relative_posix(out_file, root)], cwd=root)
    if code == 0:
        logger.info(f"Built {out_file}")
    return code


def serve_place(repo_root: str, place: str, cfg: Dict[str, Any]) -> int:
    """Run 'rojo serve' for `place`, generating its manifest first if needed."""
    code = ensure_manifest(repo_root, place, cfg)
    if code != 0:
        return code

    root = os.path.abspath(repo_root)
    manifest = relative_posix(place_manifest_path(root, place, cfg["placesDir"]), root)
    return run_tool("rojo", ["serve", manifest], cwd=root)


def setup_place(repo_root: str, place: str, cfg: Dict[str, Any]) -> int:
    """
    Full bootstrap of a working copy for `place`.

    Steps: place skeleton, dependency installs (non-fatal), manifest
    generation, build, then serve.

    Returns:
        int: Exit status of the first failing required step, else of 'rojo serve'.
    """
    root = os.path.abspath(repo_root)
    ensure_place_skeleton(root, place)

    for cmd, args in _INSTALL_STEPS:
        if run_tool(cmd, args, cwd=root) != 0:
            logger.warning(f"{cmd} {' '.join(args)} failed or {cmd} is not installed. Continuing...")

    result = run_generation(root, place, config=cfg)
    if not result.ok:
        return 1

    code = build_place(root, place, cfg)
    if code != 0:
        return code

    logger.info("Starting rojo serve")
    return serve_place(root, place, cfg)
