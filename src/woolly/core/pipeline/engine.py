from __future__ import annotations

"""
Manifest Generation Engine.

Coordinates one generation run:
1. Resolves the layout (place or single mode) from the repository config.
2. Assembles the full output tree in memory.
3. Serializes it and writes the manifest once, atomically, at the very end.

Any fatal error returns a failed GenerationResult and leaves the previous
manifest (if any) untouched.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from woolly.core.analysis.tree_builder import count_nodes
from woolly.core.analysis.tree_renderer import render_tree_structure, serialize_project
from woolly.core.pipeline.assembler import ManifestAssembler
from woolly.domain.config import load_config
from woolly.domain.errors import WoollyError
from woolly.domain.layout import ProjectLayout, resolve_place_layout, resolve_single_layout
from woolly.domain.manifest_models import (
    GenerationResult,
    create_error_result,
    create_success_result,
)
from woolly.infra.fs import write_text_atomic

logger = logging.getLogger(__name__)


def run_generation(
        repo_root: str,
        place: Optional[str] = None,
        *,
        single: bool = False,
        config: Optional[Dict[str, Any]] = None,
        dry_run: bool = False,
        preview: bool = False,
) -> GenerationResult:
    """
    Generate the manifest for `place` (or the single global manifest).

    Args:
        repo_root: Repository root directory.
        place: Target place; defaults to the configured default place.
        single: Produce 'default.project.json' without any overlay.
        config: Pre-loaded repository config; loaded from disk when omitted.
        dry_run: Build and serialize but do not write.
        preview: Include an ASCII rendering of the tree in the result.

    Returns:
        GenerationResult: Status, output location and summary.
    """
    cfg = config if config is not None else load_config(repo_root)
    target_place = "" if single else (place or cfg["defaultPlace"])

    try:
        layout = _resolve_layout(repo_root, target_place, single, cfg)
    except WoollyError as e:
        logger.error(str(e))
        return create_error_result(e, place=target_place)

    logger.info(f"Generating {os.path.basename(layout.output_path)} ({layout.project_name})")
    if not os.path.isdir(layout.source_root):
        logger.warning(f"Base source tree not found: {layout.source_root}")

    assembler = ManifestAssembler(
        layout.source_root,
        layout.systems_roots,
        layout.overlay_root,
        manifest_dir=layout.manifest_dir,
        vendor_root=layout.vendor_root,
    )

    try:
        root = assembler.generate()
        document = serialize_project(layout.project_name, root)
    except WoollyError as e:
        logger.error(str(e))
        return create_error_result(e, layout.place, layout.project_name, layout.output_path)

    tree_lines: List[str] = []
    if preview:
        tree_lines = [layout.project_name]
        render_tree_structure(root, tree_lines)

    if dry_run:
        logger.info("Dry run: manifest not written.")
    else:
        try:
            write_text_atomic(layout.output_path, document)
        except OSError as e:
            logger.error(f"Failed to write manifest '{layout.output_path}': {e}")
            return create_error_result(e, layout.place, layout.project_name, layout.output_path)
        logger.info(f"Wrote {layout.output_path}")

    node_count = count_nodes(root)
    summary = {
        "source_root": layout.source_root,
        "systems_roots": list(layout.systems_roots),
        "missing_sections": [w.section for w in assembler.missing],
        "bytes": len(document.encode("utf-8")),
        "dry_run": dry_run,
    }

    return create_success_result(
        place=layout.place,
        project_name=layout.project_name,
        output_path=layout.output_path,
        overlay_root=layout.overlay_root or "",
        systems=assembler.systems,
        written=not dry_run,
        node_count=node_count,
        missing_inputs=assembler.missing,
        tree_lines=tree_lines,
        summary_extra=summary,
    )


def _resolve_layout(
        repo_root: str,
        place: str,
        single: bool,
        cfg: Dict[str, Any],
) -> ProjectLayout:
    if single:
        return resolve_single_layout(repo_root, cfg["projectName"])
    return resolve_place_layout(repo_root, place, cfg["projectName"], cfg["placesDir"])
