from __future__ import annotations

"""
Mirror/Merge Engine.

Copies the shape of source directories into the output tree. One recursive
walk serves every operation; what differs is the MergePolicy applied when a
name is already taken:

- mirror and overlay merges use REPLACE (last write wins, silently);
- system merges use FAIL_ON_COLLISION (independently authored bundles must
  never clobber each other).
"""

import logging
import os
from typing import List, Optional, Type

from woolly.core.analysis.classifier import (
    is_asset_file,
    is_directory,
    is_file,
    is_folder_backed_module,
    is_module_file,
    strip_extension,
)
from woolly.core.analysis.naming import normalize
from woolly.core.analysis.tree_builder import ensure_container, make_leaf, put_node
from woolly.domain.errors import AssetCollisionError, CollisionError
from woolly.domain.manifest_models import MissingInputWarning
from woolly.domain.tree_models import MergePolicy, NodeKind, TreeNode
from woolly.infra.fs import list_entries, relative_posix

logger = logging.getLogger(__name__)


class MergeEngine:
    """
    Populates an output tree from source directories.

    Leaf paths are written relative to `manifest_dir`, the directory the
    generated manifest will live in.

    Attributes:
        manifest_dir: Base directory for every emitted '$path'.
        missing: Optional sections skipped because their source is absent.
    """

    def __init__(self, manifest_dir: str):
        self.manifest_dir = os.path.abspath(manifest_dir)
        self.missing: List[MissingInputWarning] = []

    # -------------------------------------------------------------------------
    # PUBLIC OPERATIONS
    # -------------------------------------------------------------------------

    def mirror(self, dest: TreeNode, source_dir: str) -> bool:
        """
        Copy the module shape of `source_dir` into `dest` without collision checks.

        A folder-backed `source_dir` is mounted as one module named after the
        directory; otherwise sub-directories become folders (or folder-backed
        mounts) and module files become leaves named by their stripped file
        name.

        Returns:
            bool: False if `source_dir` is not a directory.
        """
        if not is_directory(source_dir):
            return False
        self._merge_directory(dest, source_dir, MergePolicy.REPLACE, NodeKind.MODULE, CollisionError)
        return True

    def merge_leaf(self, dest: TreeNode, source_dir: str) -> bool:
        """
        Fold a system bundle's section into `dest`, additive only.

        Raises:
            CollisionError: If any derived name already exists at its destination.

        Returns:
            bool: False if `source_dir` is not a directory.
        """
        if not is_directory(source_dir):
            return False
        self._merge_directory(
            dest, source_dir, MergePolicy.FAIL_ON_COLLISION, NodeKind.MODULE, CollisionError
        )
        return True

    def merge_assets(
            self,
            dest: TreeNode,
            source_dir: str,
            policy: MergePolicy = MergePolicy.FAIL_ON_COLLISION,
    ) -> bool:
        """
        Mirror packaged-model files from `source_dir` into `dest`.

        Sub-directories always become folders; there is no folder-backed
        promotion for assets.

        Raises:
            AssetCollisionError: On a name clash under FAIL_ON_COLLISION.

        Returns:
            bool: False if `source_dir` is not a directory.
        """
        if not is_directory(source_dir):
            return False
        self._merge_directory(dest, source_dir, policy, NodeKind.ASSET, AssetCollisionError)
        return True

    def overlay_section(
            self,
            parent: TreeNode,
            name: str,
            base_dir: Optional[str],
            overlay_dir: Optional[str] = None,
    ) -> Optional[TreeNode]:
        """
        Mount section `name` from `base_dir`, then apply `overlay_dir` on top.

        A folder-backed overlay replaces the whole section. A plain overlay
        directory is merged entry by entry, each collision replacing the base
        entry.

        Args:
            parent: Container receiving the section.
            name: Output name of the section.
            base_dir: Base source directory (may be absent).
            overlay_dir: Place override directory (may be absent or None).

        Returns:
            Optional[TreeNode]: The mounted section, or None if neither exists.
        """
        if base_dir and is_folder_backed_module(base_dir):
            self._mount_folder_module(parent, name, base_dir, MergePolicy.REPLACE, CollisionError)
        elif base_dir and is_directory(base_dir):
            self.mirror(ensure_container(parent, name), base_dir)

        if overlay_dir and is_folder_backed_module(overlay_dir):
            logger.debug(f"Overlay replaces {parent.child_location(name)} wholesale")
            return self._mount_folder_module(
                parent, name, overlay_dir, MergePolicy.REPLACE, CollisionError
            )

        if overlay_dir and is_directory(overlay_dir):
            target = ensure_container(parent, name)
            self._merge_directory(target, overlay_dir, MergePolicy.REPLACE, NodeKind.MODULE, CollisionError)

        section = parent.children.get(name)
        if section is None:
            self.record_missing(parent.child_location(name), base_dir or "")
        return section

    def mount_file(
            self,
            parent: TreeNode,
            name: str,
            base_file: str,
            overlay_file: Optional[str] = None,
            class_name: Optional[str] = None,
    ) -> Optional[TreeNode]:
        """
        Mount a single script file, the overlay copy winning when present.

        Returns:
            Optional[TreeNode]: The mounted leaf, or None if neither file exists.
        """
        chosen = None
        if overlay_file and is_file(overlay_file):
            chosen = overlay_file
        elif is_file(base_file):
            chosen = base_file

        if chosen is None:
            self.record_missing(parent.child_location(name), base_file)
            return None
        return put_node(parent, name, make_leaf(self.relative(chosen), class_name))

    def mount_external_packages(self, parent: TreeNode, vendor_dir: str) -> int:
        """
        Map every vendored package directly under `parent`.

        Package names are kept verbatim. Entries starting with '_' (the package
        manager's index) are skipped.

        Returns:
            int: Number of packages mounted.
        """
        if not is_directory(vendor_dir):
            self.record_missing(parent.location, vendor_dir)
            return 0

        mounted = 0
        for entry in list_entries(vendor_dir):
            if entry.name.startswith("_"):
                continue
            if entry.is_dir():
                leaf = make_leaf(
                    self.relative(entry.path), folder_backed=is_folder_backed_module(entry.path)
                )
                put_node(parent, entry.name, leaf)
            elif entry.is_file() and is_module_file(entry.name):
                put_node(parent, strip_extension(entry.name), make_leaf(self.relative(entry.path)))
            else:
                continue
            mounted += 1
        return mounted

    # -------------------------------------------------------------------------
    # HELPERS
    # -------------------------------------------------------------------------

    def relative(self, path: str) -> str:
        return relative_posix(path, self.manifest_dir)

    def record_missing(self, section: str, path: str) -> None:
        logger.debug(f"Optional input missing for {section}: {path}")
        self.missing.append(MissingInputWarning(section=section, path=path))

    def _mount_folder_module(
            self,
            parent: TreeNode,
            name: str,
            directory: str,
            policy: MergePolicy,
            error_cls: Type[CollisionError],
    ) -> TreeNode:
        logger.debug(f"Folder-backed module {parent.child_location(name)} <- {directory}")
        leaf = make_leaf(self.relative(directory), folder_backed=True)
        return put_node(parent, name, leaf, policy, error_cls)

    def _merge_directory(
            self,
            dest: TreeNode,
            source_dir: str,
            policy: MergePolicy,
            kind: NodeKind,
            error_cls: Type[CollisionError],
    ) -> None:
        """Shared recursion behind mirror, merge_leaf, merge_assets and overlays."""
        promote = kind is NodeKind.MODULE
        matches = is_module_file if promote else is_asset_file

        if promote and is_folder_backed_module(source_dir):
            name = normalize(os.path.basename(os.path.normpath(source_dir)))
            self._mount_folder_module(dest, name, source_dir, policy, error_cls)
            return

        for entry in list_entries(source_dir):
            if entry.is_dir():
                name = normalize(entry.name)
                if not name:
                    logger.warning(f"Skipping {entry.path}: no usable characters in its name")
                    continue
                if promote and is_folder_backed_module(entry.path):
                    self._mount_folder_module(dest, name, entry.path, policy, error_cls)
                    continue
                child = ensure_container(dest, name, policy, error_cls)
                self._merge_directory(child, entry.path, policy, kind, error_cls)
            elif entry.is_file() and matches(entry.name):
                name = strip_extension(entry.name)
                if not name:
                    logger.warning(f"Skipping {entry.path}: no usable characters in its name")
                    continue
                put_node(dest, name, make_leaf(self.relative(entry.path)), policy, error_cls)
