from __future__ import annotations

"""
Manifest Assembler.

Builds the complete output tree for one run: a fixed skeleton, the three
zones populated section by section (base + place overlay), vendored
packages, and finally every system bundle folded in collision-fatally.
"""

import logging
import os
from typing import Dict, List, Optional, Sequence, Tuple

from woolly.core.analysis.merge_engine import MergeEngine
from woolly.core.analysis.tree_builder import ensure_container, new_root, put_node
from woolly.domain.constants import (
    CLASS_DATA_MODEL,
    CLASS_LOCAL_SCRIPT,
    CLASS_SCRIPT,
    CLIENT_BOOTSTRAP_FILE,
    EXTERNAL_PACKAGES,
    SERVER_BOOTSTRAP_FILE,
    ZONE_CLIENT,
    ZONE_SERVER,
    ZONE_SHARED,
)
from woolly.domain.errors import AssetCollisionError
from woolly.domain.manifest_models import MissingInputWarning
from woolly.domain.tree_models import MergePolicy, TreeNode
from woolly.infra.fs import list_subdirectories

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SECTION VOCABULARY
# -----------------------------------------------------------------------------

# (output name, base dir relative to src/, overlay dir relative to the place root)
SHARED_SECTIONS: Tuple[Tuple[str, str, str], ...] = (
    ("Packages", "shared/packages", "shared/packages"),
    ("GameData", "_game_data/resolver", "shared/game_data_resolver"),
    ("Types", "_types", "shared/types"),
    ("Config", "shared/config", "shared/config"),
    ("Monetisation", "_monetisation/resolver", "shared/monetisation_resolver"),
    ("Classes", "shared/classes", "shared/classes"),
    ("Utils", "shared/utils", "shared/utils"),
)

SERVER_SECTIONS: Tuple[Tuple[str, str, str], ...] = (
    ("Services", "server/services", "server/services"),
    ("Packages", "server/packages", "server/packages"),
    ("GameDataMaster", "_game_data/source", "server/game_data_master"),
    ("Monetisation", "_monetisation/source", "server/monetisation"),
    ("Classes", "server/classes", "server/classes"),
)

CLIENT_SECTIONS: Tuple[Tuple[str, str, str], ...] = (
    ("Controllers", "client/controllers", "client/controllers"),
    ("Components", "client/components", "client/components"),
    ("Utils", "client/utils", "client/utils"),
)

# (asset folder name, dir relative to a zone root)
ASSET_SECTIONS: Tuple[Tuple[str, str], ...] = (
    ("UI", "assets/ui"),
    ("Models", "assets/models"),
)

# (zone, dir inside a system bundle, destination section)
SYSTEM_SECTIONS: Tuple[Tuple[str, str, str], ...] = (
    (ZONE_CLIENT, "client/controllers", "Controllers"),
    (ZONE_CLIENT, "client/components", "Components"),
    (ZONE_CLIENT, "client/utils", "Utils"),
    (ZONE_SERVER, "server/services", "Services"),
    (ZONE_SERVER, "server/packages", "Packages"),
    (ZONE_SERVER, "server/classes", "Classes"),
    (ZONE_SHARED, "shared/config", "Config"),
    (ZONE_SHARED, "shared/classes", "Classes"),
    (ZONE_SHARED, "shared/utils", "Utils"),
)


class ManifestAssembler:
    """
    Assembles the output tree for a base tree, its systems and an overlay.

    Attributes:
        source_root: Base source tree ('src/').
        systems_roots: Directories whose sub-directories are system bundles.
        overlay_root: Place override tree, or None.
        vendor_root: Vendored packages directory, or None to skip them.
        engine: Merge engine writing paths relative to the manifest directory.
        systems: Bundle names merged so far, in merge order.
    """

    def __init__(
            self,
            source_root: str,
            systems_roots: Optional[Sequence[str]] = None,
            overlay_root: Optional[str] = None,
            *,
            manifest_dir: str,
            vendor_root: Optional[str] = None,
    ):
        self.source_root = os.path.abspath(source_root)
        self.systems_roots = [os.path.abspath(p) for p in (systems_roots or [])]
        self.overlay_root = os.path.abspath(overlay_root) if overlay_root else None
        self.vendor_root = vendor_root
        self.engine = MergeEngine(manifest_dir)
        self.systems: List[str] = []

    @property
    def missing(self) -> List[MissingInputWarning]:
        return self.engine.missing

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def generate(self) -> TreeNode:
        """
        Build the whole tree in memory.

        Raises:
            CollisionError: If two system bundles (or a bundle and the base
                tree) define the same name in one container.

        Returns:
            TreeNode: The 'DataModel' root.
        """
        root, shared, server, client = self._build_skeleton()

        if self.vendor_root:
            external = root.children["ReplicatedStorage"].children[EXTERNAL_PACKAGES]
            count = self.engine.mount_external_packages(external, self.vendor_root)
            logger.debug(f"Mounted {count} external packages")

        self._build_shared(shared)
        self._build_server(server)
        self._build_client(client)

        zones = {ZONE_SHARED: shared, ZONE_SERVER: server, ZONE_CLIENT: client}
        for systems_root in self.systems_roots:
            self._merge_systems(systems_root, zones)

        return root

    # -------------------------------------------------------------------------
    # ZONES
    # -------------------------------------------------------------------------

    def _build_skeleton(self) -> Tuple[TreeNode, TreeNode, TreeNode, TreeNode]:
        root = new_root(CLASS_DATA_MODEL)

        replicated = put_node(root, "ReplicatedStorage", TreeNode())
        shared = ensure_container(replicated, ZONE_SHARED)
        ensure_container(replicated, EXTERNAL_PACKAGES)

        script_service = put_node(root, "ServerScriptService", TreeNode())
        server = ensure_container(script_service, ZONE_SERVER)

        player = put_node(root, "StarterPlayer", TreeNode())
        player_scripts = put_node(player, "StarterPlayerScripts", TreeNode())
        client = ensure_container(player_scripts, ZONE_CLIENT)

        return root, shared, server, client

    def _build_shared(self, shared: TreeNode) -> None:
        self._overlay_sections(shared, SHARED_SECTIONS)

        assets = ensure_container(shared, "Assets")
        for name, rel in ASSET_SECTIONS:
            folder = ensure_container(assets, name)
            base_dir = self._src("shared", rel)
            if not self.engine.merge_assets(folder, base_dir):
                self.engine.record_missing(folder.location, base_dir)
            overlay_dir = self._overlay("shared", rel)
            if overlay_dir:
                self.engine.merge_assets(folder, overlay_dir, MergePolicy.REPLACE)

    def _build_server(self, server: TreeNode) -> None:
        self.engine.mount_file(
            server,
            "Bootstrap",
            self._src("server", SERVER_BOOTSTRAP_FILE),
            self._overlay("server", SERVER_BOOTSTRAP_FILE),
            class_name=CLASS_SCRIPT,
        )
        self._overlay_sections(server, SERVER_SECTIONS)

    def _build_client(self, client: TreeNode) -> None:
        self.engine.mount_file(
            client,
            "Bootstrap",
            self._src("client", CLIENT_BOOTSTRAP_FILE),
            self._overlay("client", CLIENT_BOOTSTRAP_FILE),
            class_name=CLASS_LOCAL_SCRIPT,
        )
        self._overlay_sections(client, CLIENT_SECTIONS)

    def _overlay_sections(self, zone: TreeNode, sections: Sequence[Tuple[str, str, str]]) -> None:
        for name, base_rel, overlay_rel in sections:
            self.engine.overlay_section(zone, name, self._src(base_rel), self._overlay(overlay_rel))

    # -------------------------------------------------------------------------
    # SYSTEMS
    # -------------------------------------------------------------------------

    def _merge_systems(self, systems_root: str, zones: Dict[str, TreeNode]) -> None:
        """Fold every bundle under `systems_root` into the zones, collision-fatally."""
        for sys_name in list_subdirectories(systems_root):
            sys_dir = os.path.join(systems_root, sys_name)
            logger.debug(f"Merging system '{sys_name}' from {sys_dir}")

            for zone_name, rel, section in SYSTEM_SECTIONS:
                source = os.path.join(sys_dir, rel)
                if not os.path.isdir(source):
                    continue
                dest = ensure_container(zones[zone_name], section, MergePolicy.FAIL_ON_COLLISION)
                self.engine.merge_leaf(dest, source)

            for name, rel in ASSET_SECTIONS:
                source = os.path.join(sys_dir, "shared", rel)
                if not os.path.isdir(source):
                    continue
                assets = ensure_container(zones[ZONE_SHARED], "Assets")
                folder = ensure_container(
                    assets, name, MergePolicy.FAIL_ON_COLLISION, AssetCollisionError
                )
                self.engine.merge_assets(folder, source)

            self.systems.append(sys_name)

    # -------------------------------------------------------------------------
    # PATH HELPERS
    # -------------------------------------------------------------------------

    def _src(self, *parts: str) -> str:
        return os.path.join(self.source_root, *parts)

    def _overlay(self, *parts: str) -> Optional[str]:
        if not self.overlay_root:
            return None
        return os.path.join(self.overlay_root, *parts)
