from __future__ import annotations

"""
Output Tree Data Models.

Provides the recursive node type used to assemble the project manifest in
memory, plus the enumerations that drive node inference and merge behavior.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from woolly.domain.constants import ASSET_EXTENSIONS

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class NodeKind(Enum):
    """Shape of a node in the output tree."""
    CONTAINER = "container"
    MODULE = "module"
    ASSET = "asset"


class MergePolicy(Enum):
    """How a write into an occupied name is resolved."""
    REPLACE = "replace"
    FAIL_ON_COLLISION = "fail"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class TreeNode:
    """
    A single entry of the output tree.

    A node without `path` is a container. A node with a `path` is a leaf,
    except that a leaf pointing at a directory (`folder_backed`) is also a
    namespace and may receive children contributed by other sources.

    Attributes:
        location: Dotted location from the tree root (e.g. 'ServerScriptService.Server').
        class_name: Explicit output kind ('$className'), if any.
        path: Relative POSIX path of the backing file or directory.
        folder_backed: True when `path` points at a folder-backed module.
        children: Child nodes keyed by name, insertion ordered.
    """
    location: str = ""
    class_name: Optional[str] = None
    path: Optional[str] = None
    folder_backed: bool = False
    children: Dict[str, "TreeNode"] = field(default_factory=dict)

    @property
    def kind(self) -> NodeKind:
        if self.path is None:
            return NodeKind.CONTAINER
        if self.path.lower().endswith(ASSET_EXTENSIONS):
            return NodeKind.ASSET
        return NodeKind.MODULE

    @property
    def accepts_children(self) -> bool:
        """Containers and folder-backed modules can hold nested entries."""
        return self.path is None or self.folder_backed

    def child_location(self, key: str) -> str:
        return f"{self.location}.{key}" if self.location else key
