from __future__ import annotations

"""
Tree Builder.

Accessors that create and replace nodes inside the in-memory output tree.
Every write goes through a MergePolicy so that the collision rules live in
one place.
"""

import logging
from typing import Optional, Type

from woolly.domain.constants import CLASS_FOLDER
from woolly.domain.errors import CollisionError
from woolly.domain.tree_models import MergePolicy, TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# NODE FACTORIES
# -----------------------------------------------------------------------------

def new_root(class_name: str) -> TreeNode:
    return TreeNode(location="", class_name=class_name)


def make_leaf(path: str, class_name: Optional[str] = None, folder_backed: bool = False) -> TreeNode:
    """Build a detached leaf; its location is assigned when it is attached."""
    return TreeNode(class_name=class_name, path=path, folder_backed=folder_backed)

# -----------------------------------------------------------------------------
# MUTATORS
# -----------------------------------------------------------------------------

def ensure_container(
        parent: TreeNode,
        key: str,
        policy: MergePolicy = MergePolicy.REPLACE,
        error_cls: Type[CollisionError] = CollisionError,
) -> TreeNode:
    """
    Get or create the namespace `key` under `parent`.

    Existing containers and folder-backed modules are reused. An existing
    plain file leaf conflicts with a namespace: it is replaced in full under
    REPLACE and raises under FAIL_ON_COLLISION.

    Args:
        parent: Node receiving the child.
        key: Child name.
        policy: Collision policy.
        error_cls: Exception raised on a fatal collision.

    Returns:
        TreeNode: The container found or created.
    """
    existing = parent.children.get(key)
    if existing is not None:
        if existing.accepts_children:
            return existing
        if policy is MergePolicy.FAIL_ON_COLLISION:
            raise error_cls(parent.location, key)
        logger.debug(f"Replacing leaf {parent.child_location(key)} with a folder")

    node = TreeNode(location=parent.child_location(key), class_name=CLASS_FOLDER)
    parent.children[key] = node
    return node


def put_node(
        parent: TreeNode,
        key: str,
        node: TreeNode,
        policy: MergePolicy = MergePolicy.REPLACE,
        error_cls: Type[CollisionError] = CollisionError,
) -> TreeNode:
    """
    Attach `node` as `key` under `parent`.

    Args:
        parent: Node receiving the child.
        key: Child name.
        node: Detached node to attach (its location is rewritten).
        policy: REPLACE overwrites silently, FAIL_ON_COLLISION raises.
        error_cls: Exception raised on a fatal collision.

    Returns:
        TreeNode: The attached node.
    """
    if key in parent.children and policy is MergePolicy.FAIL_ON_COLLISION:
        raise error_cls(parent.location, key)
    _relocate(node, parent.child_location(key))
    parent.children[key] = node
    return node


def get_path(root: TreeNode, *keys: str) -> Optional[TreeNode]:
    """Walk `keys` from `root`, returning None if any step is missing."""
    node: Optional[TreeNode] = root
    for key in keys:
        if node is None:
            return None
        node = node.children.get(key)
    return node


def count_nodes(node: TreeNode) -> int:
    return 1 + sum(count_nodes(child) for child in node.children.values())

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _relocate(node: TreeNode, location: str) -> None:
    node.location = location
    for key, child in node.children.items():
        _relocate(child, node.child_location(key))
