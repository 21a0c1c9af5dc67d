from __future__ import annotations

"""
Tree Renderer.

Converts the in-memory output tree into the manifest document understood by
the downstream sync tool, and into an ASCII preview for terminal output.
"""

import json
from typing import Any, Dict, List

from woolly.domain.constants import CLASS_FOLDER
from woolly.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# MANIFEST SERIALIZATION
# -----------------------------------------------------------------------------

def node_to_dict(node: TreeNode) -> Dict[str, Any]:
    """
    Serialize one node and its descendants.

    '$className' and '$path' come first, followed by the children in
    insertion order.
    """
    out: Dict[str, Any] = {}
    if node.class_name:
        out["$className"] = node.class_name
    if node.path is not None:
        out["$path"] = node.path
    for key, child in node.children.items():
        out[key] = node_to_dict(child)
    return out


def project_to_dict(name: str, root: TreeNode) -> Dict[str, Any]:
    return {"name": name, "tree": node_to_dict(root)}


def serialize_project(name: str, root: TreeNode) -> str:
    """
    Render the manifest document as text.

    Two-space indentation and a trailing newline; identical trees always
    produce identical bytes.
    """
    return json.dumps(project_to_dict(name, root), ensure_ascii=False, indent=2) + "\n"

# -----------------------------------------------------------------------------
# ASCII PREVIEW
# -----------------------------------------------------------------------------

def render_tree_structure(node: TreeNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively transform the output tree into connector-drawn lines.

    Leaves show their backing path after an arrow.

    Args:
        node: Current node whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = list(node.children.items())
    total = len(entries)

    for i, (name, child) in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        label = name
        if child.path is not None:
            label = f"{name} -> {child.path}"
        elif child.class_name and child.class_name != CLASS_FOLDER:
            label = f"{name} ({child.class_name})"
        lines.append(f"{prefix}{connector}{label}")

        if child.children:
            render_tree_structure(child, lines, prefix + ("    " if is_last else "│   "))
