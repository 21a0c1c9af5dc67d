from __future__ import annotations

"""
Manifest Generation Domain Models.

Defines the result object returned by the generation engine to the interface
layer, the record used for optional inputs that were absent, and the factory
functions that build both outcomes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# DIAGNOSTIC RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MissingInputWarning:
    """
    A named subsection whose source directory does not exist.

    Non-fatal: the corresponding output section is omitted.

    Attributes:
        section: Dotted output location that was skipped.
        path: Absolute source path that was looked up.
    """
    section: str
    path: str

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Unified result object of a manifest generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_type: Exception class name that aborted the run, if any.
        place: Place identifier, or empty string in single-manifest mode.
        project_name: Value of the manifest's top-level 'name'.
        output_path: Absolute path of the manifest file.
        overlay_root: Overlay directory that fed the run, if any.
        systems: Names of the system bundles merged, in merge order.
        written: True when the manifest was persisted.
        node_count: Total number of nodes in the generated tree.
        missing_inputs: Optional sections skipped because their source is absent.
        tree_lines: ASCII preview of the generated tree (when requested).
        summary: Technical execution summary.
    """
    ok: bool
    error: str
    error_type: str

    place: str
    project_name: str
    output_path: str
    overlay_root: str = ""

    systems: List[str] = field(default_factory=list)
    written: bool = False
    node_count: int = 0
    missing_inputs: List[MissingInputWarning] = field(default_factory=list)
    tree_lines: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: BaseException,
        place: str = "",
        project_name: str = "",
        output_path: str = "",
        summary_extra: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Create a failed generation result from the aborting exception.

    Args:
        error: The exception that stopped the run.
        place: Target place, if any.
        project_name: Manifest name that would have been written.
        output_path: Manifest path that was NOT written.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        GenerationResult: An immutable error result object.
    """
    return GenerationResult(
        ok=False,
        error=str(error),
        error_type=type(error).__name__,
        place=place,
        project_name=project_name,
        output_path=output_path,
        summary=summary_extra or {},
    )


def create_success_result(
        place: str,
        project_name: str,
        output_path: str,
        overlay_root: str = "",
        systems: Optional[List[str]] = None,
        written: bool = True,
        node_count: int = 0,
        missing_inputs: Optional[List[MissingInputWarning]] = None,
        tree_lines: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Create a successful generation result.

    Args:
        place: Target place, or empty string in single mode.
        project_name: Manifest name.
        output_path: Absolute manifest path.
        overlay_root: Overlay directory used, if any.
        systems: Merged system bundle names.
        written: False for dry runs.
        node_count: Number of nodes in the tree.
        missing_inputs: Skipped optional sections.
        tree_lines: ASCII preview lines.
        summary_extra: Final execution metrics.

    Returns:
        GenerationResult: An immutable success result object.
    """
    return GenerationResult(
        ok=True,
        error="",
        error_type="",
        place=place,
        project_name=project_name,
        output_path=output_path,
        overlay_root=overlay_root,
        systems=list(systems or []),
        written=written,
        node_count=node_count,
        missing_inputs=list(missing_inputs or []),
        tree_lines=list(tree_lines or []),
        summary=summary_extra or {},
    )
