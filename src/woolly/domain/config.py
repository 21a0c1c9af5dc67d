from __future__ import annotations

"""
Configuration Domain Management.

Handles the small per-repository state file ('.woollyrc.json') that records
the current default place and the naming of generated manifests. Falls back
to defaults whenever the file is absent or unreadable.
"""

import json
import logging
import os
from typing import Any, Dict, List, Tuple

from woolly.domain.constants import (
    CONFIG_FILE_NAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_PLACE,
    DEFAULT_PLACES_DIR,
    DEFAULT_PROJECT_NAME,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default repository configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "defaultPlace": DEFAULT_PLACE,
        "projectName": DEFAULT_PROJECT_NAME,
        "placesDir": DEFAULT_PLACES_DIR,
    }


def config_path(repo_root: str) -> str:
    return os.path.join(os.path.abspath(repo_root), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(repo_root: str) -> Dict[str, Any]:
    """
    Load the repository configuration from disk.

    Unknown keys are preserved so that hand-edited files survive a rewrite.

    Args:
        repo_root: Repository root containing the config file.

    Returns:
        Dict[str, Any]: The loaded configuration merged over defaults.
    """
    defaults = get_default_config()
    path = config_path(repo_root)

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    state = dict(defaults)
    state.update(data)
    state["version"] = CURRENT_CONFIG_VERSION

    clean, warnings = validate_config(state)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return clean


def save_config(repo_root: str, config: Dict[str, Any]) -> str:
    """
    Persist the repository configuration.

    Args:
        repo_root: Repository root receiving the config file.
        config: The configuration dictionary to save.

    Returns:
        str: Path of the written file.

    Raises:
        OSError: If the file cannot be written.
    """
    path = config_path(repo_root)
    payload = dict(config)
    payload["version"] = CURRENT_CONFIG_VERSION
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.debug(f"Configuration saved to {path}")
    return path

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Normalize a configuration dictionary, replacing invalid values with defaults.

    Args:
        config: Raw configuration data.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    defaults = get_default_config()
    warnings: List[str] = []

    if not isinstance(config, dict):
        warnings.append(
            f"Invalid config type: expected dict, received {type(config).__name__}. Using defaults."
        )
        return defaults, warnings

    merged = dict(defaults)
    merged.update(config)

    for key in ("defaultPlace", "projectName", "placesDir"):
        value = merged.get(key)
        if isinstance(value, str) and value.strip():
            merged[key] = value.strip()
            continue
        warnings.append(f"Invalid field '{key}': expected non-empty str. Using fallback.")
        merged[key] = defaults[key]

    return merged, warnings

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------

def get_default_place(repo_root: str) -> str:
    """Return the place used when a command is given none."""
    return load_config(repo_root).get("defaultPlace") or DEFAULT_PLACE


def set_default_place(repo_root: str, place: str) -> str:
    """Record `place` as the default place and return the config file path."""
    cfg = load_config(repo_root)
    cfg["defaultPlace"] = place
    return save_config(repo_root, cfg)
