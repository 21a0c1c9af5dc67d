from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the directory-shape conventions shared by the generator and the
scaffolder: recognized extensions, reserved entry files, the output skeleton
class names and the on-disk layout of a project repository.
"""

from typing import Dict, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"
CONFIG_FILE_NAME = ".woollyrc.json"

DEFAULT_PLACE = "MainPlace"
DEFAULT_PROJECT_NAME = "woolly"
DEFAULT_PLACES_DIR = "places"
SINGLE_MANIFEST_NAME = "default.project.json"
MANIFEST_SUFFIX = ".project.json"
PLACE_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

# -----------------------------------------------------------------------------
# FILE CLASSIFICATION
# -----------------------------------------------------------------------------

MODULE_EXTENSIONS: Tuple[str, ...] = (".luau", ".lua")
ASSET_EXTENSIONS: Tuple[str, ...] = (".rbxm", ".rbxmx")
INIT_STEM = "init"
INIT_FILE_NAMES: Tuple[str, ...] = tuple(f"{INIT_STEM}{ext}" for ext in MODULE_EXTENSIONS)

# -----------------------------------------------------------------------------
# OUTPUT SKELETON
# -----------------------------------------------------------------------------

CLASS_DATA_MODEL = "DataModel"
CLASS_FOLDER = "Folder"
CLASS_SCRIPT = "Script"
CLASS_LOCAL_SCRIPT = "LocalScript"

ZONE_SHARED = "Shared"
ZONE_SERVER = "Server"
ZONE_CLIENT = "Client"
EXTERNAL_PACKAGES = "ExternalPackages"

# -----------------------------------------------------------------------------
# REPOSITORY LAYOUT (relative to the repo root)
# -----------------------------------------------------------------------------

SRC_DIR = "src"
OVERRIDES_DIR = "place_overrides"
VENDOR_PACKAGES_DIR = "Packages"
BUILDS_DIR = "builds"

SYSTEMS_DIR = "_systems"
GAME_DATA_DIR = "_game_data"
MONETISATION_DIR = "_monetisation"
TYPES_DIR = "_types"

SERVER_BOOTSTRAP_FILE = "Bootstrap.server.luau"
CLIENT_BOOTSTRAP_FILE = "Bootstrap.client.luau"

# Sub-directories created for every place override and by `create system`
PLACE_SKELETON: Dict[str, Tuple[str, ...]] = {
    "shared": ("assets/ui", "assets/models", "classes", "config", "packages", "utils"),
    "client": ("controllers", "components", "utils"),
    "server": ("services", "packages", "classes"),
}

SYSTEM_SKELETON: Dict[str, Tuple[str, ...]] = {
    "server": ("services", "packages", "classes"),
    "client": ("controllers", "components", "utils"),
    "shared": ("assets/ui", "assets/models", "classes", "utils", "config"),
}
