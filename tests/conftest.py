from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Filesystem fixtures that lay out Luau repositories under tmp_path.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
FileWriter = Callable[[Path, Iterable[str]], Path]


@pytest.fixture
def write_files() -> FileWriter:
    """
    Return a helper that creates files (with parent directories) under a root.

    Each entry is a POSIX relative path; the file content is its own path so
    that overlay and base copies are distinguishable.
    """
    def _write(root: Path, rel_paths: Iterable[str]) -> Path:
        for rel in rel_paths:
            target = root.joinpath(*rel.split("/"))
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"-- {rel}\n", encoding="utf-8")
        return root
    return _write


@pytest.fixture
def sample_repo(tmp_path: Path, write_files: FileWriter) -> Path:
    """
    Create a small but complete repository.

    Structure:
    /repo
      src/shared/config/A.luau, src/shared/classes/Item.luau
      src/shared/assets/ui/HUD.rbxm
      src/server/Bootstrap.server.luau, src/server/services/DataService.luau
      src/server/services/combat/init.luau (+ Hitbox.luau)
      src/client/Bootstrap.client.luau, src/client/controllers/InputController.luau
      src/_systems/Shop/server/services/ShopService.luau
      src/_systems/Shop/shared/config/B.luau
      place_overrides/Lobby/shared/config/A.luau
      Packages/Promise.lua, Packages/_Index/..., Packages/Signal/init.lua
    """
    repo = tmp_path / "repo"
    write_files(repo, [
        "src/shared/config/A.luau",
        "src/shared/classes/Item.luau",
        "src/shared/assets/ui/HUD.rbxm",
        "src/server/Bootstrap.server.luau",
        "src/server/services/DataService.luau",
        "src/server/services/combat/init.luau",
        "src/server/services/combat/Hitbox.luau",
        "src/client/Bootstrap.client.luau",
        "src/client/controllers/InputController.luau",
        "src/_systems/Shop/server/services/ShopService.luau",
        "src/_systems/Shop/shared/config/B.luau",
        "place_overrides/Lobby/shared/config/A.luau",
        "Packages/Promise.lua",
        "Packages/_Index/sleitnick_signal@1.0.0/signal/init.lua",
        "Packages/Signal/init.lua",
    ])
    return repo


@pytest.fixture(autouse=True)
def _detach_woolly_log_handlers():
    """Drop handlers bound to a captured stream once a test finishes."""
    yield
    from woolly.infra.logging import reset_logging
    reset_logging()
    logging.getLogger().setLevel(logging.WARNING)
