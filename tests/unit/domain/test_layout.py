from __future__ import annotations

"""
Unit tests for project layout resolution.
"""

import os
from pathlib import Path

import pytest

from woolly.domain.errors import UsageError
from woolly.domain.layout import (
    place_manifest_path,
    resolve_place_layout,
    resolve_single_layout,
    validate_place_name,
)


@pytest.mark.parametrize("name", ["MainPlace", "lobby_2", "Test-Arena"])
def test_valid_place_names(name: str) -> None:
    """TC-01: Letters, digits, dashes and underscores are accepted."""
    assert validate_place_name(name) == name


@pytest.mark.parametrize("name", ["", None, "a/b", "..", "my place", "x.y", "Foo\n"])
def test_invalid_place_names(name) -> None:
    """TC-02: Anything that could escape the places folder is rejected."""
    with pytest.raises(UsageError):
        validate_place_name(name)


def test_place_layout_with_overrides(tmp_path: Path) -> None:
    """TC-03: Existing overrides provide the overlay and an extra systems root."""
    (tmp_path / "place_overrides" / "Lobby" / "_systems").mkdir(parents=True)

    layout = resolve_place_layout(str(tmp_path), "Lobby", "farm", "out")

    assert layout.project_name == "farm-Lobby"
    assert layout.output_path == str(tmp_path / "out" / "Lobby.project.json")
    assert layout.manifest_dir == str(tmp_path / "out")
    assert layout.overlay_root == str(tmp_path / "place_overrides" / "Lobby")
    assert layout.systems_roots == [
        str(tmp_path / "src" / "_systems"),
        str(tmp_path / "place_overrides" / "Lobby" / "_systems"),
    ]
    assert layout.vendor_root == str(tmp_path / "Packages")


def test_place_layout_without_overrides(tmp_path: Path) -> None:
    """TC-04: A place with no override folder falls back to the base tree."""
    layout = resolve_place_layout(str(tmp_path), "Arena")

    assert layout.overlay_root is None
    assert layout.systems_roots == [str(tmp_path / "src" / "_systems")]
    assert layout.project_name == "woolly-Arena"


def test_single_layout(tmp_path: Path) -> None:
    """TC-05: Single mode writes default.project.json at the root, no overlay."""
    layout = resolve_single_layout(str(tmp_path), "farm")

    assert layout.output_path == os.path.join(str(tmp_path), "default.project.json")
    assert layout.project_name == "farm"
    assert layout.overlay_root is None
    assert layout.place == ""


def test_place_manifest_path(tmp_path: Path) -> None:
    """TC-06: Manifest paths follow '<placesDir>/<Place>.project.json'."""
    assert place_manifest_path(str(tmp_path), "Lobby") == str(tmp_path / "places" / "Lobby.project.json")
