from __future__ import annotations

"""
Unit tests for place discovery and place skeletons.
"""

from pathlib import Path

import pytest

from woolly.core.services.places import (
    ensure_place_skeleton,
    list_places,
    list_systems,
    source_root_for,
)
from woolly.domain.errors import UsageError


def test_list_places_merges_overrides_and_manifests(tmp_path: Path) -> None:
    """TC-01: Places come from override folders and generated manifests, sorted."""
    (tmp_path / "place_overrides" / "Lobby").mkdir(parents=True)
    (tmp_path / "places").mkdir()
    (tmp_path / "places" / "Arena.project.json").write_text("{}")
    (tmp_path / "places" / "Lobby.project.json").write_text("{}")
    (tmp_path / "places" / "notes.txt").write_text("")

    assert list_places(str(tmp_path)) == ["Arena", "Lobby"]


def test_list_places_empty_repo(tmp_path: Path) -> None:
    """TC-02: No overrides and no manifests means no places."""
    assert list_places(str(tmp_path)) == []


def test_list_systems(sample_repo: Path, write_files) -> None:
    """TC-03: Systems are listed per root, including the place's own bundles."""
    write_files(sample_repo, ["place_overrides/Lobby/_systems/Queue/server/services/Q.luau"])

    assert list_systems(str(sample_repo)) == {"src": ["Shop"]}
    assert list_systems(str(sample_repo), "Lobby") == {"src": ["Shop"], "Lobby": ["Queue"]}


def test_source_root_for(tmp_path: Path) -> None:
    """TC-04: Override roots are preferred only when they exist and are wanted."""
    (tmp_path / "place_overrides" / "Lobby").mkdir(parents=True)
    src = str(tmp_path / "src")

    assert source_root_for(str(tmp_path), None) == src
    assert source_root_for(str(tmp_path), "Arena") == src
    assert source_root_for(str(tmp_path), "Lobby") == str(tmp_path / "place_overrides" / "Lobby")
    assert source_root_for(str(tmp_path), "Lobby", prefer_src=True) == src


def test_ensure_place_skeleton_is_repeatable(tmp_path: Path) -> None:
    """TC-05: Creating a skeleton twice is harmless and keeps existing files."""
    base = Path(ensure_place_skeleton(str(tmp_path), "Lobby"))
    keep = base / "shared" / "config" / "Keep.luau"
    keep.write_text("-- keep")

    ensure_place_skeleton(str(tmp_path), "Lobby")

    assert keep.read_text() == "-- keep"
    for rel in ("shared/utils", "client/controllers", "server/classes"):
        assert (base / rel).is_dir()


def test_ensure_place_skeleton_rejects_bad_names(tmp_path: Path) -> None:
    """TC-06: Invalid place names never touch the filesystem."""
    with pytest.raises(UsageError):
        ensure_place_skeleton(str(tmp_path), "..")
    assert not (tmp_path / "place_overrides").exists()
