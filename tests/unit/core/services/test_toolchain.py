from __future__ import annotations

"""
Unit tests for setup/build/serve orchestration.

External tools are never run: 'run_tool' is patched at the toolchain seam.
"""

from pathlib import Path
from typing import List, Tuple
from unittest.mock import patch

from woolly.core.services import toolchain
from woolly.domain.config import get_default_config


class _FakeRunner:
    """Records tool invocations and answers with scripted exit codes."""

    def __init__(self, codes=None):
        self.calls: List[Tuple[str, List[str], str]] = []
        self.codes = codes or {}

    def __call__(self, cmd: str, args: List[str], cwd: str) -> int:
        self.calls.append((cmd, list(args), cwd))
        return self.codes.get((cmd, args[0] if args else ""), 0)


def test_build_generates_missing_manifest(sample_repo: Path) -> None:
    """TC-01: build creates the manifest first, then runs 'rojo build'."""
    runner = _FakeRunner()
    with patch.object(toolchain, "run_tool", runner):
        code = toolchain.build_place(str(sample_repo), "Lobby", get_default_config())

    assert code == 0
    assert (sample_repo / "places" / "Lobby.project.json").is_file()
    assert (sample_repo / "builds").is_dir()
    assert runner.calls == [
        ("rojo", ["build", "places/Lobby.project.json", "-o", "builds/Lobby.rbxlx"], str(sample_repo)),
    ]


def test_build_propagates_tool_status(sample_repo: Path) -> None:
    """TC-02: The rojo exit status becomes the command's status."""
    runner = _FakeRunner({("rojo", "build"): 3})
    with patch.object(toolchain, "run_tool", runner):
        assert toolchain.build_place(str(sample_repo), "Lobby", get_default_config()) == 3


def test_build_stops_on_generation_failure(tmp_path: Path, write_files) -> None:
    """TC-03: A collision during generation returns 1 and never calls rojo."""
    write_files(tmp_path, [
        "src/_systems/A/client/utils/U.luau",
        "src/_systems/B/client/utils/U.luau",
    ])
    runner = _FakeRunner()
    with patch.object(toolchain, "run_tool", runner):
        assert toolchain.build_place(str(tmp_path), "MainPlace", get_default_config()) == 1
    assert runner.calls == []


def test_serve_uses_existing_manifest(sample_repo: Path) -> None:
    """TC-04: serve skips generation when the manifest already exists."""
    manifest = sample_repo / "places" / "Lobby.project.json"
    manifest.parent.mkdir()
    manifest.write_text("{}")
    runner = _FakeRunner()

    with patch.object(toolchain, "run_tool", runner):
        assert toolchain.serve_place(str(sample_repo), "Lobby", get_default_config()) == 0

    assert manifest.read_text() == "{}"
    assert runner.calls == [("rojo", ["serve", "places/Lobby.project.json"], str(sample_repo))]


def test_setup_full_sequence(sample_repo: Path) -> None:
    """TC-05: setup installs, generates, builds and serves; install failures are tolerated."""
    runner = _FakeRunner({("wally", "install"): 127, ("rokit", "install"): 1})
    with patch.object(toolchain, "run_tool", runner):
        code = toolchain.setup_place(str(sample_repo), "Arena", get_default_config())

    assert code == 0
    assert [c[0] + " " + c[1][0] for c in runner.calls] == [
        "wally install",
        "rokit install",
        "rojo build",
        "rojo serve",
    ]
    assert (sample_repo / "place_overrides" / "Arena" / "server" / "services").is_dir()
    assert (sample_repo / "places" / "Arena.project.json").is_file()


def test_setup_stops_when_build_fails(sample_repo: Path) -> None:
    """TC-06: A failing build ends setup with the build status; serve is skipped."""
    runner = _FakeRunner({("rojo", "build"): 2})
    with patch.object(toolchain, "run_tool", runner):
        code = toolchain.setup_place(str(sample_repo), "Lobby", get_default_config())

    assert code == 2
    assert ("rojo", "serve") not in {(c[0], c[1][0]) for c in runner.calls}
