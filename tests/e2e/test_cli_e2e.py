from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and file system side effects.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "woolly" / "main.py"


def run_cli(args: List[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so that the package is
    resolvable without being installed, and disables editor launchers.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["WOOLLY_LANG"] = "en"

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_cli_gen_happy_path(sample_repo: Path) -> None:
    """TC-01: gen writes a place manifest and exits 0."""
    result = run_cli(["gen", "Lobby"], cwd=sample_repo)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    manifest = sample_repo / "places" / "Lobby.project.json"
    doc = json.loads(manifest.read_text(encoding="utf-8"))
    assert doc["name"] == "woolly-Lobby"
    assert doc["tree"]["$className"] == "DataModel"


def test_cli_gen_is_repeatable(sample_repo: Path) -> None:
    """TC-02: Regenerating an unchanged tree leaves the bytes identical."""
    run_cli(["gen", "--single"], cwd=sample_repo)
    first = (sample_repo / "default.project.json").read_bytes()
    run_cli(["--repo", str(sample_repo), "gen", "--single"], cwd=sample_repo.parent)
    assert (sample_repo / "default.project.json").read_bytes() == first


def test_cli_collision_exit_code(tmp_path: Path, write_files) -> None:
    """TC-03: A system collision exits 1, names the clash and writes nothing."""
    write_files(tmp_path, [
        "src/_systems/sysX/server/services/C.luau",
        "src/_systems/sysY/server/services/C.luau",
    ])

    result = run_cli(["gen"], cwd=tmp_path)

    assert result.returncode == 1
    assert "'C'" in result.stderr
    assert not (tmp_path / "places").exists()


def test_cli_usage_errors(tmp_path: Path) -> None:
    """TC-04: Missing commands and bad place names exit 2."""
    assert run_cli([], cwd=tmp_path).returncode == 2
    assert run_cli(["gen", "no/slash"], cwd=tmp_path).returncode == 2


def test_cli_create_and_switch(tmp_path: Path) -> None:
    """TC-05: create scaffolds without opening an editor; switch persists the place."""
    result = run_cli(["create", "system", "Shop", "--no-open", "--no-gen"], cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert (tmp_path / "src" / "_systems" / "Shop" / "monetisation" / "DevProducts.luau").is_file()

    assert run_cli(["switch", "Lobby"], cwd=tmp_path).returncode == 0
    cfg = json.loads((tmp_path / ".woollyrc.json").read_text(encoding="utf-8"))
    assert cfg["defaultPlace"] == "Lobby"

    listing = run_cli(["list"], cwd=tmp_path)
    assert "Lobby (default)" in listing.stdout
    assert "Shop" in listing.stdout


def test_cli_json_dry_run(sample_repo: Path) -> None:
    """TC-06: JSON dry runs print the result and keep the disk clean."""
    result = run_cli(["gen", "Lobby", "--dry-run", "--json"], cwd=sample_repo)

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["written"] is False
    assert not (sample_repo / "places").exists()
