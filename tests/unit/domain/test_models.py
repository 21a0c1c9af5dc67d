from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. Data integrity of GenerationResult factories (Success/Error).
2. Immutability of frozen dataclasses.
3. Exception messages of the collision hierarchy.
"""

from dataclasses import FrozenInstanceError

import pytest

from woolly.domain.errors import AssetCollisionError, CollisionError, UsageError, WoollyError
from woolly.domain.manifest_models import (
    GenerationResult,
    MissingInputWarning,
    create_error_result,
    create_success_result,
)


def test_create_success_result_populates_fields() -> None:
    """TC-01: The success factory copies every field and defaults the optional ones."""
    warning = MissingInputWarning(section="ReplicatedStorage.Shared.Config", path="/r/src/shared/config")
    result = create_success_result(
        place="Lobby",
        project_name="woolly-Lobby",
        output_path="/r/places/Lobby.project.json",
        systems=["Shop"],
        node_count=12,
        missing_inputs=[warning],
        summary_extra={"bytes": 10},
    )

    assert isinstance(result, GenerationResult)
    assert result.ok is True
    assert result.error == ""
    assert result.error_type == ""
    assert result.written is True
    assert result.systems == ["Shop"]
    assert result.missing_inputs == [warning]
    assert result.tree_lines == []
    assert result.summary == {"bytes": 10}


def test_create_error_result_records_exception_type() -> None:
    """TC-02: The error factory keeps the message and the exception class name."""
    err = CollisionError("ServerScriptService.Server.Services", "C")
    result = create_error_result(err, place="Lobby", output_path="/r/places/Lobby.project.json")

    assert result.ok is False
    assert result.error_type == "CollisionError"
    assert "'C'" in result.error
    assert result.written is False
    assert result.systems == []


def test_results_are_frozen() -> None:
    """TC-03: Results and warnings cannot be mutated after creation."""
    result = create_error_result(UsageError("bad"))
    with pytest.raises(FrozenInstanceError):
        result.ok = True  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        MissingInputWarning("a", "b").section = "c"  # type: ignore[misc]


def test_collision_error_messages() -> None:
    """TC-04: Collision errors name the destination and the conflicting name."""
    err = CollisionError("ServerScriptService.Server.Services", "C")
    assert str(err) == (
        "Name collision merging systems: 'C' already exists in ServerScriptService.Server.Services"
    )

    asset = AssetCollisionError("", "Hud")
    assert isinstance(asset, CollisionError)
    assert isinstance(asset, WoollyError)
    assert str(asset) == "Asset name collision: 'Hud' already exists in <root>"
