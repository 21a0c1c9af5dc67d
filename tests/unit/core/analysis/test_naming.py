from __future__ import annotations

"""
Unit tests for the Name Normalizer.
"""

import pytest

from woolly.core.analysis.naming import normalize


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("my_cool-thing", "MyCoolThing"),
        ("UI", "UI"),
        ("ui", "Ui"),
        ("game_data", "GameData"),
        ("assets", "Assets"),
        ("HTTP_CLIENT", "HTTP_CLIENT"),
        ("V2", "V2"),
        ("camelCase", "CamelCase"),
        ("already Pascal", "AlreadyPascal"),
        ("--weird__name..", "WeirdName"),
        ("x", "X"),
    ],
)
def test_normalize_examples(raw: str, expected: str) -> None:
    """TC-01: Known inputs map to their canonical identifiers."""
    assert normalize(raw) == expected


@pytest.mark.parametrize("raw", ["my_cool-thing", "ui", "UI", "iOS-helpers", "snake_case_dir"])
def test_normalize_is_idempotent(raw: str) -> None:
    """TC-02: Normalizing twice equals normalizing once."""
    once = normalize(raw)
    assert normalize(once) == once


def test_inner_casing_preserved() -> None:
    """TC-03: Only the first character of each segment changes."""
    assert normalize("iOS-helpers") == "IOSHelpers"
    assert normalize("xmlHTTP_request") == "XmlHTTPRequest"


def test_separator_only_name_yields_empty() -> None:
    """TC-04: A name made only of separators has no segments."""
    assert normalize("-_-") == ""
