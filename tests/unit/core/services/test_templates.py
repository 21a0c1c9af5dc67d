from __future__ import annotations

"""
Unit tests for scaffold templates.
"""

import pytest

from woolly.core.services.templates import TEMPLATES, render


@pytest.mark.parametrize("key", sorted(k for k in TEMPLATES if k != "monetisation"))
def test_every_template_renders_with_name(key: str) -> None:
    """TC-01: All module templates substitute the name and keep Luau braces."""
    text = render(key, "Widget")

    assert text.startswith("--!strict\n")
    assert "Widget" in text
    assert "$" not in text


def test_monetisation_needs_field() -> None:
    """TC-02: The monetisation stub requires its definitions field."""
    with pytest.raises(KeyError):
        render("monetisation", "DevProducts")
    assert "\tdevProducts = {" in render("monetisation", "DevProducts", Field="devProducts")


def test_unknown_template() -> None:
    """TC-03: Unknown template keys raise KeyError."""
    with pytest.raises(KeyError):
        render("nope", "X")
