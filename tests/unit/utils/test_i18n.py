from __future__ import annotations

"""
Unit tests for Internationalization (i18n) consistency.

Ensures that all locale files (en.json, es.json) share the exact
same key structure and dot-notation resolution works as expected.
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, Set

from woolly.utils.i18n import I18n

LOCALES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "src", "woolly", "interface", "locales")
)


def _get_flat_keys(d: Dict[str, Any], prefix: str = "") -> Set[str]:
    """Helper to flatten nested dictionary keys into dot-notation sets."""
    keys = set()
    for k, v in d.items():
        new_key = f"{prefix}.{k}" if prefix else k
        if isinstance(v, dict):
            keys.update(_get_flat_keys(v, new_key))
        else:
            keys.add(new_key)
    return keys


def _load(lang: str) -> Dict[str, Any]:
    with open(os.path.join(LOCALES_DIR, f"{lang}.json"), "r", encoding="utf-8") as f:
        return json.load(f)


def test_locales_key_parity() -> None:
    """TC-01: Verify that EN and ES locales have identical keys."""
    en_keys = _get_flat_keys(_load("en"))
    es_keys = _get_flat_keys(_load("es"))

    assert not en_keys - es_keys, f"Keys present in EN but missing in ES: {en_keys - es_keys}"
    assert not es_keys - en_keys, f"Keys present in ES but missing in EN: {es_keys - en_keys}"


def test_placeholders_match_across_locales() -> None:
    """TC-02: Every translation uses the same interpolation fields as English."""
    en, es = _load("en"), _load("es")
    field_rx = re.compile(r"\{(\w+)\}")

    def lookup(d: Dict[str, Any], key: str) -> str:
        for part in key.split("."):
            d = d[part]
        return d  # type: ignore[return-value]

    for key in _get_flat_keys(en):
        assert set(field_rx.findall(lookup(en, key))) == set(field_rx.findall(lookup(es, key))), key


def test_i18n_resolution_logic(tmp_path: Path) -> None:
    """TC-03: Verify dot-notation resolution, interpolation and fallbacks."""
    dummy_content = {"test": {"hello": "Hello {name}!", "simple": "Simple Text"}}
    (tmp_path / "test_locale.json").write_text(json.dumps(dummy_content), encoding="utf-8")

    service = I18n("en")
    service._locales_path = str(tmp_path)
    service.load_locale("test_locale")

    assert service.is_loaded is True
    assert service.t("test.simple") == "Simple Text"
    assert service.t("test.hello", name="World") == "Hello World!"
    assert service.t("test.hello") == "Hello {name}!"
    assert service.t("test.hello", other="x") == "Hello {name}!"
    assert service.t("missing.key") == "missing.key"
    assert service.t("test.simple.deeper") == "test.simple.deeper"


def test_unknown_locale_falls_back_to_english() -> None:
    """TC-04: Requesting a locale without a catalog loads the default one."""
    service = I18n("xx")
    assert service.locale == "en"
    assert service.t("cli.status.default_place", place="Lobby") == "Default place -> Lobby"
