from __future__ import annotations

"""
Internationalization (i18n) Utility.

Loads CLI messages from the JSON locale files shipped with the package and
resolves them by dot-notation key with optional `str.format` interpolation.
The active locale comes from WOOLLY_LANG (default 'en').
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"
LOCALE_ENV_VAR = "WOOLLY_LANG"
LOCALES_REL_PATH = os.path.join("..", "interface", "locales")


class I18n:
    """
    Message catalog for one locale.

    Unknown keys resolve to the key itself so that a missing translation
    never breaks a command.
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self._locale = locale
        self._messages: Dict[str, Any] = {}
        self.is_loaded = False

        base_dir = os.path.dirname(os.path.abspath(__file__))
        self._locales_path = os.path.abspath(os.path.join(base_dir, LOCALES_REL_PATH))

        self.load_locale(locale)

    @property
    def locale(self) -> str:
        return self._locale

    def load_locale(self, locale: str) -> None:
        """
        Replace the active catalog with `<locale>.json`.

        Falls back to the default locale when the requested one is missing.
        """
        file_path = os.path.join(self._locales_path, f"{locale}.json")

        if not os.path.exists(file_path):
            logger.debug(f"I18n: no catalog for '{locale}' at '{file_path}'.")
            if locale != DEFAULT_LOCALE:
                self.load_locale(DEFAULT_LOCALE)
                return
            self._messages = {}
            self.is_loaded = False
            return

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                self._messages = json.load(f)
            self._locale = locale
            self.is_loaded = True
        except (OSError, ValueError) as e:
            logger.error(f"I18n: corrupted locale file {file_path}: {e}")
            self._messages = {}
            self.is_loaded = False

    def t(self, key: str, **kwargs: Any) -> str:
        """
        Resolve `key` (e.g. 'cli.gen.wrote') and interpolate `kwargs`.

        Returns:
            str: The formatted message, or `key` if it cannot be resolved.
        """
        current: Any = self._messages
        for part in key.split("."):
            if not isinstance(current, dict):
                return key
            current = current.get(part)

        if not isinstance(current, str):
            return key
        if not kwargs:
            return current
        try:
            return current.format(**kwargs)
        except (KeyError, IndexError, ValueError) as e:
            logger.debug(f"I18n: formatting failed for '{key}': {e}")
            return current


i18n = I18n(os.environ.get(LOCALE_ENV_VAR, DEFAULT_LOCALE))
