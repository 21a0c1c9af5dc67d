from __future__ import annotations

"""
Name Normalizer.

Maps raw file and directory names onto the identifiers used in the output
tree.
"""

import re

_ACRONYM_RX = re.compile(r"^[A-Z0-9_]+$")
_SEPARATOR_RX = re.compile(r"[^A-Za-z0-9]+")


def normalize(raw_name: str) -> str:
    """
    Convert a raw name into its canonical node identifier.

    All-uppercase names (letters, digits, underscores) are kept verbatim as
    intentional acronyms. Anything else is split on runs of non-alphanumeric
    characters and each segment gets its first character upper-cased, the
    remaining casing untouched. The result is idempotent.

    Examples:
        'my_cool-thing' -> 'MyCoolThing', 'UI' -> 'UI', 'ui' -> 'Ui'

    Args:
        raw_name: File or directory name.

    Returns:
        str: Normalized identifier.
    """
    if _ACRONYM_RX.fullmatch(raw_name):
        return raw_name
    segments = [s for s in _SEPARATOR_RX.split(raw_name) if s]
    return "".join(s[0].upper() + s[1:] for s in segments)
