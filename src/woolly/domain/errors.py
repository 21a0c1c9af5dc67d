from __future__ import annotations

"""
Domain Exception Hierarchy.

Fatal conditions raised by the tree-generation core and the scaffolding
services. Every error aborts the current run before anything is persisted.
"""


class WoollyError(Exception):
    """Base class for every error raised by the woolly toolchain."""


class UsageError(WoollyError):
    """Malformed invocation: invalid place name, missing argument, unknown kind."""


class CollisionError(WoollyError):
    """
    Two independently authored sources define the same name in one container.

    Attributes:
        location: Dotted location of the destination container.
        name: The conflicting child name.
    """

    label = "Name collision merging systems"

    def __init__(self, location: str, name: str):
        self.location = location
        self.name = name
        where = location or "<root>"
        super().__init__(f"{self.label}: '{name}' already exists in {where}")


class AssetCollisionError(CollisionError):
    """Collision between two binary assets mirrored into the same folder."""

    label = "Asset name collision"
