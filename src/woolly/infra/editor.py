from __future__ import annotations

"""
Editor Launcher.

Opens a file for the developer after scaffolding. Prefers VS Code when it is
on PATH, then $VISUAL/$EDITOR, then the host's default file handler.
"""

import logging
import os
import platform
import shlex
import shutil
import subprocess
from typing import List

logger = logging.getLogger(__name__)


def open_in_editor(path: str) -> bool:
    """
    Launch an editor on `path` without waiting for it.

    Args:
        path: File to open.

    Returns:
        bool: True if a launcher was started.
    """
    if not os.path.exists(path):
        logger.warning(f"Attempted to open non-existent path: {path}")
        return False

    for cmd in _candidate_commands(path):
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
            logger.debug(f"Opened {path} with '{cmd[0]}'")
            return True
        except OSError as e:
            logger.debug(f"Launcher '{cmd[0]}' failed: {e}")

    if platform.system() == "Windows":
        try:
            os.startfile(path)  # type: ignore[attr-defined]
            return True
        except OSError as e:
            logger.error(f"Failed to open {path}: {e}")
    return False


def _candidate_commands(path: str) -> List[List[str]]:
    """Ordered launcher command lines for the current host."""
    commands: List[List[str]] = []

    if shutil.which("code"):
        commands.append(["code", "-g", f"{path}:1"])

    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if editor:
        commands.append(shlex.split(editor) + [path])

    sys_name = platform.system()
    if sys_name == "Darwin":
        commands.append(["open", path])
    elif sys_name != "Windows":
        commands.append(["xdg-open", path])

    return commands
