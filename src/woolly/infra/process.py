from __future__ import annotations

"""
External Tool Runner.

Thin wrapper over subprocess used by the setup/build/serve commands. Child
processes inherit the terminal; only their exit status is interpreted.
"""

import logging
import subprocess
from typing import List

logger = logging.getLogger(__name__)

# Shell convention for "command not found"
TOOL_NOT_FOUND = 127


def run_tool(cmd: str, args: List[str], cwd: str) -> int:
    """
    Run an external tool to completion.

    Args:
        cmd: Executable name.
        args: Arguments passed to the executable.
        cwd: Working directory (the repository root).

    Returns:
        int: The tool's exit status, or 127 if it is not installed.
    """
    logger.info(f"-> {cmd} {' '.join(args)}")
    try:
        completed = subprocess.run([cmd, *args], cwd=cwd, check=False)
    except FileNotFoundError:
        logger.error(f"'{cmd}' was not found on PATH.")
        return TOOL_NOT_FOUND
    return completed.returncode
