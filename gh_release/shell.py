# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Subprocess execution for git and npm commands."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def run(cmd: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run a command and capture its output.

    The return code is not checked; callers decide whether a failure is fatal.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        The completed process with text stdout and stderr.
    """
    logger.debug("Running '%s' in %s", " ".join(cmd), cwd)
    result = subprocess.run(cmd, cwd=str(cwd), capture_output=True, text=True)
    if result.returncode != 0:
        logger.debug("'%s' exited with %d", " ".join(cmd), result.returncode)
    return result
