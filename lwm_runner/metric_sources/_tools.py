"""Subprocess helper shared by the CLI-backed sensors."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional, Sequence


logger = logging.getLogger(__name__)

DEFAULT_TOOL_TIMEOUT = 10.0


def run_tool(
    argv: Sequence[str], timeout: float = DEFAULT_TOOL_TIMEOUT
) -> Optional[str]:
    """Run an external utility and return its stdout, or None on any failure.

    The C locale keeps decimal points stable for parsing.
    """
    cmd = list(argv)
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=True,
            timeout=timeout,
            env={**os.environ, "LC_ALL": "C"},
        )
    except subprocess.TimeoutExpired:
        logger.warning("Command '%s' timed out after %ss", " ".join(cmd), timeout)
        return None
    except (subprocess.CalledProcessError, OSError) as e:
        logger.debug("Command '%s' failed: %s", " ".join(cmd), e)
        return None
    return result.stdout
