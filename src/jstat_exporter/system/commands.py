"""
Command execution utilities.

This module provides functions for running short-lived system commands and
checking that the JDK tools the exporter depends on are available.
"""

import logging
import shutil
import subprocess
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


def run_command(args: List[str], timeout: Optional[float] = None) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Args:
        args: Program and arguments; no shell is involved.
        timeout: Optional limit in seconds for the command to finish.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 if the command could not be executed or timed out.

    Note:
        Uses UTF-8 encoding with error replacement for robust text handling.
    """
    logger.debug(f"Executing command: {' '.join(args)}")
    try:
        process = subprocess.run(
            args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.error(f"Command not found: {args[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{args[0]}'"
    except subprocess.TimeoutExpired as e:
        logger.error(f"Command '{args[0]}' timed out after {timeout}s: {e}")
        return -1, "", f"Error: Command '{args[0]}' timed out"
    except OSError as e:
        logger.error(f"Could not execute '{args[0]}': {type(e).__name__}: {e}", exc_info=True)
        return -1, "", f"An unexpected error occurred: {e}"


def check_tool_installed(tool: str) -> bool:
    """Check if a command is available, either on PATH or as a given path.

    Returns:
        True if the tool can be resolved, False otherwise.
    """
    return shutil.which(tool) is not None
