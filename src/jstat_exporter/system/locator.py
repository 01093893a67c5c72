"""
JVM discovery through ``jps``.

``jps`` prints one ``<pid> <main class>`` pair per running JVM. The exporter
samples exactly one of them: the first JVM whose name equals the configured
target, or the first JVM at all when no target is configured. The jps and
jstat tools report themselves as JVMs too and are never selected.
"""

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from ..validation import TargetNotFoundError
from .commands import run_command

logger = logging.getLogger(__name__)

# Names under which jps lists itself and the jstat sampler.
EXCLUDED_NAMES = frozenset({"Jps", "Jstat"})

JPS_TIMEOUT_SECONDS = 30.0


def parse_jps_output(output: str) -> List[Tuple[str, str]]:
    """Parse jps output into (pid, name) pairs.

    Only lines made of exactly two space-separated fields are kept, so
    entries such as ``"1234 -- process information unavailable"`` or a bare
    pid are ignored.
    """
    entries = []
    for line in output.splitlines():
        parts = line.strip().split(" ")
        if len(parts) == 2 and parts[0] and parts[1]:
            entries.append((parts[0], parts[1]))
    return entries


def select_target(entries: Iterable[Tuple[str, str]], name: Optional[str] = None) -> Optional[str]:
    """Pick the pid of the target JVM from parsed jps entries, or None."""
    for pid, entry_name in entries:
        if entry_name in EXCLUDED_NAMES:
            continue
        if not name or entry_name == name:
            return pid
    return None


def locate_target(
    name: Optional[str] = None,
    jps_path: str = "jps",
    runner: Callable[..., Tuple[int, str, str]] = run_command,
) -> str:
    """
    Find the pid of the JVM to sample.

    Runs jps once and waits for it to exit. There is no retry here; callers
    decide how to back off.

    Args:
        name: Main class name reported by jps; None selects the first JVM
        jps_path: Path or name of the jps executable
        runner: Command runner returning (return_code, stdout, stderr)

    Returns:
        The pid as a string

    Raises:
        TargetNotFoundError: If jps could not be run or listed no match
    """
    return_code, stdout, stderr = runner([jps_path], timeout=JPS_TIMEOUT_SECONDS)
    if return_code == -1:
        raise TargetNotFoundError(name, reason=stderr.strip() or "jps could not be run")
    if return_code != 0:
        logger.warning(f"jps exited with code {return_code}: {stderr.strip()}")

    pid = select_target(parse_jps_output(stdout), name)
    if pid is None:
        logger.error(f"No target process: {name or '<any>'}")
        raise TargetNotFoundError(name)

    logger.debug(f"Located target {name or '<any>'} at pid {pid}")
    return pid
