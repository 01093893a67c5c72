"""
Background jstat sampling, one thread per statistic category.

Each SamplePoller runs the loop below until stopped:

1. Locate the target JVM with jps. If it is not running, wait
   ``retry_delay`` seconds and try again.
2. Start ``jstat <flag> <pid> <interval>`` with stdout piped.
   If it cannot be started, go back to step 1 right away.
3. Skip the header row, then store every following row as the latest
   sample of the category.
4. When jstat's output ends (usually because the JVM went away), make sure
   the process is gone and start over at step 1.

Rows are stored as-is. Whether they can be parsed is only checked when
metrics are scraped.
"""

import logging
import subprocess
import threading
from typing import Callable, List, Optional

from ..models.stats import StatCategory
from ..system.locator import locate_target
from ..validation import SubprocessSpawnError, TargetNotFoundError, handle_subprocess_error
from .store import SampleStore

logger = logging.getLogger(__name__)

TERMINATE_TIMEOUT = 5.0


class SamplePoller:
    """
    Keeps the SampleStore entry of one category fed with fresh jstat rows.

    Attributes:
        category: The statistic category sampled by this poller.
        store: Store receiving the latest row.
        jstat_path: Path to the jstat executable.
        interval_ms: Sampling interval handed to jstat, in milliseconds.
        target: jps name of the JVM to sample, None for the first JVM.
        retry_delay: Seconds to wait after the target could not be found.
    """

    def __init__(
        self,
        category: StatCategory,
        store: SampleStore,
        jstat_path: str,
        interval_ms: int,
        target: Optional[str] = None,
        retry_delay: float = 60.0,
        locator: Optional[Callable[[Optional[str]], str]] = None,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ):
        self.category = category
        self.store = store
        self.jstat_path = jstat_path
        self.interval_ms = interval_ms
        self.target = target
        self.retry_delay = retry_delay
        self._locator = locator or locate_target
        self._popen = popen

        self.stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None
        self._proc: Optional[subprocess.Popen] = None
        self._proc_lock = threading.Lock()
        self.restart_count = 0

    def build_command(self, pid: str) -> List[str]:
        """The jstat command line for the given target pid."""
        return [self.jstat_path, self.category.flag, pid, str(self.interval_ms)]

    def start(self) -> None:
        """Start the polling thread."""
        if self.thread and self.thread.is_alive():
            logger.warning(f"Poller for {self.category.value} already running")
            return

        self.stop_event.clear()
        self.thread = threading.Thread(
            target=self.poll_loop,
            name=f"jstat{self.category.flag}",
            daemon=True,
        )
        self.thread.start()
        logger.info(f"Started {self.category.value} poller ({self.category.flag})")

    def stop(self, timeout: float = 5.0) -> None:
        """
        Stop the polling thread and the jstat process it owns.

        Args:
            timeout: Seconds to wait for the thread to finish
        """
        self.stop_event.set()
        self._kill_current()

        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=timeout)
            if self.thread.is_alive():
                logger.warning(f"Poller for {self.category.value} did not stop within timeout")
            else:
                logger.info(f"Poller for {self.category.value} stopped")

    def poll_loop(self) -> None:
        """Run polling sessions until stopped."""
        while not self.stop_event.is_set():
            self.run_once()

    def run_once(self) -> None:
        """One locate / launch / stream / restart session."""
        try:
            pid = self._locator(self.target)
        except TargetNotFoundError as e:
            logger.warning(
                f"{self.category.value}: {e}; retrying in {self.retry_delay:g}s"
            )
            self.stop_event.wait(self.retry_delay)
            return

        command = self.build_command(pid)
        try:
            proc = self._spawn(command)
        except SubprocessSpawnError as e:
            handle_subprocess_error(e, " ".join(command), reraise=False, logger=logger)
            return

        try:
            self._stream(proc)
        finally:
            self._terminate()
            self.restart_count += 1

        if not self.stop_event.is_set():
            logger.info(f"Finished jstat {self.category.flag} for pid {pid}... restart")

    def _spawn(self, command: List[str]) -> subprocess.Popen:
        logger.debug(f"Starting {' '.join(command)}")
        try:
            proc = self._popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            raise SubprocessSpawnError(" ".join(command), e) from e

        with self._proc_lock:
            self._proc = proc
        # stop() may have run between the spawn and the assignment above.
        if self.stop_event.is_set():
            self._kill_current()
        return proc

    def _stream(self, proc: subprocess.Popen) -> None:
        if proc.stdout is None:
            return
        header_skipped = False
        for line in proc.stdout:
            if not header_skipped:
                header_skipped = True
                continue
            self.store.put(self.category, line.rstrip("\r\n"))

    def _kill_current(self) -> None:
        """Kill the running jstat process so the poller thread sees end of output."""
        with self._proc_lock:
            proc = self._proc
        if proc is not None and proc.poll() is None:
            proc.kill()

    def _terminate(self) -> None:
        """Kill and reap the current jstat process; a no-op when there is none."""
        with self._proc_lock:
            proc, self._proc = self._proc, None
        if proc is None:
            return

        if proc.poll() is None:
            proc.kill()
        try:
            proc.wait(timeout=TERMINATE_TIMEOUT)
        except subprocess.TimeoutExpired:
            logger.error(f"jstat process {proc.pid} did not exit after kill")
        if proc.stdout is not None:
            proc.stdout.close()
