"""
Pytest configuration and shared fixtures for the jstat exporter test suite.

This module provides common fixtures and fakes for the jps/jstat
subprocesses used across the test modules.
"""

import io
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jstat_exporter.collectors import SampleStore  # noqa: E402
from jstat_exporter.models import ExporterConfig, StatCategory  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Sample data
# ============================================================================

# jstat -gc row: 16 numeric columns, FGC at 14 and FGCT at 15.
GC_HEADER = "S0C S1C S0U S1U EC EU OC OU MC MU CCSC CCSU YGC YGCT FGC FGCT"
GC_ROW = "0.0 1.0 2.0 3.0 4.0 5.0 6.0 7.0 8.0 9.0 10.0 11.0 12.0 13.0 14.0 15.0"

CAPACITY_ROW = (
    "0.0 174592.0 10752.0 512.0 512.0 9728.0 0.0 349696.0 21504.0 21504.0 "
    "0.0 1056768.0 4864.0 0.0 1048576.0 512.0 1 0"
)
OLD_GEN_ROW = "4864.0 4012.5 512.0 430.1 21504.0 812.7 1 0 0.000 0.004"
YOUNG_GEN_ROW = "512.0 512.0 0.0 496.0 15 15 256.0 9728.0 3911.2 1 0.004"


# ============================================================================
# Fakes
# ============================================================================


class FakeProcess:
    """Stands in for subprocess.Popen with canned stdout."""

    def __init__(self, output: str = "", returncode: Optional[int] = None, pid: int = 4321):
        self.stdout = io.StringIO(output)
        self.returncode = returncode
        self.pid = pid
        self.killed = False
        self.waited = False

    def poll(self) -> Optional[int]:
        return self.returncode

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    def wait(self, timeout: Optional[float] = None) -> int:
        self.waited = True
        if self.returncode is None:
            self.returncode = 0
        return self.returncode


class FakePopen:
    """Callable replacing subprocess.Popen; hands out FakeProcess objects in order."""

    def __init__(self, *processes: FakeProcess):
        self.processes = list(processes)
        self.calls: List[List[str]] = []

    def __call__(self, args, **kwargs) -> FakeProcess:
        self.calls.append(list(args))
        return self.processes.pop(0)


class RecordingStore(SampleStore):
    """SampleStore remembering every put in order."""

    def __init__(self):
        super().__init__()
        self.puts: List[Tuple[StatCategory, str]] = []

    def put(self, category: StatCategory, line: str) -> None:
        self.puts.append((category, line))
        super().put(category, line)


def jps_runner(output: str, return_code: int = 0, stderr: str = ""):
    """Command runner returning a fixed jps listing."""
    def runner(args, timeout=None):
        return return_code, output, stderr
    return runner


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def store():
    return SampleStore()


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def exporter_config():
    """Configuration bound to an ephemeral local port."""
    return ExporterConfig(
        listen_host="127.0.0.1",
        listen_port=0,
        target="MyApp",
        retry_delay_seconds=0.01,
    )
