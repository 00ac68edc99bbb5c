"""
Shared test configuration.
Puts the project root on sys.path and provides small fakes for the probe capability.
"""

import subprocess
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from pingwatch.models import ProbeFailure, ProbeResult, TargetConfig  # noqa: E402

LINUX_REPLY = (
    "PING a.example (93.184.216.34) 56(84) bytes of data.\n"
    "64 bytes from 93.184.216.34: icmp_seq=1 ttl=57 time=6.57 ms\n"
    "\n"
    "--- a.example ping statistics ---\n"
    "1 packets transmitted, 1 received, 0% packet loss, time 0ms\n"
)


class FakeExecutor:
    """Probe capability returning canned ProbeResults per address; records every call."""

    def __init__(self, results):
        self.results = dict(results)
        self.calls = []

    def probe(self, address, timeout=None):
        self.calls.append((address, timeout))
        return self.results[address]


def ok(raw=LINUX_REPLY):
    return ProbeResult(succeeded=True, raw_output=raw)


def timed_out():
    return ProbeResult(succeeded=False, failure=ProbeFailure.TIMEOUT)


def completed(stdout="", returncode=0):
    return subprocess.CompletedProcess(args=["ping"], returncode=returncode, stdout=stdout, stderr="")


@pytest.fixture
def two_targets():
    return [TargetConfig("a.example", "a.example"), TargetConfig("b.example", "b.example")]
