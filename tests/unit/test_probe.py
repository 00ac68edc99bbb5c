"""
Unit tests for the probe executor and address validation.
subprocess.run is replaced by a fake runner; no real ping is spawned.
"""

import subprocess

import pytest

from conftest import LINUX_REPLY, completed
from pingwatch.errors import ConfigError, InvalidAddressError
from pingwatch.models import ProbeFailure
from pingwatch.parser import parse_latency
from pingwatch.probe import ProbeExecutor, build_ping_command, normalize_address


class RecordingRunner:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.mark.parametrize(
    "address, expected",
    [
        ("10.0.0.1", "10.0.0.1"),
        ("  router.example  ", "router.example"),
        ("router.example.", "router.example"),
        ("https://svc.example:8443/health", "svc.example"),
        ("[::1]", "::1"),
        ("2001:db8::1", "2001:db8::1"),
    ],
)
def test_normalize_address_accepts(address: str, expected: str) -> None:
    assert normalize_address(address) == expected


@pytest.mark.parametrize(
    "address",
    ["", "   ", "-c 100 evil", "999.1.1.1", "10.1.1", "256.256.256.256", "host;rm -rf /", "a..b", "bad_host.example", "x" * 64 + ".example", "http://"],
)
def test_normalize_address_rejects(address: str) -> None:
    with pytest.raises(InvalidAddressError):
        normalize_address(address)


def test_invalid_address_is_a_config_error() -> None:
    assert issubclass(InvalidAddressError, ConfigError)


def test_linux_command_uses_whole_seconds() -> None:
    assert build_ping_command("h", 1.5, "Linux") == ["ping", "-c", "1", "-W", "2", "h"]


def test_windows_command_uses_milliseconds() -> None:
    assert build_ping_command("h", 1.5, "Windows") == ["ping", "-n", "1", "-w", "1500", "h"]


def test_darwin_command_uses_milliseconds() -> None:
    assert build_ping_command("h", 0.25, "Darwin") == ["ping", "-c", "1", "-W", "250", "h"]


def test_success_returns_raw_output_without_latency() -> None:
    runner = RecordingRunner(result=completed(LINUX_REPLY))
    result = ProbeExecutor(runner=runner, system="Linux").probe("a.example", 1.0)

    assert result.succeeded
    assert result.raw_output == LINUX_REPLY
    assert result.latency_ms is None
    assert result.failure is None

    cmd, kwargs = runner.calls[0]
    assert cmd == ["ping", "-c", "1", "-W", "1", "a.example"]
    assert kwargs["timeout"] == 1.0
    assert "shell" not in kwargs


def test_timeout_is_a_failure() -> None:
    runner = RecordingRunner(exc=subprocess.TimeoutExpired(cmd="ping", timeout=1.0))
    result = ProbeExecutor(runner=runner).probe("a.example", 1.0)

    assert not result.succeeded
    assert result.failure is ProbeFailure.TIMEOUT
    assert result.latency_ms is None


def test_nonzero_exit_is_unreachable() -> None:
    runner = RecordingRunner(result=completed("Destination Host Unreachable", returncode=1))
    result = ProbeExecutor(runner=runner, system="Linux").probe("10.0.0.9", 1.0)

    assert not result.succeeded
    assert result.failure is ProbeFailure.UNREACHABLE


def test_missing_binary_is_an_error() -> None:
    runner = RecordingRunner(exc=FileNotFoundError("ping"))
    result = ProbeExecutor(runner=runner).probe("10.0.0.9", 1.0)

    assert result.failure is ProbeFailure.ERROR


def test_default_timeout_used_when_not_given() -> None:
    runner = RecordingRunner(result=completed(LINUX_REPLY))
    ProbeExecutor(default_timeout=0.5, runner=runner, system="Linux").probe("a.example")

    assert runner.calls[0][1]["timeout"] == 0.5


def test_invalid_address_never_spawns() -> None:
    runner = RecordingRunner(result=completed(LINUX_REPLY))
    with pytest.raises(InvalidAddressError):
        ProbeExecutor(runner=runner).probe("-f flood")
    assert runner.calls == []


def test_numeric_hostnames_still_accepted_when_not_all_numeric() -> None:
    assert normalize_address("10.example") == "10.example"


def test_windows_sub_millisecond_reply_succeeds() -> None:
    runner = RecordingRunner(result=completed("Reply from 192.168.1.1: bytes=32 time<1ms TTL=64\n"))
    result = ProbeExecutor(runner=runner, system="Windows").probe("192.168.1.1", 1.0)

    assert result.succeeded
    assert parse_latency(result.raw_output) == 1.0
    assert runner.calls[0][0] == ["ping", "-n", "1", "-w", "1000", "192.168.1.1"]


def test_windows_router_unreachable_with_exit_zero_is_unreachable() -> None:
    runner = RecordingRunner(result=completed("Reply from 10.0.0.254: Destination host unreachable.\n"))
    result = ProbeExecutor(runner=runner, system="Windows").probe("10.0.0.9", 1.0)

    assert not result.succeeded
    assert result.failure is ProbeFailure.UNREACHABLE


def test_ttl_check_only_applies_on_windows() -> None:
    runner = RecordingRunner(result=completed(LINUX_REPLY))
    assert ProbeExecutor(runner=runner, system="Linux").probe("a.example", 1.0).succeeded
