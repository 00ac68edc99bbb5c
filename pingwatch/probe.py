"""
Design (probe.py)
- Purpose: Run one ping (single echo round trip) against a target, bounded by a timeout.
- Inputs: address (hostname, IP literal, or URL whose host is pinged), timeout in seconds.
- Outputs: ProbeResult (raw output on success; latency is left to the parser).
- Side effects: Spawns exactly one 'ping' subprocess per call. subprocess.run kills and
  reaps the child when the timeout expires, so no process outlives the call.
- Thread-safety: Stateless; safe to call from any thread.
"""

import ipaddress
import logging
import math
import os
import platform
import re
import subprocess
from typing import Callable, List, Optional
from urllib.parse import urlsplit

from .config import PING_TIMEOUT_MS
from .errors import InvalidAddressError
from .models import ProbeFailure, ProbeResult

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"(?!-)[A-Za-z0-9-]{1,63}(?<!-)")


def normalize_address(address: str) -> str:
    """
    Purpose: Reduce a configured address to a bare host safe to pass to ping.
    Inputs: "10.0.0.1", "router.example", "https://svc.example:8443/health", "[::1]"
    Outputs: The host part ("10.0.0.1", "router.example", "svc.example", "::1").
    Raises: InvalidAddressError if the host is neither an IP literal nor an RFC 1123 hostname.
    """
    if not isinstance(address, str):
        raise InvalidAddressError(repr(address))
    host = address.strip()
    if "://" in host:
        try:
            host = urlsplit(host).hostname or ""
        except ValueError:
            raise InvalidAddressError(address) from None
    host = host.strip("[]")
    if not host or host.startswith("-"):
        raise InvalidAddressError(address)

    try:
        return str(ipaddress.ip_address(host))
    except ValueError:
        pass

    hostname = host[:-1] if host.endswith(".") else host
    labels = hostname.split(".")
    if len(hostname) > 253 or not all(_LABEL_RE.fullmatch(label) for label in labels):
        raise InvalidAddressError(address)
    # all-numeric names are malformed IPv4 literals (999.1.1.1, 10.1.1), not hostnames
    if all(label.isdigit() for label in labels):
        raise InvalidAddressError(address)
    return hostname


def build_ping_command(host: str, timeout: float, system: Optional[str] = None) -> List[str]:
    """Single-echo ping argv for the current OS; the per-reply wait matches the timeout."""
    system = (system or platform.system()).lower()
    if system == "windows":
        return ["ping", "-n", "1", "-w", str(max(1, int(timeout * 1000))), host]
    if system == "darwin":
        # macOS -W is in milliseconds
        return ["ping", "-c", "1", "-W", str(max(1, int(timeout * 1000))), host]
    return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout))), host]


class ProbeExecutor:
    """
    Design (ProbeExecutor)
    - Purpose: Probe capability handed to the scheduler.
    - State:
        default_timeout: seconds used when probe() gets no explicit timeout.
        _runner: subprocess.run or a test double with the same signature.
        _system: platform override (tests), else platform.system().
    """

    def __init__(
        self,
        default_timeout: float = PING_TIMEOUT_MS / 1000.0,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        system: Optional[str] = None,
    ) -> None:
        self.default_timeout = default_timeout
        self._runner = runner
        self._system = system

    def probe(self, address: str, timeout: Optional[float] = None) -> ProbeResult:
        """
        Purpose: Issue one echo against `address`.
        Outputs:
            succeeded=True, raw_output=stdout        on ping exit code 0
            succeeded=False, failure=TIMEOUT         when the hard timeout expired
            succeeded=False, failure=UNREACHABLE     on nonzero exit (no reply), or on Windows
                                                     exit code 0 without "TTL=" (a router's
                                                     "Destination host unreachable")
            succeeded=False, failure=ERROR           when ping could not be started
        Raises: InvalidAddressError for an address that fails validation.
        """
        timeout = self.default_timeout if timeout is None else timeout
        host = normalize_address(address)
        system = (self._system or platform.system()).lower()
        cmd = build_ping_command(host, timeout, system)
        creationflags = subprocess.CREATE_NO_WINDOW if os.name == "nt" else 0

        try:
            result = self._runner(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                creationflags=creationflags,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("ping %s exceeded %.2fs", host, timeout)
            return ProbeResult(succeeded=False, failure=ProbeFailure.TIMEOUT)
        except OSError as e:
            # FileNotFoundError (no ping binary) included
            logger.error("could not run ping for %s: %s", host, e)
            return ProbeResult(succeeded=False, failure=ProbeFailure.ERROR)

        if result.returncode != 0 or (system == "windows" and "TTL=" not in (result.stdout or "")):
            return ProbeResult(succeeded=False, raw_output=result.stdout, failure=ProbeFailure.UNREACHABLE)
        return ProbeResult(succeeded=True, raw_output=result.stdout)

