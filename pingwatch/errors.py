"""
Design (errors.py)
- Purpose: Exception hierarchy shared by the monitoring core.
- Thread-safety: N/A.
"""

from enum import Enum


class PingwatchError(Exception):
    """Base class for all pingwatch errors."""


class ConfigError(PingwatchError):
    """Startup configuration is unusable (empty target list, bad file, duplicate ids)."""


class InvalidAddressError(ConfigError):
    """A target address is not a literal IP or a valid hostname."""

    def __init__(self, address: str):
        super().__init__(f"Invalid target address: {address!r}")
        self.address = address


class ParseError(Enum):
    NO_LATENCY_MARKER = "no_latency_marker"
    MALFORMED_VALUE = "malformed_value"


class LatencyParseError(PingwatchError, ValueError):
    """
    Raised by the latency parser when diagnostic text carries no usable RTT.
    `reason` tells a missing marker apart from a marker followed by garbage.
    """

    def __init__(self, reason: ParseError, detail: str = ""):
        message = reason.value if not detail else f"{reason.value}: {detail}"
        super().__init__(message)
        self.reason = reason


class PublishError(PingwatchError):
    """The external variable store rejected or could not accept a write."""

    def __init__(self, target_id: str, message: str):
        super().__init__(f"Publish failed for {target_id}: {message}")
        self.target_id = target_id
