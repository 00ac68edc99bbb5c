"""
Design (parser.py)
- Purpose: Turn ping diagnostic text into a round-trip time in milliseconds.
- Inputs: raw probe output (str).
- Outputs: float RTT, or LatencyParseError carrying a ParseError reason.
- Side effects: None (pure).
- Thread-safety: Stateless; safe to call from any thread.
"""

import re

from .config import LATENCY_BOUND_MARKER, LATENCY_MARKER, LATENCY_UNIT
from .errors import LatencyParseError, ParseError

_DECIMAL_RE = re.compile(r"\d+(?:\.\d+)?")


def parse_latency(
    raw_output: str,
    marker: str = LATENCY_MARKER,
    unit: str = LATENCY_UNIT,
    bound_marker: str = LATENCY_BOUND_MARKER,
) -> float:
    """
    Purpose: Extract the RTT that follows `marker` and precedes `unit`.
    Inputs: raw_output, e.g. "64 bytes from x: icmp_seq=1 ttl=57 time=6.57 ms"
    Outputs: 6.57. When only `bound_marker` is present ("time<1ms" on Windows),
             the bound itself (1.0) is returned.
    Raises: LatencyParseError(NO_LATENCY_MARKER) when neither marker is present,
            LatencyParseError(MALFORMED_VALUE) when the text between marker and unit
            is not a non-negative decimal (or no unit follows).
    """
    if not raw_output:
        raise LatencyParseError(ParseError.NO_LATENCY_MARKER, "empty output")

    found = marker
    start = raw_output.find(marker)
    if start < 0 and bound_marker:
        found = bound_marker
        start = raw_output.find(bound_marker)
    if start < 0:
        raise LatencyParseError(ParseError.NO_LATENCY_MARKER)
    start += len(found)

    end = raw_output.find(unit, start)
    if end < 0:
        raise LatencyParseError(ParseError.MALFORMED_VALUE, f"no {unit!r} after {found!r}")

    candidate = raw_output[start:end].strip()
    if not _DECIMAL_RE.fullmatch(candidate):
        raise LatencyParseError(ParseError.MALFORMED_VALUE, repr(candidate))
    return float(candidate)
