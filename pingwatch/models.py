"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (Target, ProbeResult, ...).
- Inputs: Field values.
- Outputs: Dataclass instances.
- Side effects: None.
- Thread-safety: Target carries its own lock; only the classifier mutates it, readers take snapshot().
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TargetState(Enum):
    UNKNOWN = "unknown"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class ProbeFailure(Enum):
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    ERROR = "error"


@dataclass(frozen=True)
class TargetConfig:
    """
    Design (TargetConfig)
    - Purpose: One configured endpoint as supplied at startup.
    - Fields:
        id: stable identifier, also the display/navigation key.
        address: hostname or IP literal to probe.
    """
    id: str
    address: str


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single probe attempt. latency_ms is only ever set when succeeded is True."""
    succeeded: bool
    raw_output: Optional[str] = None
    latency_ms: Optional[float] = None
    failure: Optional[ProbeFailure] = None


@dataclass(frozen=True)
class TargetSnapshot:
    """Immutable copy of a Target's fields, safe to hand to other threads."""
    id: str
    address: str
    state: TargetState
    last_latency_ms: Optional[float]
    last_observed_at: Optional[datetime]
    consecutive_failures: int
    last_changed_at: Optional[datetime]

    @property
    def connected(self) -> bool:
        return self.state is TargetState.CONNECTED


@dataclass(frozen=True)
class Transition:
    target_id: str
    previous: TargetState
    current: TargetState

    @property
    def changed(self) -> bool:
        return self.previous is not self.current


@dataclass
class Target:
    """
    Design (Target)
    - Purpose: One monitored endpoint plus its latest observation.
    - Fields:
        id, address: copied from TargetConfig; never change.
        state: UNKNOWN until the first probe completes.
        last_latency_ms: last successful RTT; kept (stale) across failures.
        last_observed_at: when the most recent probe completed.
        consecutive_failures: failure streak, reset on any success.
        last_changed_at: when state last flipped.
    - Thread-safety: lock guards every mutable field.
    """
    id: str
    address: str
    state: TargetState = TargetState.UNKNOWN
    last_latency_ms: Optional[float] = None
    last_observed_at: Optional[datetime] = None
    consecutive_failures: int = 0
    last_changed_at: Optional[datetime] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def from_config(cls, config: TargetConfig) -> "Target":
        return cls(id=config.id, address=config.address)

    def snapshot(self) -> TargetSnapshot:
        with self.lock:
            return TargetSnapshot(
                id=self.id,
                address=self.address,
                state=self.state,
                last_latency_ms=self.last_latency_ms,
                last_observed_at=self.last_observed_at,
                consecutive_failures=self.consecutive_failures,
                last_changed_at=self.last_changed_at,
            )
