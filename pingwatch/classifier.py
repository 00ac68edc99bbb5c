"""
Design (classifier.py)
- Purpose: Per-target connectivity state machine.
- Transitions (any state -> ...):
    success: CONNECTED, latency set, failure streak reset to 0
    failure: DISCONNECTED, failure streak +1, last latency retained (stale)
  A failure is a timeout, a transport failure, or a successful probe whose output did not parse.
  No hysteresis: a single failure flips CONNECTED to DISCONNECTED.
- Side effects: Mutates the Target under its lock (the only writer of Target fields).
- Thread-safety: Atomic per target; different targets never contend.
"""

from datetime import datetime
from typing import Optional

from .models import Target, TargetState, Transition


def classify(target: Target, latency_ms: Optional[float], observed_at: Optional[datetime] = None) -> Transition:
    """
    Purpose: Apply one completed probe outcome to `target`.
    Inputs: latency_ms (None means failure), observed_at (defaults to now).
    Outputs: Transition(previous, current).
    """
    # "not >= 0" also rejects NaN
    if latency_ms is not None and not latency_ms >= 0:
        raise ValueError(f"latency must be non-negative, got {latency_ms}")
    observed_at = observed_at or datetime.now()

    with target.lock:
        previous = target.state
        if latency_ms is not None:
            target.state = TargetState.CONNECTED
            target.last_latency_ms = latency_ms
            target.consecutive_failures = 0
        else:
            target.state = TargetState.DISCONNECTED
            target.consecutive_failures += 1
        target.last_observed_at = observed_at
        if previous is not target.state:
            target.last_changed_at = observed_at
        return Transition(target_id=target.id, previous=previous, current=target.state)
