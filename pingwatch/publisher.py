"""
Design (publisher.py)
- Purpose: Expose each target's latest observation as three read-only variables
  (ping_state, ping_time, serviceURL) in an external variable store, with a data-quality flag.
- Inputs: Target or TargetSnapshot.
- Outputs: One atomic field-group write per target.
- Side effects: Writes to the store; the store notifies subscribers only on actual change.
- Thread-safety: ResultPublisher is stateless; InMemoryVariableStore serializes group writes.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Union

from .errors import PublishError
from .models import Target, TargetSnapshot, TargetState

logger = logging.getLogger(__name__)

PING_STATE = "ping_state"
PING_TIME = "ping_time"
SERVICE_URL = "serviceURL"


class Quality(Enum):
    GOOD = "Good"
    UNCERTAIN = "Uncertain"
    BAD = "Bad"


@dataclass(frozen=True)
class DataValue:
    value: Any
    quality: Quality
    source_time: Optional[datetime] = None


class VariableStore(Protocol):
    def write_group(self, node_id: str, fields: Mapping[str, DataValue]) -> None:
        """Write all fields for one node atomically; raise on failure."""
        ...


Subscriber = Callable[[str, Dict[str, DataValue]], None]


class InMemoryVariableStore:
    """
    Design (InMemoryVariableStore)
    - Purpose: Reference VariableStore keeping {node_id -> {field -> DataValue}}.
    - Change notification fires only when a group differs from what is stored,
      so repeated identical writes are invisible to subscribers.
    - Thread-safety: _lock makes each group write atomic with respect to readers.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._nodes: Dict[str, Dict[str, DataValue]] = {}
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        with self._lock:
            self._subscribers.append(callback)

    def write_group(self, node_id: str, fields: Mapping[str, DataValue]) -> None:
        new = dict(fields)
        with self._lock:
            if self._nodes.get(node_id) == new:
                return
            self._nodes[node_id] = new
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(node_id, dict(new))

    def read(self, node_id: str) -> Dict[str, DataValue]:
        with self._lock:
            return dict(self._nodes.get(node_id, {}))

    def values(self, node_id: str) -> Dict[str, Any]:
        """Plain {field -> value} view without quality annotations."""
        return {name: dv.value for name, dv in self.read(node_id).items()}


def quality_for(snapshot: TargetSnapshot) -> Quality:
    if snapshot.state is TargetState.CONNECTED:
        return Quality.GOOD
    if snapshot.state is TargetState.DISCONNECTED and snapshot.last_latency_ms is not None:
        return Quality.UNCERTAIN
    return Quality.BAD


class ResultPublisher:
    """Writes a target's field group into the store it was constructed with."""

    def __init__(self, store: VariableStore) -> None:
        self.store = store

    def publish(self, target: Union[Target, TargetSnapshot]) -> None:
        """
        Purpose: Idempotently publish ping_state / ping_time / serviceURL for one target.
        Notes: ping_time keeps the last successful RTT across failures (stale-but-valid),
               flagged UNCERTAIN; it is None only if the target never connected.
        Raises: PublishError wrapping any store failure.
        """
        snapshot = target.snapshot() if isinstance(target, Target) else target
        quality = quality_for(snapshot)
        fields = {
            PING_STATE: DataValue(snapshot.connected, quality, snapshot.last_observed_at),
            PING_TIME: DataValue(snapshot.last_latency_ms, quality, snapshot.last_observed_at),
            SERVICE_URL: DataValue(snapshot.address, Quality.GOOD),
        }
        try:
            self.store.write_group(snapshot.id, fields)
        except PublishError:
            raise
        except Exception as e:
            raise PublishError(snapshot.id, str(e)) from e
        logger.debug("published %s state=%s time=%s quality=%s",
                     snapshot.id, snapshot.connected, snapshot.last_latency_ms, quality.value)
