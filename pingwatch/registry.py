"""
Design (registry.py)
- Purpose: Hold the fixed, ordered set of monitored targets and the "currently selected" cursor.
- Inputs: TargetConfig list from startup configuration.
- Outputs: Target objects (read via snapshot()), cursor navigation.
- Side effects: advance() moves the cursor.
- Thread-safety: Target list is fixed after construction; the cursor is guarded by _lock,
  which probe ticks never take.
"""

import logging
import threading
from typing import Dict, Iterable, Iterator, List, Tuple

from .errors import ConfigError
from .models import Target, TargetConfig
from .probe import normalize_address

logger = logging.getLogger(__name__)


class TargetRegistry:
    """
    Design (TargetRegistry)
    - State:
        _targets: Targets in configured order (= navigation order)
        _by_id: {target_id -> Target}
        _cursor: index of the selected target, always valid (registry is never empty)
        _lock: threading.Lock protecting _cursor
    """

    def __init__(self, configs: Iterable[TargetConfig]) -> None:
        self._lock = threading.Lock()
        self._targets: List[Target] = []
        self._by_id: Dict[str, Target] = {}
        self._cursor = 0

        for config in configs:
            if not config.id or not config.id.strip():
                raise ConfigError(f"Target with address {config.address!r} has an empty id")
            if config.id in self._by_id:
                raise ConfigError(f"Duplicate target id: {config.id!r}")
            normalize_address(config.address)
            target = Target.from_config(config)
            self._targets.append(target)
            self._by_id[config.id] = target

        if not self._targets:
            raise ConfigError("No targets configured; refusing to start with an empty registry")
        logger.debug("registry built with %d targets", len(self._targets))

    def __len__(self) -> int:
        return len(self._targets)

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def targets(self) -> Tuple[Target, ...]:
        """Read view in configured order."""
        return tuple(self._targets)

    def get(self, target_id: str) -> Target:
        try:
            return self._by_id[target_id]
        except KeyError:
            raise KeyError(f"Unknown target id: {target_id!r}") from None

    # -------- Navigation --------

    def current(self) -> Target:
        with self._lock:
            return self._targets[self._cursor]

    def advance(self) -> Target:
        """
        Purpose: Select the next target, wrapping to the first after the last.
        Outputs: The newly selected Target.
        Thread-safety: Protected by _lock.
        """
        with self._lock:
            self._cursor = (self._cursor + 1) % len(self._targets)
            return self._targets[self._cursor]
