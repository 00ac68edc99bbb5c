"""
Background monitoring worker.

Design:
- Runs in its own thread so callers (UI, main) stay responsive.
- Every cycle (tick):
    1) Take the fixed target list from the registry.
    2) Fan out one task per target onto a bounded thread pool.
    3) Each task runs, strictly in order: probe -> parse (on success) -> classify -> publish.
    4) Emit a per-probe event, plus a transition event when a target flips state.
- Methods:
    run_once(): one synchronous tick, returns a TickReport
    start(): begin the daemon thread
    stop(): signal the thread to stop and wait for it
- Thread-safety: Each target has exactly one writer per tick (its task); the classifier
  locks the target; the store serializes group writes.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from .classifier import classify
from .config import MAX_CONCURRENT_PROBES, PING_INTERVAL_SEC, PING_TIMEOUT_MS
from .errors import LatencyParseError, PublishError
from .models import ProbeFailure, Target, TargetSnapshot, Transition
from .parser import parse_latency
from .probe import ProbeExecutor
from .publisher import ResultPublisher
from .registry import TargetRegistry

logger = logging.getLogger(__name__)


@dataclass
class TargetOutcome:
    """What happened to one target during one tick."""
    target_id: str
    snapshot: TargetSnapshot
    transition: Transition
    probe_failure: Optional[ProbeFailure] = None
    parse_error: Optional[LatencyParseError] = None
    publish_error: Optional[PublishError] = None


@dataclass
class TickReport:
    outcomes: List[TargetOutcome] = field(default_factory=list)

    @property
    def errors(self) -> List[PublishError]:
        return [o.publish_error for o in self.outcomes if o.publish_error is not None]

    def raise_for_errors(self) -> None:
        errors = self.errors
        if errors:
            raise errors[0]

    def outcome(self, target_id: str) -> TargetOutcome:
        for o in self.outcomes:
            if o.target_id == target_id:
                return o
        raise KeyError(target_id)


class Monitor:
    def __init__(
        self,
        registry: TargetRegistry,
        publisher: ResultPublisher,
        executor: Optional[ProbeExecutor] = None,
        interval: float = PING_INTERVAL_SEC,
        timeout: float = PING_TIMEOUT_MS / 1000.0,
        max_workers: int = MAX_CONCURRENT_PROBES,
        on_probe: Optional[Callable[[str, str, TargetSnapshot], None]] = None,
        on_transition: Optional[Callable[[Transition], None]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.publisher = publisher
        self.executor = executor or ProbeExecutor(default_timeout=timeout)
        self.interval = interval
        self.timeout = timeout
        self.max_workers = max_workers
        self.on_probe = on_probe
        self.on_transition = on_transition
        self.clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="pingwatch-monitor", daemon=True)
        self._thread.start()

    def stop(self, join_timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(join_timeout)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> TickReport:
        """
        Purpose: Probe every target once, concurrently up to max_workers.
        Outputs: TickReport with one TargetOutcome per target, in registry order.
        Notes: Publish failures are recorded in the report, not raised; call
               report.raise_for_errors() to surface them.
        """
        targets = self.registry.targets()
        workers = min(self.max_workers, len(targets))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pingwatch-probe") as pool:
            futures = [pool.submit(self._run_target, target) for target in targets]
            return TickReport([f.result() for f in futures])

    def _run_target(self, target: Target) -> TargetOutcome:
        result = self.executor.probe(target.address, self.timeout)
        latency: Optional[float] = None
        parse_error: Optional[LatencyParseError] = None

        if result.succeeded:
            if result.latency_ms is not None:
                latency = result.latency_ms
            else:
                try:
                    latency = parse_latency(result.raw_output or "")
                except LatencyParseError as e:
                    parse_error = e
                    logger.warning("unparseable probe output for %s (%s): %r",
                                   target.id, e.reason.value, result.raw_output)
        else:
            logger.info("probe failed for %s (%s): %s", target.id, target.address,
                        result.failure.value if result.failure else "unknown")

        transition = classify(target, latency, self.clock())
        snapshot = target.snapshot()
        if transition.changed:
            logger.info("%s is now %s", target.id, transition.current.value)

        publish_error: Optional[PublishError] = None
        try:
            self.publisher.publish(snapshot)
        except PublishError as e:
            publish_error = e
            logger.error("%s", e)

        outcome = TargetOutcome(
            target_id=target.id,
            snapshot=snapshot,
            transition=transition,
            probe_failure=result.failure,
            parse_error=parse_error,
            publish_error=publish_error,
        )
        self._emit(outcome)
        return outcome

    def _emit(self, outcome: TargetOutcome) -> None:
        # hooks must never break the tick
        if self.on_probe is not None:
            try:
                self.on_probe(outcome.target_id, outcome.snapshot.address, outcome.snapshot)
            except Exception:
                logger.exception("on_probe hook failed for %s", outcome.target_id)
        if self.on_transition is not None and outcome.transition.changed:
            try:
                self.on_transition(outcome.transition)
            except Exception:
                logger.exception("on_transition hook failed for %s", outcome.target_id)

    def _loop(self) -> None:
        while not self._stop.is_set():
            t0 = time.perf_counter()
            try:
                report = self.run_once()
                if report.errors:
                    logger.warning("%d of %d publishes failed this tick",
                                   len(report.errors), len(report.outcomes))
            except Exception:
                logger.exception("monitor tick failed")
            elapsed = time.perf_counter() - t0
            self._stop.wait(max(0.0, self.interval - elapsed))
