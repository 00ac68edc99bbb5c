"""
Entry point: load targets, start the monitor, run until Ctrl+C.

Usage: python main.py [path/to/targets.json]
"""

import sys
import threading
from pathlib import Path

from pingwatch.config import ENABLE_NOTIFICATIONS, LOG_FILE, LOG_LEVEL, LOG_TO_FILE
from pingwatch.errors import ConfigError
from pingwatch.logging_config import get_logger, setup_logging
from pingwatch.monitor import Monitor
from pingwatch.notify import notify_transition
from pingwatch.probe import ProbeExecutor
from pingwatch.publisher import InMemoryVariableStore, ResultPublisher
from pingwatch.registry import TargetRegistry
from pingwatch.storage import get_targets_path, load_targets, seed_template


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging(level=LOG_LEVEL, to_file=LOG_TO_FILE, log_file=LOG_FILE)
    log = get_logger("pingwatch.main")

    path = Path(argv[0]) if argv else get_targets_path()
    try:
        seeded = seed_template(path)
    except OSError as e:
        log.error("no target file at %s and could not write a template: %s", path, e)
        return 2
    if seeded:
        log.error("no target file found; wrote a template to %s, edit it and restart", path)
        return 2
    try:
        registry = TargetRegistry(load_targets(path))
    except ConfigError as e:
        log.error("configuration error: %s", e)
        return 2
    log.info("monitoring %d targets from %s", len(registry), path)

    def log_probe(target_id, address, snapshot):
        status = "ONLINE" if snapshot.connected else "OFFLINE"
        latency = "-" if snapshot.last_latency_ms is None else f"{snapshot.last_latency_ms:.2f} ms"
        log.info("%s %s %s %s", target_id, address, status, latency)

    store = InMemoryVariableStore()
    monitor = Monitor(
        registry,
        ResultPublisher(store),
        ProbeExecutor(),
        on_probe=log_probe,
        on_transition=notify_transition if ENABLE_NOTIFICATIONS else None,
    )
    monitor.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        log.info("shutting down")
    finally:
        monitor.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
