"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (intervals, timeouts, pool size, file names, log level).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

# One probe cycle per target per period
PING_INTERVAL_SEC = 30

# Per-probe timeout; also the hard cap on the ping process lifetime
PING_TIMEOUT_MS = 1500

# Upper bound on concurrently running ping processes
MAX_CONCURRENT_PROBES = 8

# Latency marker and unit delimiter in ping diagnostic output.
# Windows prints "time<1ms" for sub-millisecond replies; the bound is taken as the RTT.
LATENCY_MARKER = "time="
LATENCY_BOUND_MARKER = "time<"
LATENCY_UNIT = "ms"

# Persistence: filename for the target list (path resolved in storage module)
TARGETS_FILENAME = "targets.json"
TARGETS_ENV_VAR = "PINGWATCH_TARGETS"

LOG_LEVEL = "INFO"
LOG_TO_FILE = False
LOG_FILE = None  # None: ~/.pingwatch/logs/pingwatch.log
LOG_DIR_NAME = ".pingwatch"

ENABLE_NOTIFICATIONS = True
NOTIFY_TITLE = "Target Status Change"
NOTIFY_TIMEOUT_SEC = 5
