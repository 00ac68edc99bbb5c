"""
Design (notify.py)
- Purpose: Desktop notification when a target flips between CONNECTED and DISCONNECTED.
- Inputs: Transition from the monitor's on_transition hook.
- Side effects: Shows an OS notification via plyer.
- Thread-safety: Called from probe worker threads; plyer backends tolerate that.
"""

import logging

from plyer import notification

from .config import NOTIFY_TIMEOUT_SEC, NOTIFY_TITLE
from .models import TargetState, Transition

logger = logging.getLogger(__name__)

_LABELS = {
    TargetState.CONNECTED: "ONLINE",
    TargetState.DISCONNECTED: "OFFLINE",
    TargetState.UNKNOWN: "UNKNOWN",
}


def format_message(transition: Transition) -> str:
    return f"Target {transition.target_id} status is now: {_LABELS[transition.current]}"


def notify_transition(transition: Transition) -> bool:
    """
    Purpose: Notify on a real state flip.
    Outputs: True if a notification was sent. The first observation (UNKNOWN -> x)
             and non-changes are not announced.
    """
    if not transition.changed or transition.previous is TargetState.UNKNOWN:
        return False
    try:
        notification.notify(
            title=NOTIFY_TITLE,
            message=format_message(transition),
            timeout=NOTIFY_TIMEOUT_SEC,
        )
    except Exception as e:
        # plyer raises NotImplementedError on headless hosts
        logger.warning("desktop notification unavailable: %s", e)
        return False
    return True
