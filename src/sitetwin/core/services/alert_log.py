import logging
import random
import time
from collections import deque
from typing import Deque, Optional, Tuple

from sitetwin.core.models.alert import Alert, AlertDraft

logger = logging.getLogger(__name__)

ALERT_CAPACITY = 20


class AlertLog:
    """
    In-memory alert log, newest first, bounded to `capacity` entries.
    Adding beyond capacity drops the oldest alert.
    """

    def __init__(self, capacity: int = ALERT_CAPACITY, rng: Optional[random.Random] = None):
        if capacity <= 0:
            raise ValueError(f"Alert log capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._alerts: Deque[Alert] = deque(maxlen=capacity)
        self._rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self._alerts)

    def _new_id(self, now: float) -> str:
        # Time based with a random suffix; unique enough for a session log
        return f"alert-{int(now * 1000)}-{self._rng.getrandbits(32):08x}"

    def add_alert(self, draft: AlertDraft, now: Optional[float] = None) -> Alert:
        now = time.time() if now is None else now
        alert = Alert.from_draft(draft, alert_id=self._new_id(now), timestamp=now)
        self._alerts.appendleft(alert)
        logger.info(f"Alert logged: {alert.title} ({alert.id})")
        return alert

    def clear_alerts(self) -> None:
        self._alerts.clear()
        logger.info("Alert log cleared")

    def alerts(self) -> Tuple[Alert, ...]:
        """Snapshot of the log, newest first."""
        return tuple(self._alerts)

    def get(self, alert_id: str) -> Alert:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        raise KeyError(alert_id)
