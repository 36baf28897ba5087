import asyncio
import logging
from typing import Callable, Dict, List, Any, Optional

logger = logging.getLogger(__name__)

# Topics published by the SensorManager
SENSOR_SNAPSHOT = "sensor_snapshot"
ALERT_ADDED = "alert_added"
ALERT_TOAST = "alert_toast"
ALERTS_CLEARED = "alerts_cleared"
OFFLINE_CHANGED = "offline_changed"


class EventHub:
    """
    Topic based publish/subscribe. Handlers are called as handler(topic, message).
    Coroutine handlers are scheduled on the configured loop; plain handlers run inline.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._subscribers: Dict[str, List[Callable]] = {}
        self._loop = loop

    def init(self, loop: asyncio.AbstractEventLoop):
        self._loop = loop

    def subscribe(self, topic: str, handler: Callable):
        handlers = self._subscribers.setdefault(topic, [])
        if handler not in handlers:
            handlers.append(handler)
        logger.debug(f"Subscribed to {topic}")

    def unsubscribe(self, topic: str, handler: Callable):
        if handler in self._subscribers.get(topic, []):
            self._subscribers[topic].remove(handler)
            logger.debug(f"Unsubscribed from {topic}")

    def unsubscribe_all(self):
        self._subscribers.clear()

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))

    def send_all_on_topic(self, topic: str, message: Any):
        # Copy so handlers may unsubscribe while being dispatched
        handlers = self._subscribers.get(topic, [])[:]
        for handler in handlers:
            try:
                self._dispatch(handler, topic, message)
            except Exception as e:
                logger.error(f"Error handling message on topic {topic}: {e}")

    def _dispatch(self, handler: Callable, topic: str, message: Any):
        if not asyncio.iscoroutinefunction(handler):
            if self._loop is not None and not self._in_loop():
                self._loop.call_soon_threadsafe(handler, topic, message)
            else:
                handler(topic, message)
            return

        if self._loop is None:
            logger.warning(f"EventHub loop not initialized. Cannot dispatch async handler for {topic}")
        elif self._in_loop():
            self._loop.create_task(handler(topic, message))
        else:
            asyncio.run_coroutine_threadsafe(handler(topic, message), self._loop)

    def _in_loop(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False
