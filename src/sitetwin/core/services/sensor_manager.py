import asyncio
import logging
import random
import time
from typing import Callable, Dict, Optional, Tuple

from sitetwin.core.event_hub import (
    ALERT_ADDED,
    ALERT_TOAST,
    ALERTS_CLEARED,
    OFFLINE_CHANGED,
    SENSOR_SNAPSHOT,
    EventHub,
)
from sitetwin.core.models.alert import Alert, AlertDraft
from sitetwin.core.models.config_data import configData
from sitetwin.core.models.sensor import Sensor, SensorReading
from sitetwin.core.models.sensor_enum import SensorId
from sitetwin.core.processing import random_walk, threshold
from sitetwin.core.processing.reading_history import ReadingHistory
from sitetwin.core.services.alert_log import AlertLog

logger = logging.getLogger(__name__)

Snapshot = Tuple[SensorReading, ...]


class SensorManager:
    """
    Owns the live site sensors and the alert log, and drives the periodic
    simulation loop.

    Ticks run synchronously on the event loop, so at most one tick mutates
    sensor and alert state at a time. Subscribers receive an immutable
    snapshot on the `sensor_snapshot` topic after every tick.
    """

    def __init__(
        self,
        config: configData,
        event_hub: Optional[EventHub] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.event_hub = event_hub or EventHub()
        self.rng = rng or random.Random()
        self.clock = clock
        self.tick_interval = config.tick_interval
        self.spike_probability = config.spike_probability
        self.offline = config.offline
        self.running = False
        self.tick_count = 0
        self._task: Optional[asyncio.Task] = None

        now = self.clock()
        self.sensors: Dict[SensorId, Sensor] = {
            sensor_id: Sensor(
                id=sensor_id,
                name=cfg.displayName,
                value=max(0.0, cfg.initial),
                unit=cfg.unit,
                limit=cfg.limit,
                timestamp=now,
            )
            for sensor_id, cfg in config.sensors.items()
            if cfg.enabled
        }
        self.alert_log = AlertLog(config.alert_capacity)
        self.history = ReadingHistory(self.sensors.keys(), capacity=config.history_size)

    # --- lifecycle ---

    def start(self):
        """Start the periodic tick loop on the running event loop."""
        if self.running:
            return
        self.running = True
        loop = asyncio.get_running_loop()
        self.event_hub.init(loop)
        self._task = loop.create_task(self._loop())
        logger.info(f"SensorManager started (interval: {self.tick_interval}s, offline: {self.offline})")

    def stop(self):
        self.running = False
        if self._task:
            self._task.cancel()
            self._task = None
        logger.info("SensorManager stopped")

    async def _loop(self):
        while self.running:
            await asyncio.sleep(self.tick_interval)
            if self.offline:
                continue
            self.tick()

    # --- simulation ---

    def set_offline(self, offline: bool):
        """Suspend or resume ticking. Applies from the next scheduling decision."""
        if offline == self.offline:
            return
        self.offline = offline
        if offline:
            logger.info("Offline mode activated: sensor updates suspended")
        else:
            logger.info("Offline mode deactivated: sensor updates resumed")
        self.event_hub.send_all_on_topic(OFFLINE_CHANGED, offline)

    def tick(self) -> Snapshot:
        """
        Advance every sensor by one random-walk step and log an alert for each
        sensor that crossed its limit. No-op while offline.
        """
        if self.offline:
            return self.snapshot()

        now = self.clock()
        for sensor in self.sensors.values():
            result = random_walk.step(sensor.value, sensor.limit, self.rng, self.spike_probability)
            draft = threshold.evaluate(sensor, result.value)

            sensor.value = result.value
            sensor.timestamp = now
            sensor.change = result.change
            self.history.append(sensor.id, now, result.value)

            if draft is not None:
                self.add_alert(draft, now=now)

        self.tick_count += 1
        snapshot = self.snapshot()
        self.event_hub.send_all_on_topic(SENSOR_SNAPSHOT, snapshot)
        return snapshot

    def snapshot(self) -> Snapshot:
        return tuple(sensor.reading() for sensor in self.sensors.values())

    def get_sensor(self, sensor_id: SensorId) -> SensorReading:
        return self.sensors[sensor_id].reading()

    # --- alerts ---

    def add_alert(self, draft: AlertDraft, show_toast: bool = False, now: Optional[float] = None) -> Alert:
        alert = self.alert_log.add_alert(draft, now=self.clock() if now is None else now)
        self.event_hub.send_all_on_topic(ALERT_ADDED, alert)
        if show_toast:
            self.event_hub.send_all_on_topic(ALERT_TOAST, alert)
        return alert

    def clear_alerts(self):
        self.alert_log.clear_alerts()
        self.event_hub.send_all_on_topic(ALERTS_CLEARED, None)

    def alerts(self) -> Tuple[Alert, ...]:
        return self.alert_log.alerts()
