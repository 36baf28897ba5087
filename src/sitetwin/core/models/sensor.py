"""
Live sensor model.
"""

from dataclasses import dataclass
from typing import Optional

from sitetwin.core.models.sensor_enum import SensorId


@dataclass
class Sensor:
    """
    Mutable state of one live sensor. Owned by the SensorManager and
    updated in place on every tick.
    """
    id: SensorId
    name: str
    value: float
    unit: str
    limit: float
    timestamp: float
    change: Optional[float] = None

    def reading(self) -> "SensorReading":
        """Freeze the current state into a reading."""
        return SensorReading(
            id=self.id,
            name=self.name,
            value=self.value,
            unit=self.unit,
            limit=self.limit,
            timestamp=self.timestamp,
            change=self.change,
        )


@dataclass(frozen=True)
class SensorReading:
    """
    Immutable copy of a sensor, as published to subscribers after a tick.
    """
    id: SensorId
    name: str
    value: float
    unit: str
    limit: float
    timestamp: float
    change: Optional[float] = None
