"""
Asset telemetry model used by the map view and predictive maintenance.

Generated once at startup by the mock data service; never mutated.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple


@dataclass(frozen=True)
class HistoryPoint:
    """
    Data class representing one hourly asset reading.
    """
    timestamp: datetime
    value: float
    predicted: float
    co2e: float


@dataclass(frozen=True)
class SensorData:
    """
    Data class representing a monitored site asset and its reading history
    (oldest first).
    """
    id: int
    name: str
    lat: float
    lng: float
    unit: str
    history: Tuple[HistoryPoint, ...]
