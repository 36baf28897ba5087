from dataclasses import dataclass, field
from typing import Dict

from sitetwin.core.models.sensor_enum import SensorId


@dataclass
class configSensorData:
    id: SensorId
    displayName: str = "Unnamed Sensor"
    unit: str = ""
    limit: float = 100.0
    initial: float = 0.0
    enabled: bool = True


@dataclass
class configData:
    sensors: Dict[SensorId, configSensorData] = field(default_factory=dict)
    site_name: str = "EcoConstruct Site A"
    tick_interval: float = 60.0
    spike_probability: float = 0.005
    alert_capacity: int = 20
    history_size: int = 30
    offline: bool = False
