"""Sensor ID enumeration for type-safe sensor references."""
from enum import Enum


class SensorId(Enum):
    """Enumeration of the live site sensors."""
    ENERGY = "energy"
    WATER = "water"
    NOISE = "noise"
    AIR = "air"
