"""Rising-edge threshold evaluation for live sensors."""
import logging
from typing import Dict, Optional

from sitetwin.core.models.alert import AlertDraft, AlertSeverity
from sitetwin.core.models.sensor import Sensor
from sitetwin.core.models.sensor_enum import SensorId

logger = logging.getLogger(__name__)

MITIGATION_PLANS: Dict[SensorId, str] = {
    SensorId.ENERGY: "Shift non-critical {name} loads to off-peak hours and switch idle equipment off.",
    SensorId.WATER: "Inspect supply lines for leaks and restrict {name} for dust suppression until levels recover.",
    SensorId.NOISE: "Implement noise reduction measures immediately. Use quieter equipment and install temporary noise barriers.",
    SensorId.AIR: "Increase water spraying on haul roads and pause dust-generating works until {name} recovers.",
}

COMMUNITY_IMPACTS: Dict[SensorId, str] = {
    SensorId.ENERGY: "No direct impact on nearby residents is expected from elevated {name}.",
    SensorId.WATER: "Local water pressure may be briefly reduced while {name} is above its limit.",
    SensorId.NOISE: "Nearby residents may experience temporary high noise levels. We are working to resolve this as quickly as possible.",
    SensorId.AIR: "Residents near the site may notice dust. Sensitive groups should limit outdoor activity until {name} improves.",
}

DEFAULT_MITIGATION_PLAN = "Investigate the cause of the elevated {name} reading and apply corrective measures."
DEFAULT_COMMUNITY_IMPACT = "Nearby residents may be affected while {name} remains above its limit."


def is_rising_edge(previous: float, current: float, limit: float) -> bool:
    """True only on the transition from value <= limit to value > limit."""
    return current > limit and not previous > limit


def build_alert(sensor: Sensor, new_value: float) -> AlertDraft:
    name = sensor.name
    return AlertDraft(
        title=f"{name} Threshold Exceeded",
        description=(
            f"{name} at {new_value:.2f} {sensor.unit} has exceeded "
            f"the limit of {sensor.limit:g} {sensor.unit}."
        ),
        severity=AlertSeverity.HIGH,
        mitigation_plan=MITIGATION_PLANS.get(sensor.id, DEFAULT_MITIGATION_PLAN).format(name=name),
        community_impact=COMMUNITY_IMPACTS.get(sensor.id, DEFAULT_COMMUNITY_IMPACT).format(name=name),
    )


def evaluate(sensor: Sensor, new_value: float) -> Optional[AlertDraft]:
    """
    Compare the sensor's current value with new_value against its limit.
    Returns an alert draft on a rising edge, None otherwise.
    """
    if not is_rising_edge(sensor.value, new_value, sensor.limit):
        return None
    logger.warning(f"{sensor.id.value} crossed its limit: {new_value:.2f} > {sensor.limit}")
    return build_alert(sensor, new_value)
