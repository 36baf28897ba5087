"""
UN Sustainable Development Goal figures shown next to the live readings.

Only SDG 9 follows the simulation (current energy reading); the other
goals carry fixed project figures.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from sitetwin.core.models.sensor import SensorReading
from sitetwin.core.models.sensor_enum import SensorId


@dataclass(frozen=True)
class SdgGoal:
    id: int
    name: str
    description: str


@dataclass(frozen=True)
class SdgMetric:
    goal: SdgGoal
    value: float
    unit: str
    label: str


SDG_GOALS: Tuple[SdgGoal, ...] = (
    SdgGoal(9, "Industry, Innovation and Infrastructure",
            "Promoting sustainable industrialization and fostering innovation."),
    SdgGoal(11, "Sustainable Cities and Communities",
            "Making cities inclusive, safe, resilient and sustainable."),
    SdgGoal(12, "Responsible Consumption and Production",
            "Ensuring sustainable consumption and production patterns."),
    SdgGoal(13, "Climate Action",
            "Taking urgent action to combat climate change and its impacts."),
)

# goal id -> (value, unit, label)
STATIC_FIGURES: Dict[int, Tuple[float, str, str]] = {
    11: (15.0, "%", "Community Impact"),
    12: (3.2, "tons", "Waste Reused"),
    13: (12.5, "tCO₂e", "Emissions Reduced"),
}


def compute_sdg_metrics(snapshot: Iterable[SensorReading]) -> List[SdgMetric]:
    """One metric per goal, in goal order. A missing energy sensor reads as 0."""
    energy = next((r.value for r in snapshot if r.id == SensorId.ENERGY), 0.0)

    metrics = []
    for goal in SDG_GOALS:
        if goal.id == 9:
            metrics.append(SdgMetric(goal, energy, "kWh", "Energy Saved"))
        else:
            value, unit, label = STATIC_FIGURES[goal.id]
            metrics.append(SdgMetric(goal, value, unit, label))
    return metrics
