"""
Mock asset telemetry for the site map and predictive maintenance views.
"""
import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from sitetwin.core.models.sensor_data import HistoryPoint, SensorData

logger = logging.getLogger(__name__)

SITE_CENTER: Tuple[float, float] = (12.9716, 77.5946)  # Bangalore, India
ASSET_COUNT = 15
HISTORY_HOURS = 24
CO2E_FACTOR = 0.45
UNITS = ("kWh", "m³", "ppm")

ASSET_NAMES = (
    "HVAC Unit A-1", "Water Pump 3", "Lighting Grid B", "Solar Inverter 7",
    "Air Quality Monitor", "Energy Meter C4", "Substation T-82", "Water Main Inlet",
    "Perimeter Lighting", "Generator G-2", "Cooling Tower 1", "Exhaust Fan E-5",
    "Smart Window Actuator", "EV Charger 04", "Greywater Recycler",
)


def _history(index: int, now: datetime, hours: int, rng: random.Random) -> Tuple[HistoryPoint, ...]:
    points: List[HistoryPoint] = []
    for h in range(hours):
        value = max(0.0, math.sin(h * 0.5 + index) * 20 + 50 + rng.random() * 10)
        points.append(HistoryPoint(
            timestamp=now - timedelta(hours=h),
            value=value,
            predicted=value * (1 + (rng.random() - 0.4) * 0.1),
            co2e=value * CO2E_FACTOR,
        ))
    # generated newest first, stored oldest first
    points.reverse()
    return tuple(points)


def generate_asset_data(
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    count: int = ASSET_COUNT,
    hours: int = HISTORY_HOURS,
) -> List[SensorData]:
    """Build `count` assets scattered around the site centre with hourly history."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)

    assets: List[SensorData] = []
    for i in range(count):
        history = _history(i, now, hours, rng)
        assets.append(SensorData(
            id=i,
            name=ASSET_NAMES[i % len(ASSET_NAMES)],
            lat=SITE_CENTER[0] + (rng.random() - 0.5) * 0.005,
            lng=SITE_CENTER[1] + (rng.random() - 0.5) * 0.005,
            unit=UNITS[i % len(UNITS)],
            history=history,
        ))
    logger.info(f"Generated mock data for {len(assets)} assets ({hours}h history)")
    return assets
