"""
Glue between site state and flows: builds flow inputs from live state and
turns flow failures into user-facing messages.
"""
import logging
from datetime import datetime
from typing import Iterable, List

from sitetwin.core.flows.base import FlowResult
from sitetwin.core.flows.community_brief import CommunityBriefInput
from sitetwin.core.flows.equipment_failure import (
    AssetSeries,
    EquipmentFailureFlow,
    EquipmentFailureInput,
    EquipmentFailurePrediction,
    HistoryReading,
)
from sitetwin.core.flows.errors import FlowError
from sitetwin.core.flows.threshold_prediction import ThresholdPredictionInput
from sitetwin.core.flows.what_if import WhatIfInput, WhatIfOutput
from sitetwin.core.models.alert import Alert
from sitetwin.core.models.sensor import SensorReading
from sitetwin.core.models.sensor_data import SensorData
from sitetwin.core.models.sensor_enum import SensorId

logger = logging.getLogger(__name__)

# Project outcome before any what-if adjustment
BASELINE = WhatIfOutput(predictedDelayDays=5, predictedCO2Emissions=15000, predictedCostSavings=0)


def time_of_day(now: datetime) -> str:
    if 5 <= now.hour < 12:
        return "morning"
    if 12 <= now.hour < 17:
        return "afternoon"
    if 17 <= now.hour < 21:
        return "evening"
    return "night"


def build_threshold_input(snapshot: Iterable[SensorReading], now: datetime) -> ThresholdPredictionInput:
    values = {reading.id: reading.value for reading in snapshot}
    return ThresholdPredictionInput(
        noiseLevel=values.get(SensorId.NOISE, 0.0),
        airQualityIndex=values.get(SensorId.AIR, 0.0),
        waterConsumptionRate=values.get(SensorId.WATER, 0.0),
        energyConsumptionRate=values.get(SensorId.ENERGY, 0.0),
        timeOfDay=time_of_day(now),
        dayOfWeek=now.strftime("%A"),
    )


def build_community_brief_input(alert: Alert, site_name: str) -> CommunityBriefInput:
    return CommunityBriefInput(
        alertType=alert.title,
        alertDetails=alert.description,
        mitigationPlan=alert.mitigation_plan,
        communityImpact=alert.community_impact,
        siteName=site_name,
        date=datetime.fromtimestamp(alert.timestamp).date().isoformat(),
    )


def build_failure_input(asset: SensorData) -> EquipmentFailureInput:
    return EquipmentFailureInput(sensorData=[
        AssetSeries(
            id=asset.id,
            name=asset.name,
            unit=asset.unit,
            history=[
                HistoryReading(timestamp=point.timestamp.isoformat(), value=point.value)
                for point in asset.history
            ],
        )
    ])


async def analyze_failure_risk(
    asset: SensorData, flow: EquipmentFailureFlow
) -> FlowResult[List[EquipmentFailurePrediction]]:
    """Run the equipment failure flow for one asset."""
    try:
        predictions = await flow.run(build_failure_input(asset))
    except FlowError as exc:
        logger.error(f"AI analysis failed for asset {asset.id}: {exc}")
        return FlowResult.failure(f"An error occurred during analysis: {exc.message}")
    return FlowResult.success(predictions)


def combine_what_if(params: WhatIfInput, result: WhatIfOutput) -> WhatIfOutput:
    """Apply the model's deltas on top of the project baseline."""
    return WhatIfOutput(
        predictedDelayDays=BASELINE.predictedDelayDays + result.predictedDelayDays,
        predictedCO2Emissions=(
            BASELINE.predictedCO2Emissions * (params.energyUsagePercentage / 100)
            + result.predictedCO2Emissions
        ),
        predictedCostSavings=BASELINE.predictedCostSavings + result.predictedCostSavings,
    )
