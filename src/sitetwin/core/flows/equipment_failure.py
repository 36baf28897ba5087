"""Predictive maintenance: failure probability per monitored asset."""
import json
from string import Template
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from sitetwin.core.flows.base import Flow


class HistoryReading(BaseModel):
    model_config = ConfigDict(strict=True)

    timestamp: str
    value: float


class AssetSeries(BaseModel):
    model_config = ConfigDict(strict=True)

    id: int
    name: str
    unit: str
    history: List[HistoryReading]


class EquipmentFailureInput(BaseModel):
    model_config = ConfigDict(strict=True)

    sensorData: List[AssetSeries] = Field(description="Assets with their historical readings.")


class EquipmentFailurePrediction(BaseModel):
    sensorId: int = Field(description="ID of the sensor indicating a possible failure.")
    assetName: str
    failureProbability: float = Field(ge=0.0, le=1.0, description="Probability of failure (0-1).")
    reason: str
    recommendation: str


class EquipmentFailureFlow(Flow[EquipmentFailureInput, List[EquipmentFailurePrediction]]):
    name = "equipment_failure"
    input_model = EquipmentFailureInput
    output_type = List[EquipmentFailurePrediction]
    prompt = Template(
        "You are an expert maintenance engineer. Examine each sensor's history for "
        "anomalies, trends and deviations from normal behaviour, estimate the probability "
        "of failure, explain the reason and recommend preventive actions.\n\n"
        "$series"
    )

    def render(self, data: EquipmentFailureInput) -> str:
        blocks = []
        for asset in data.sensorData:
            lines = [
                f"Sensor ID: {asset.id}",
                f"Asset Name: {asset.name}",
                f"Unit: {asset.unit}",
                "History:",
            ]
            lines.extend(f"  Timestamp: {h.timestamp}, Value: {h.value}" for h in asset.history)
            blocks.append("\n".join(lines))
        body = self.prompt.substitute(series="\n\n".join(blocks))
        return f"{body}\n\nAnswer with a JSON array matching this schema:\n{json.dumps(self.output_schema, indent=2)}"
