"""Likelihood of each environmental threshold being exceeded soon."""
from string import Template

from pydantic import BaseModel, ConfigDict, Field

from sitetwin.core.flows.base import Flow


class ThresholdPredictionInput(BaseModel):
    model_config = ConfigDict(strict=True)

    noiseLevel: float = Field(description="Current noise level in decibels.")
    airQualityIndex: float = Field(description="Current air quality index value.")
    waterConsumptionRate: float = Field(description="Current water consumption rate.")
    energyConsumptionRate: float = Field(description="Current energy consumption rate.")
    timeOfDay: str = Field(description="morning, afternoon, evening or night.")
    dayOfWeek: str = Field(description="Day of the week, e.g. Monday.")


class ThresholdPredictionOutput(BaseModel):
    noiseViolationLikelihood: str = Field(description="High, Medium or Low.")
    airQualityViolationLikelihood: str = Field(description="High, Medium or Low.")
    waterViolationLikelihood: str = Field(description="High, Medium or Low.")
    energyViolationLikelihood: str = Field(description="High, Medium or Low.")
    suggestedActions: str = Field(description="Actions that prevent the predicted violations.")


class ThresholdPredictionFlow(Flow[ThresholdPredictionInput, ThresholdPredictionOutput]):
    name = "threshold_prediction"
    input_model = ThresholdPredictionInput
    output_type = ThresholdPredictionOutput
    prompt = Template(
        "You predict environmental threshold violations for construction sites. "
        "From the current readings below, rate the likelihood (High, Medium or Low) that "
        "the noise, air quality, water and energy thresholds will be exceeded, considering "
        "typical site activity, weather and local regulations, and suggest preventive actions.\n\n"
        "Noise Level: $noiseLevel dB\n"
        "Air Quality Index: $airQualityIndex\n"
        "Water Consumption Rate: $waterConsumptionRate\n"
        "Energy Consumption Rate: $energyConsumptionRate\n"
        "Time of Day: $timeOfDay\n"
        "Day of Week: $dayOfWeek"
    )
