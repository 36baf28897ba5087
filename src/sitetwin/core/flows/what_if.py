"""What-if simulation of schedule, emissions and cost."""
from string import Template

from pydantic import BaseModel, ConfigDict, Field

from sitetwin.core.flows.base import Flow


class WhatIfInput(BaseModel):
    model_config = ConfigDict(strict=True)

    truckDelayHours: float = Field(description="Truck delay hours to simulate.")
    energyUsagePercentage: float = Field(description="Energy usage percentage to simulate.")


class WhatIfOutput(BaseModel):
    predictedDelayDays: float = Field(description="Predicted project delay in days.")
    predictedCO2Emissions: float = Field(description="Predicted CO2 emissions in kg.")
    predictedCostSavings: float = Field(description="Predicted cost savings in USD.")


class WhatIfFlow(Flow[WhatIfInput, WhatIfOutput]):
    name = "what_if"
    input_model = WhatIfInput
    output_type = WhatIfOutput
    prompt = Template(
        "You are an assistant for construction project planning and sustainability. "
        "Predict the impact of the parameters below on project delay (days), CO2 emissions "
        "(kg) and cost savings (USD), considering truck logistics and equipment energy use. "
        "Keep the predictions realistic and directionally correct.\n\n"
        "Truck Delay Hours: $truckDelayHours\n"
        "Energy Usage Percentage: $energyUsagePercentage"
    )
