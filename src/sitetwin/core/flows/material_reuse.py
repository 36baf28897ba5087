"""Reuse suggestions for demolition material, with CO2 and cost savings."""
from string import Template
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from sitetwin.core.flows.base import Flow

# Materials offered by the circularity advisor; the flow accepts any name.
MATERIAL_LABELS: Dict[str, str] = {
    "concrete": "Concrete",
    "steel": "Steel",
    "wood": "Wood",
    "glass": "Glass",
    "copper": "Copper",
}


class MaterialReuseInput(BaseModel):
    model_config = ConfigDict(strict=True)

    material: str = Field(description="Demolition material, e.g. concrete, steel, wood.")
    quantity: float = Field(description="Quantity of material in tons.")
    location: str = Field(description="Where the material is available.")


class MaterialReuseSuggestion(BaseModel):
    reuseSuggestion: str = Field(description="A suggestion for reusing the material.")
    co2Savings: float = Field(description="Estimated CO2 savings in kg.")
    costSavings: float = Field(description="Estimated cost savings in USD.")


class MaterialReuseFlow(Flow[MaterialReuseInput, List[MaterialReuseSuggestion]]):
    name = "material_reuse"
    input_model = MaterialReuseInput
    output_type = List[MaterialReuseSuggestion]
    prompt = Template(
        "You are an expert in construction material reuse and circular economy principles. "
        "Given the demolition material below, its quantity and location, give several "
        "reuse suggestions with the estimated CO2 savings (kg) and cost savings (USD) of each.\n\n"
        "Material: $material\n"
        "Quantity: $quantity tons\n"
        "Location: $location\n\n"
        "Answer with a JSON array of objects with the keys reuseSuggestion, co2Savings and costSavings."
    )
