"""Community brief written for local residents when a site alert fires."""
from string import Template

from pydantic import BaseModel, ConfigDict, Field

from sitetwin.core.flows.base import Flow


class CommunityBriefInput(BaseModel):
    model_config = ConfigDict(strict=True)

    alertType: str = Field(description="The type of alert triggered, e.g. noise violation.")
    alertDetails: str = Field(description="Readings and location details of the alert.")
    mitigationPlan: str = Field(description="Planned actions to mitigate the issue.")
    communityImpact: str = Field(description="Potential impact on the local community.")
    siteName: str = Field(description="Name of the construction site.")
    date: str = Field(description="Date of the alert.")


class CommunityBriefOutput(BaseModel):
    communityBrief: str = Field(description="Summary of the issue, mitigation plan and impact on residents.")


class CommunityBriefFlow(Flow[CommunityBriefInput, CommunityBriefOutput]):
    name = "community_brief"
    input_model = CommunityBriefInput
    output_type = CommunityBriefOutput
    prompt = Template(
        "You are a community relations specialist at a construction company. "
        "Write a brief for the local community about an alert at a construction site: "
        "the issue, the mitigation plan and the impact on residents. Keep it under "
        "200 words, plain and easy to understand, suitable for a plain text handout.\n\n"
        "Construction Site: $siteName\n"
        "Date: $date\n"
        "Alert Type: $alertType\n"
        "Alert Details: $alertDetails\n"
        "Mitigation Plan: $mitigationPlan\n"
        "Community Impact: $communityImpact"
    )


def brief_filename(alert_id: str) -> str:
    return f"community-brief-{alert_id}.txt"
