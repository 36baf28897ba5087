"""Alert models."""
from dataclasses import dataclass
from enum import Enum


class AlertSeverity(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class AlertDraft:
    """
    Alert content before it is logged. The alert log assigns id and timestamp.
    """
    title: str
    description: str
    severity: AlertSeverity
    mitigation_plan: str
    community_impact: str


@dataclass(frozen=True)
class Alert:
    id: str
    title: str
    description: str
    severity: AlertSeverity
    mitigation_plan: str
    community_impact: str
    timestamp: float

    @classmethod
    def from_draft(cls, draft: AlertDraft, alert_id: str, timestamp: float) -> "Alert":
        return cls(
            id=alert_id,
            title=draft.title,
            description=draft.description,
            severity=draft.severity,
            mitigation_plan=draft.mitigation_plan,
            community_impact=draft.community_impact,
            timestamp=timestamp,
        )
