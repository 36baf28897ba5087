from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from sitetwin.core.models.alert import Alert, AlertSeverity
from sitetwin.core.models.sensor import SensorReading
from sitetwin.core.models.sensor_data import SensorData
from sitetwin.core.models.sensor_enum import SensorId
from sitetwin.core.services.sdg_metrics import SdgMetric


class AppHealthOK(BaseModel):
    status: str
    app: str


class SensorSchema(BaseModel):
    id: SensorId
    name: str
    value: float
    unit: str
    limit: float
    timestamp: float
    change: Optional[float] = None

    @classmethod
    def from_reading(cls, reading: SensorReading) -> "SensorSchema":
        return cls(
            id=reading.id,
            name=reading.name,
            value=reading.value,
            unit=reading.unit,
            limit=reading.limit,
            timestamp=reading.timestamp,
            change=reading.change,
        )


class SensorList(BaseModel):
    list: List[SensorSchema]


class Point(BaseModel):
    time: float
    value: float


class PointsList(BaseModel):
    list: List[Point]


class AlertSchema(BaseModel):
    id: str
    title: str
    description: str
    severity: AlertSeverity
    mitigationPlan: str
    communityImpact: str
    timestamp: float

    @classmethod
    def from_alert(cls, alert: Alert) -> "AlertSchema":
        return cls(
            id=alert.id,
            title=alert.title,
            description=alert.description,
            severity=alert.severity,
            mitigationPlan=alert.mitigation_plan,
            communityImpact=alert.community_impact,
            timestamp=alert.timestamp,
        )


class AlertList(BaseModel):
    list: List[AlertSchema]


class OfflineStatus(BaseModel):
    offline: bool


class HistoryPointSchema(BaseModel):
    timestamp: datetime
    value: float
    predicted: float
    co2e: float


class AssetSchema(BaseModel):
    id: int
    name: str
    lat: float
    lng: float
    unit: str
    history: List[HistoryPointSchema]

    @classmethod
    def from_asset(cls, asset: SensorData) -> "AssetSchema":
        return cls(
            id=asset.id,
            name=asset.name,
            lat=asset.lat,
            lng=asset.lng,
            unit=asset.unit,
            history=[
                HistoryPointSchema(timestamp=p.timestamp, value=p.value, predicted=p.predicted, co2e=p.co2e)
                for p in asset.history
            ],
        )


class AssetList(BaseModel):
    list: List[AssetSchema]


class SdgMetricSchema(BaseModel):
    id: int
    name: str
    description: str
    value: float
    unit: str
    label: str

    @classmethod
    def from_metric(cls, metric: SdgMetric) -> "SdgMetricSchema":
        return cls(
            id=metric.goal.id,
            name=metric.goal.name,
            description=metric.goal.description,
            value=metric.value,
            unit=metric.unit,
            label=metric.label,
        )


class SdgMetricList(BaseModel):
    list: List[SdgMetricSchema]


class MaterialOption(BaseModel):
    value: str
    label: str


class MaterialList(BaseModel):
    list: List[MaterialOption]
