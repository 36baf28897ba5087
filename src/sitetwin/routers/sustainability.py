from fastapi import APIRouter, Depends

from sitetwin.core.services.sdg_metrics import compute_sdg_metrics
from sitetwin.core.services.sensor_manager import SensorManager
from sitetwin.routers.deps import get_sensor_manager
from sitetwin.schemas import SdgMetricList, SdgMetricSchema

router = APIRouter(prefix="/sdg-metrics", tags=["sustainability"])


@router.get("", response_model=SdgMetricList)
async def list_sdg_metrics(manager: SensorManager = Depends(get_sensor_manager)) -> SdgMetricList:
    """
    Project figures for SDG 9, 11, 12 and 13. The SDG 9 figure is the
    current energy reading.
    """
    metrics = compute_sdg_metrics(manager.snapshot())
    return SdgMetricList(list=[SdgMetricSchema.from_metric(m) for m in metrics])
