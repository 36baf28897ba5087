from fastapi import APIRouter, Depends

from sitetwin.core.services.sensor_manager import SensorManager
from sitetwin.routers.deps import get_sensor_manager
from sitetwin.schemas import OfflineStatus, SensorList, SensorSchema

router = APIRouter(prefix="/simulation", tags=["simulation"])


@router.post("/tick", response_model=SensorList)
async def tick(manager: SensorManager = Depends(get_sensor_manager)) -> SensorList:
    """
    Run one simulation tick immediately. Values are left unchanged while offline.
    """
    snapshot = manager.tick()
    return SensorList(list=[SensorSchema.from_reading(r) for r in snapshot])


@router.get("/offline", response_model=OfflineStatus)
async def get_offline(manager: SensorManager = Depends(get_sensor_manager)) -> OfflineStatus:
    return OfflineStatus(offline=manager.offline)


@router.put("/offline", response_model=OfflineStatus)
async def set_offline(status: OfflineStatus, manager: SensorManager = Depends(get_sensor_manager)) -> OfflineStatus:
    """Suspend (true) or resume (false) the periodic sensor updates."""
    manager.set_offline(status.offline)
    return OfflineStatus(offline=manager.offline)
