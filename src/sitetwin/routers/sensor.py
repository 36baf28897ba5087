from fastapi import APIRouter, Depends, HTTPException

from sitetwin.core.services.sensor_manager import SensorManager
from sitetwin.routers.deps import VALID_SENSOR_VALUES, get_sensor_manager, parse_sensor_id
from sitetwin.schemas import Point, PointsList, SensorList, SensorSchema

router = APIRouter(prefix="/sensors", tags=["sensor"])

INVALID_SENSOR_RESPONSE = {
    "description": "Invalid sensor_id provided.",
    "content": {
        "application/json": {
            "example": {"detail": f"Invalid sensor_id: INVALID. Valid values are: {VALID_SENSOR_VALUES}"}
        }
    }
}

DISABLED_SENSOR_RESPONSE = {
    "description": "Sensor is disabled in the site configuration.",
    "content": {
        "application/json": {
            "example": {"detail": "Sensor water is not enabled"}
        }
    }
}


@router.get("", response_model=SensorList)
async def list_sensors(manager: SensorManager = Depends(get_sensor_manager)) -> SensorList:
    """Current reading of every live sensor."""
    return SensorList(list=[SensorSchema.from_reading(r) for r in manager.snapshot()])


@router.get("/{sensor_id}", response_model=SensorSchema, responses={
    400: INVALID_SENSOR_RESPONSE,
    404: DISABLED_SENSOR_RESPONSE,
})
async def get_sensor(sensor_id: str, manager: SensorManager = Depends(get_sensor_manager)) -> SensorSchema:
    sid = parse_sensor_id(sensor_id)
    try:
        reading = manager.get_sensor(sid)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Sensor {sid.value} is not enabled")
    return SensorSchema.from_reading(reading)


@router.get("/{sensor_id}/history", response_model=PointsList, responses={
    400: INVALID_SENSOR_RESPONSE,
    404: DISABLED_SENSOR_RESPONSE,
})
async def get_sensor_history(sensor_id: str, manager: SensorManager = Depends(get_sensor_manager)) -> PointsList:
    """
    Recent readings of a sensor for charting, oldest first.
    Holds at most the configured history size; not updated while offline.
    """
    sid = parse_sensor_id(sensor_id)
    if sid not in manager.sensors:
        raise HTTPException(status_code=404, detail=f"Sensor {sid.value} is not enabled")
    return PointsList(list=[Point(time=t, value=v) for t, v in manager.history.get(sid)])
