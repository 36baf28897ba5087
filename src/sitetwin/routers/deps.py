from fastapi import HTTPException, Request

from sitetwin.core.flows.errors import FlowError, FlowInputError
from sitetwin.core.models.sensor_enum import SensorId
from sitetwin.core.service_manager import ServiceManager
from sitetwin.core.services.sensor_manager import SensorManager

VALID_SENSOR_VALUES = ", ".join([s.value for s in SensorId])

FLOW_FAILED_RESPONSE = {
    "description": "The language model call failed or returned an invalid answer.",
    "content": {
        "application/json": {
            "example": {"detail": "Failed to generate community brief. Please try again."}
        }
    }
}


def get_services(request: Request) -> ServiceManager:
    return request.app.state.services


def get_sensor_manager(request: Request) -> SensorManager:
    return request.app.state.services.sensor_manager


def parse_sensor_id(sensor_id: str) -> SensorId:
    """Case-insensitive sensor id lookup; 400 on unknown ids."""
    try:
        return SensorId(sensor_id.lower())
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid sensor_id: {sensor_id}. Valid values are: {VALID_SENSOR_VALUES}"
        )


def flow_http_error(exc: FlowError, message: str) -> HTTPException:
    """Map a flow failure to the HTTP error shown to the user."""
    if isinstance(exc, FlowInputError):
        return HTTPException(status_code=422, detail=exc.message)
    return HTTPException(status_code=502, detail=message)
