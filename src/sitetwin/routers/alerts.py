import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from sitetwin.core.flows.actions import build_community_brief_input
from sitetwin.core.flows.community_brief import CommunityBriefOutput, brief_filename
from sitetwin.core.flows.errors import FlowError
from sitetwin.core.service_manager import ServiceManager
from sitetwin.routers.deps import FLOW_FAILED_RESPONSE, flow_http_error, get_services
from sitetwin.schemas import AlertList, AlertSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/alerts", tags=["alerts"])

BRIEF_FAILED = "Failed to generate community brief. Please try again."

UNKNOWN_ALERT_RESPONSE = {
    "description": "No alert with this id in the log.",
    "content": {
        "application/json": {
            "example": {"detail": "Alert alert-1700000000000-1a2b3c4d not found"}
        }
    }
}


@router.get("", response_model=AlertList)
async def list_alerts(services: ServiceManager = Depends(get_services)) -> AlertList:
    """Alert log, newest first."""
    return AlertList(list=[AlertSchema.from_alert(a) for a in services.sensor_manager.alerts()])


@router.delete("", status_code=204)
async def clear_alerts(services: ServiceManager = Depends(get_services)) -> None:
    services.sensor_manager.clear_alerts()


async def _generate_brief(alert_id: str, services: ServiceManager) -> CommunityBriefOutput:
    try:
        alert = services.sensor_manager.alert_log.get(alert_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Alert {alert_id} not found")

    try:
        return await services.flows.community_brief.run(
            build_community_brief_input(alert, services.site_name)
        )
    except FlowError as exc:
        logger.error(f"Failed to generate community brief for {alert_id}: {exc}")
        raise flow_http_error(exc, BRIEF_FAILED)


@router.post("/{alert_id}/brief", response_model=CommunityBriefOutput, responses={
    404: UNKNOWN_ALERT_RESPONSE,
    502: FLOW_FAILED_RESPONSE,
})
async def generate_brief(alert_id: str, services: ServiceManager = Depends(get_services)) -> CommunityBriefOutput:
    """Generate a community brief for an alert in the log."""
    return await _generate_brief(alert_id, services)


@router.post("/{alert_id}/brief/download", response_class=PlainTextResponse, responses={
    200: {"content": {"text/plain": {}}, "description": "Community brief as a text file."},
    404: UNKNOWN_ALERT_RESPONSE,
    502: FLOW_FAILED_RESPONSE,
})
async def download_brief(alert_id: str, services: ServiceManager = Depends(get_services)) -> PlainTextResponse:
    """Generate a community brief and return it as community-brief-<alertId>.txt."""
    brief = await _generate_brief(alert_id, services)
    return PlainTextResponse(
        brief.communityBrief,
        headers={"Content-Disposition": f'attachment; filename="{brief_filename(alert_id)}"'},
    )
