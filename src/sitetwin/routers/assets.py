from typing import List

from fastapi import APIRouter, Depends, HTTPException

from sitetwin.core.flows.actions import analyze_failure_risk
from sitetwin.core.flows.equipment_failure import EquipmentFailurePrediction
from sitetwin.core.service_manager import ServiceManager
from sitetwin.routers.deps import FLOW_FAILED_RESPONSE, get_services
from sitetwin.schemas import AssetList, AssetSchema

router = APIRouter(prefix="/assets", tags=["assets"])

UNKNOWN_ASSET_RESPONSE = {
    "description": "No asset with this id.",
    "content": {
        "application/json": {
            "example": {"detail": "Asset 99 not found"}
        }
    }
}


def _get_asset(asset_id: int, services: ServiceManager):
    try:
        return services.get_asset(asset_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Asset {asset_id} not found")


@router.get("", response_model=AssetList)
async def list_assets(services: ServiceManager = Depends(get_services)) -> AssetList:
    """Monitored site assets with their last 24h of readings."""
    return AssetList(list=[AssetSchema.from_asset(a) for a in services.assets])


@router.get("/{asset_id}", response_model=AssetSchema, responses={404: UNKNOWN_ASSET_RESPONSE})
async def get_asset(asset_id: int, services: ServiceManager = Depends(get_services)) -> AssetSchema:
    return AssetSchema.from_asset(_get_asset(asset_id, services))


@router.post("/{asset_id}/failure-risk", response_model=List[EquipmentFailurePrediction], responses={
    404: UNKNOWN_ASSET_RESPONSE,
    502: FLOW_FAILED_RESPONSE,
})
async def failure_risk(asset_id: int, services: ServiceManager = Depends(get_services)) -> List[EquipmentFailurePrediction]:
    """Predict equipment failure for one asset from its history."""
    asset = _get_asset(asset_id, services)
    result = await analyze_failure_risk(asset, services.flows.equipment_failure)
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return result.data
