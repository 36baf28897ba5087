import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from sitetwin.core.flows.actions import build_threshold_input, combine_what_if
from sitetwin.core.flows.errors import FlowError
from sitetwin.core.flows.material_reuse import MATERIAL_LABELS, MaterialReuseInput, MaterialReuseSuggestion
from sitetwin.core.flows.threshold_prediction import ThresholdPredictionInput, ThresholdPredictionOutput
from sitetwin.core.flows.what_if import WhatIfInput, WhatIfOutput
from sitetwin.core.service_manager import ServiceManager
from sitetwin.routers.deps import FLOW_FAILED_RESPONSE, flow_http_error, get_services
from sitetwin.schemas import MaterialList, MaterialOption

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flows", tags=["flows"])


@router.get("/material-reuse/materials", response_model=MaterialList)
async def material_options() -> MaterialList:
    """Materials offered in the reuse advisor, in display order."""
    return MaterialList(list=[MaterialOption(value=value, label=label) for value, label in MATERIAL_LABELS.items()])


@router.post("/material-reuse", response_model=List[MaterialReuseSuggestion], responses={502: FLOW_FAILED_RESPONSE})
async def material_reuse(
    payload: MaterialReuseInput, services: ServiceManager = Depends(get_services)
) -> List[MaterialReuseSuggestion]:
    """Reuse suggestions for a demolition material."""
    try:
        return await services.flows.material_reuse.run(payload)
    except FlowError as exc:
        logger.error(f"Failed to get material reuse suggestions: {exc}")
        raise flow_http_error(exc, "Failed to get reuse suggestions. Please try again.")


@router.post("/threshold-prediction", response_model=ThresholdPredictionOutput, responses={502: FLOW_FAILED_RESPONSE})
async def threshold_prediction(
    payload: Optional[ThresholdPredictionInput] = None, services: ServiceManager = Depends(get_services)
) -> ThresholdPredictionOutput:
    """
    Predict threshold violations. Without a body, the input is built from
    the current sensor readings and the server's local time.
    """
    if payload is None:
        payload = build_threshold_input(services.sensor_manager.snapshot(), datetime.now())
    try:
        return await services.flows.threshold_prediction.run(payload)
    except FlowError as exc:
        logger.error(f"Failed to predict threshold violations: {exc}")
        raise flow_http_error(exc, "Failed to predict threshold violations. Please try again.")


@router.post("/what-if", response_model=WhatIfOutput, responses={502: FLOW_FAILED_RESPONSE})
async def what_if(payload: WhatIfInput, services: ServiceManager = Depends(get_services)) -> WhatIfOutput:
    """Simulate a what-if scenario and apply it to the project baseline."""
    try:
        result = await services.flows.what_if.run(payload)
    except FlowError as exc:
        logger.error(f"Simulation failed: {exc}")
        raise flow_http_error(exc, "Simulation failed. Please try again.")
    return combine_what_if(payload, result)
