from typing import Optional

from sitetwin.core.flows.backend import LLMBackend, OpenAIBackend
from sitetwin.core.flows.community_brief import CommunityBriefFlow
from sitetwin.core.flows.equipment_failure import EquipmentFailureFlow
from sitetwin.core.flows.material_reuse import MaterialReuseFlow
from sitetwin.core.flows.threshold_prediction import ThresholdPredictionFlow
from sitetwin.core.flows.what_if import WhatIfFlow


class FlowRegistry:
    """The site's flows, sharing one backend."""

    def __init__(self, backend: Optional[LLMBackend] = None, model: Optional[str] = None):
        if backend is None:
            backend = OpenAIBackend(model=model) if model else OpenAIBackend()
        self.backend = backend
        self.community_brief = CommunityBriefFlow(backend)
        self.material_reuse = MaterialReuseFlow(backend)
        self.threshold_prediction = ThresholdPredictionFlow(backend)
        self.equipment_failure = EquipmentFailureFlow(backend)
        self.what_if = WhatIfFlow(backend)
