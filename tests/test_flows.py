"""
Tests for schema-validated LLM flows, using a stub backend.
"""
import json
import random
from datetime import datetime
from types import SimpleNamespace

import httpx
import openai
import pytest

from sitetwin.core.flows.actions import (
    analyze_failure_risk,
    build_community_brief_input,
    build_failure_input,
    build_threshold_input,
    combine_what_if,
    time_of_day,
)
from sitetwin.core.flows.backend import OpenAIBackend
from sitetwin.core.flows.base import FlowResult, strip_code_fence
from sitetwin.core.flows.community_brief import CommunityBriefFlow, brief_filename
from sitetwin.core.flows.equipment_failure import EquipmentFailureFlow
from sitetwin.core.flows.errors import FlowError, FlowInputError, FlowOutputError, FlowTransportError
from sitetwin.core.flows.material_reuse import MaterialReuseFlow, MaterialReuseSuggestion
from sitetwin.core.flows.threshold_prediction import ThresholdPredictionFlow
from sitetwin.core.flows.what_if import WhatIfFlow, WhatIfInput, WhatIfOutput
from sitetwin.core.models.alert import Alert, AlertSeverity
from sitetwin.core.services.mock_data import generate_asset_data
from sitetwin.core.services.sensor_manager import SensorManager
from conftest import StubBackend, make_config

REUSE_SUGGESTIONS = [
    {"reuseSuggestion": "Crush concrete for use as road base.", "co2Savings": 500, "costSavings": 1000},
    {"reuseSuggestion": "Use crushed concrete as drainage aggregate.", "co2Savings": 320.5, "costSavings": 740},
]

CONCRETE_REQUEST = {"material": "concrete", "quantity": 10, "location": "New York, NY"}


class TestMaterialReuse:

    @pytest.mark.asyncio
    async def test_returns_backend_array_unchanged(self) -> None:
        backend = StubBackend({"material_reuse": json.dumps(REUSE_SUGGESTIONS)})
        result = await MaterialReuseFlow(backend).run(CONCRETE_REQUEST)

        assert all(isinstance(s, MaterialReuseSuggestion) for s in result)
        assert [s.model_dump() for s in result] == REUSE_SUGGESTIONS

    @pytest.mark.asyncio
    async def test_prompt_contains_request_fields(self) -> None:
        backend = StubBackend({"material_reuse": "[]"})
        await MaterialReuseFlow(backend).run(CONCRETE_REQUEST)

        flow, prompt = backend.calls[0]
        assert flow == "material_reuse"
        assert "Material: concrete" in prompt
        assert "Quantity: 10 tons" in prompt
        assert "Location: New York, NY" in prompt

    @pytest.mark.asyncio
    async def test_fenced_json_accepted(self) -> None:
        fenced = "```json\n" + json.dumps(REUSE_SUGGESTIONS) + "\n```"
        result = await MaterialReuseFlow(StubBackend({"material_reuse": fenced})).run(CONCRETE_REQUEST)
        assert len(result) == 2

    @pytest.mark.parametrize("answer", [
        '[{"reuseSuggestion": "Crush it", "co2Savings": "lots", "costSavings": 10}]',
        '[{"reuseSuggestion": "Crush it", "co2Savings": 5}]',
        '{"reuseSuggestion": "Crush it", "co2Savings": 5, "costSavings": 10}',
        "Sorry, I cannot help with that.",
    ])
    @pytest.mark.asyncio
    async def test_invalid_output_is_typed_failure(self, answer: str) -> None:
        flow = MaterialReuseFlow(StubBackend({"material_reuse": answer}))
        with pytest.raises(FlowOutputError) as exc_info:
            await flow.run(CONCRETE_REQUEST)
        assert exc_info.value.flow == "material_reuse"

    @pytest.mark.parametrize("request_data", [
        {"material": "concrete", "quantity": "ten", "location": "New York, NY"},
        {"material": "concrete", "location": "New York, NY"},
    ])
    @pytest.mark.asyncio
    async def test_invalid_input_rejected_before_calling_backend(self, request_data) -> None:
        backend = StubBackend({"material_reuse": "[]"})
        with pytest.raises(FlowInputError):
            await MaterialReuseFlow(backend).run(request_data)
        assert backend.calls == []


class TestFailures:

    @pytest.mark.asyncio
    async def test_schema_failure_never_returns_partial_result(self) -> None:
        flow = CommunityBriefFlow(StubBackend({"community_brief": '{"communityBrief": 42}'}))
        with pytest.raises(FlowOutputError):
            await flow.run(_brief_request())

    @pytest.mark.asyncio
    async def test_transport_failure_propagates(self) -> None:
        backend = StubBackend(error=FlowTransportError("what_if", "LLM request failed: timeout"))
        with pytest.raises(FlowTransportError):
            await WhatIfFlow(backend).run({"truckDelayHours": 2, "energyUsagePercentage": 80})

    @pytest.mark.asyncio
    async def test_run_safe_reports_failure(self) -> None:
        flow = ThresholdPredictionFlow(StubBackend({"threshold_prediction": "{}"}))
        result = await flow.run_safe(_threshold_request())
        assert result.ok is False
        assert result.data is None
        assert "output failed validation" in result.error

    @pytest.mark.asyncio
    async def test_run_safe_success(self) -> None:
        answer = {"predictedDelayDays": 1.5, "predictedCO2Emissions": 200, "predictedCostSavings": 50}
        result = await WhatIfFlow(StubBackend({"what_if": json.dumps(answer)})).run_safe(
            WhatIfInput(truckDelayHours=4, energyUsagePercentage=90)
        )
        assert result == FlowResult(ok=True, data=WhatIfOutput(**answer))

    def test_flow_errors_share_base(self) -> None:
        for cls in (FlowInputError, FlowOutputError, FlowTransportError):
            assert issubclass(cls, FlowError)


class TestEquipmentFailure:

    @pytest.mark.asyncio
    async def test_probability_outside_unit_interval_rejected(self) -> None:
        answer = [{"sensorId": 1, "assetName": "Pump", "failureProbability": 1.5, "reason": "r", "recommendation": "x"}]
        flow = EquipmentFailureFlow(StubBackend({"equipment_failure": json.dumps(answer)}))
        asset = generate_asset_data(rng=random.Random(2))[1]
        with pytest.raises(FlowOutputError):
            await flow.run(build_failure_input(asset))

    def test_prompt_lists_history(self) -> None:
        asset = generate_asset_data(rng=random.Random(2))[3]
        prompt = EquipmentFailureFlow(StubBackend()).render(build_failure_input(asset))
        assert "Sensor ID: 3" in prompt
        assert "Asset Name: Solar Inverter 7" in prompt
        assert prompt.count("  Timestamp: ") == 24

    @pytest.mark.asyncio
    async def test_analyze_failure_risk_success(self) -> None:
        answer = [{"sensorId": 0, "assetName": "HVAC Unit A-1", "failureProbability": 0.35,
                   "reason": "Rising load", "recommendation": "Inspect compressor"}]
        flow = EquipmentFailureFlow(StubBackend({"equipment_failure": json.dumps(answer)}))
        asset = generate_asset_data(rng=random.Random(2))[0]

        result = await analyze_failure_risk(asset, flow)

        assert result.ok
        assert result.data[0].failureProbability == 0.35

    @pytest.mark.asyncio
    async def test_analyze_failure_risk_failure_message(self) -> None:
        flow = EquipmentFailureFlow(StubBackend(error=FlowTransportError("equipment_failure", "LLM request failed")))
        asset = generate_asset_data(rng=random.Random(2))[0]

        result = await analyze_failure_risk(asset, flow)

        assert result.ok is False
        assert result.error == "An error occurred during analysis: LLM request failed"

    def test_failure_input_uses_iso_timestamps(self) -> None:
        asset = generate_asset_data(rng=random.Random(2))[5]
        request = build_failure_input(asset)
        series = request.sensorData[0]
        assert (series.id, series.name, series.unit) == (5, asset.name, asset.unit)
        assert series.history[0].timestamp == asset.history[0].timestamp.isoformat()
        assert [h.value for h in series.history] == [p.value for p in asset.history]


class TestActions:

    def test_threshold_input_from_snapshot(self) -> None:
        manager = SensorManager(make_config())
        request = build_threshold_input(manager.snapshot(), datetime(2026, 10, 19, 9, 30))
        assert request.noiseLevel == 68.0
        assert request.airQualityIndex == 35.0
        assert request.waterConsumptionRate == 1200.0
        assert request.energyConsumptionRate == 450.0
        assert request.timeOfDay == "morning"
        assert request.dayOfWeek == "Monday"

    @pytest.mark.parametrize("hour,expected", [
        (4, "night"), (5, "morning"), (12, "afternoon"), (17, "evening"), (21, "night"),
    ])
    def test_time_of_day(self, hour: int, expected: str) -> None:
        assert time_of_day(datetime(2026, 1, 1, hour)) == expected

    def test_community_brief_input_from_alert(self) -> None:
        alert = Alert(
            id="alert-1-abc", title="Noise Level Threshold Exceeded", description="Noise Level at 80.00 dB",
            severity=AlertSeverity.HIGH, mitigation_plan="Install barriers", community_impact="Noise",
            timestamp=datetime(2026, 10, 19, 14, 0).timestamp(),
        )
        request = build_community_brief_input(alert, "EcoConstruct Site A")
        assert request.alertType == alert.title
        assert request.alertDetails == alert.description
        assert request.mitigationPlan == "Install barriers"
        assert request.communityImpact == "Noise"
        assert request.siteName == "EcoConstruct Site A"
        assert request.date == "2026-10-19"

    def test_combine_what_if_applies_baseline(self) -> None:
        combined = combine_what_if(
            WhatIfInput(truckDelayHours=6, energyUsagePercentage=50),
            WhatIfOutput(predictedDelayDays=2, predictedCO2Emissions=1000, predictedCostSavings=300),
        )
        assert combined.predictedDelayDays == 7
        assert combined.predictedCO2Emissions == 8500
        assert combined.predictedCostSavings == 300

    def test_brief_filename(self) -> None:
        assert brief_filename("alert-17-x") == "community-brief-alert-17-x.txt"


class TestOpenAIBackend:

    @staticmethod
    def fake_client(create):
        return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    @pytest.mark.asyncio
    async def test_returns_message_content(self) -> None:
        captured = {}

        async def create(**kwargs):
            captured.update(kwargs)
            message = SimpleNamespace(content='{"communityBrief": "Hello"}')
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])

        backend = OpenAIBackend(model="test-model", client=self.fake_client(create))
        text = await backend.complete("community_brief", "prompt", {"type": "object"})

        assert text == '{"communityBrief": "Hello"}'
        assert captured["model"] == "test-model"
        assert captured["response_format"] == {"type": "json_object"}
        assert captured["messages"][-1] == {"role": "user", "content": "prompt"}

    @pytest.mark.asyncio
    async def test_array_schema_skips_json_mode(self) -> None:
        captured = {}

        async def create(**kwargs):
            captured.update(kwargs)
            return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="[]"))])

        backend = OpenAIBackend(client=self.fake_client(create))
        await backend.complete("material_reuse", "prompt", {"type": "array"})
        assert "response_format" not in captured

    @pytest.mark.asyncio
    async def test_api_error_becomes_transport_failure(self) -> None:
        async def create(**kwargs):
            raise openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))

        backend = OpenAIBackend(client=self.fake_client(create))
        with pytest.raises(FlowTransportError):
            await backend.complete("what_if", "prompt", {"type": "object"})

    @pytest.mark.asyncio
    async def test_empty_content_is_output_failure(self) -> None:
        async def create(**kwargs):
            return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])

        backend = OpenAIBackend(client=self.fake_client(create))
        with pytest.raises(FlowOutputError):
            await backend.complete("what_if", "prompt", {"type": "object"})


def test_strip_code_fence() -> None:
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'


def _brief_request() -> dict:
    return {
        "alertType": "Noise Level Threshold Exceeded",
        "alertDetails": "Noise Level at 80.00 dB has exceeded the limit of 75 dB.",
        "mitigationPlan": "Install temporary noise barriers.",
        "communityImpact": "Temporary high noise levels.",
        "siteName": "EcoConstruct Site A",
        "date": "2026-10-19",
    }


def _threshold_request() -> dict:
    return {
        "noiseLevel": 70, "airQualityIndex": 40, "waterConsumptionRate": 1500,
        "energyConsumptionRate": 500, "timeOfDay": "afternoon", "dayOfWeek": "Monday",
    }
