"""Pytest configuration and fixtures for test suite."""

import random
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from sitetwin.core.config_loader import ConfigLoader
from sitetwin.core.flows.registry import FlowRegistry
from sitetwin.core.models.config_data import configData, configSensorData
from sitetwin.core.models.sensor_enum import SensorId
from sitetwin.core.service_manager import ServiceManager
from sitetwin.core.services.sensor_manager import SensorManager
from sitetwin.main import create_app


class StubBackend:
    """LLM backend returning canned text per flow name."""

    def __init__(self, responses: Optional[Dict[str, str]] = None, error: Optional[Exception] = None):
        self.responses = dict(responses or {})
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def complete(self, flow: str, prompt: str, json_schema: dict[str, Any]) -> str:
        self.calls.append((flow, prompt))
        if self.error is not None:
            raise self.error
        return self.responses[flow]


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed list of draws."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)

    def random(self) -> float:
        return self.draws.pop(0)


def make_config(*sensor_ids: SensorId, **overrides) -> configData:
    """Default site config, optionally restricted to the given sensors."""
    config = ConfigLoader._get_default_config()
    if sensor_ids:
        config.sensors = {sid: cfg for sid, cfg in config.sensors.items() if sid in sensor_ids}
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def noise_only(value: float = 70.0, limit: float = 75.0, **overrides) -> configData:
    config = make_config(SensorId.NOISE, **overrides)
    config.sensors[SensorId.NOISE] = configSensorData(
        SensorId.NOISE, displayName="Noise Level", unit="dB", limit=limit, initial=value
    )
    return config


@pytest.fixture
def fixed_clock():
    return lambda: 1_700_000_000.0


@pytest.fixture
def manager(fixed_clock) -> SensorManager:
    return SensorManager(make_config(), rng=random.Random(42), clock=fixed_clock)


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def services(backend: StubBackend) -> ServiceManager:
    return ServiceManager(ConfigLoader(), flows=FlowRegistry(backend=backend), rng=random.Random(3), offline=False)


@pytest.fixture
def client(services: ServiceManager) -> TestClient:
    """Test client without lifespan: the tick loop is driven by the tests."""
    return TestClient(create_app(services=services))
