"""
Tests for the service container wiring.
"""
import json
import random

import pytest

from sitetwin.core import service_manager as service_manager_module
from sitetwin.core.config_loader import ConfigLoader
from sitetwin.core.flows.registry import FlowRegistry
from sitetwin.core.service_manager import ServiceManager
from conftest import StubBackend


def build(seed: int, **kwargs) -> ServiceManager:
    return ServiceManager(ConfigLoader(), flows=FlowRegistry(backend=StubBackend()), rng=random.Random(seed), **kwargs)


def values(services: ServiceManager, ticks: int = 5):
    return [tuple(r.value for r in services.sensor_manager.tick()) for _ in range(ticks)]


def test_same_seed_same_ticks() -> None:
    assert values(build(11)) == values(build(11))


@pytest.mark.parametrize("asset_draws", [0, 1, 500])
def test_ticks_independent_of_asset_generation(monkeypatch, asset_draws) -> None:
    reference = values(build(11))

    def fake_assets(rng=None):
        for _ in range(asset_draws):
            rng.random()
        return []

    monkeypatch.setattr(service_manager_module, "generate_asset_data", fake_assets)
    assert values(build(11)) == reference


def test_assets_indexed_by_id() -> None:
    services = build(5)
    assert len(services.assets) == 15
    assert services.get_asset(services.assets[3].id) is services.assets[3]
    with pytest.raises(KeyError):
        services.get_asset(999)


def test_overrides_and_site_name(tmp_path) -> None:
    path = tmp_path / "site_config.json"
    path.write_text(json.dumps({"site_name": "Harbour Tower", "offline": False}))
    services = ServiceManager(ConfigLoader(path), flows=FlowRegistry(backend=StubBackend()), tick_interval=2.0, offline=True)
    assert services.site_name == "Harbour Tower"
    assert services.sensor_manager.tick_interval == 2.0
    assert services.sensor_manager.offline is True


def test_starts_with_zero_capacity_in_file(tmp_path) -> None:
    path = tmp_path / "site_config.json"
    path.write_text(json.dumps({"alert_capacity": 0, "history_size": 0}))
    services = ServiceManager(ConfigLoader(path), flows=FlowRegistry(backend=StubBackend()))
    assert services.sensor_manager.alert_log.capacity == 20
