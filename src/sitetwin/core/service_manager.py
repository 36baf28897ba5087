# External libs
import logging
import random
from typing import Dict, List, Optional

# Internal libs
from sitetwin.core.config_loader import ConfigLoader
from sitetwin.core.event_hub import EventHub
from sitetwin.core.flows.registry import FlowRegistry
from sitetwin.core.models.sensor_data import SensorData
from sitetwin.core.services.mock_data import generate_asset_data
from sitetwin.core.services.sensor_manager import SensorManager

logger = logging.getLogger(__name__)


class ServiceManager:
    """
    Container for everything the API works against: live sensors and
    alerts, mock asset data and flows. One instance per application,
    handed to routers through FastAPI dependencies.
    """

    def __init__(
        self,
        config_loader: ConfigLoader,
        flows: Optional[FlowRegistry] = None,
        rng: Optional[random.Random] = None,
        tick_interval: Optional[float] = None,
        offline: Optional[bool] = None,
    ):
        self.config_loader = config_loader
        config = config_loader.get_config()
        if tick_interval is not None:
            config.tick_interval = tick_interval
        if offline is not None:
            config.offline = offline

        # Separate streams so the tick sequence does not depend on how many
        # draws the mock assets consume.
        seed = rng or random.Random()
        simulation_rng = random.Random(seed.getrandbits(64))
        asset_rng = random.Random(seed.getrandbits(64))

        self.site_name = config_loader.get_site_name()
        self.event_hub = EventHub()
        self.sensor_manager = SensorManager(config, event_hub=self.event_hub, rng=simulation_rng)
        self.flows = flows or FlowRegistry()
        self.assets: List[SensorData] = generate_asset_data(rng=asset_rng)
        self._assets_by_id: Dict[int, SensorData] = {asset.id: asset for asset in self.assets}

    def get_asset(self, asset_id: int) -> SensorData:
        return self._assets_by_id[asset_id]

    async def start_services(self):
        """Start background services if not already started."""
        logger.info("Starting background services...")
        self.sensor_manager.start()
        logger.info("Background services started.")

    def stop_services(self):
        """Stop background services."""
        self.sensor_manager.stop()
        self.event_hub.unsubscribe_all()
        logger.info("Background services stopped.")
