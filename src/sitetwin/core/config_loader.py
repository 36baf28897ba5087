import json
import logging
from pathlib import Path
from typing import Any, Optional

from sitetwin.core.models.sensor_enum import SensorId
from sitetwin.core.models.config_data import configData, configSensorData

logger = logging.getLogger(__name__)


def _read_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false, got {value!r}")
    return value


def _read_number(data: dict, key: str, default: float, minimum: float = 0.0, inclusive: bool = True) -> float:
    value = data.get(key, default)
    # bool is an int subclass, but "limit": true is a typo, not a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' must be a number, got {value!r}")
    if value < minimum or (not inclusive and value == minimum):
        bound = ">=" if inclusive else ">"
        raise ValueError(f"'{key}' must be {bound} {minimum:g}, got {value!r}")
    return float(value)


def _read_count(data: dict, key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{key}' must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"'{key}' must be positive, got {value}")
    return value


class ConfigLoader:
    """Loads and manages site and sensor configuration from a JSON file."""

    def __init__(self, config_path: Optional[Path] = None):
        self._config_path = Path(config_path) if config_path else self.get_default_config_path()
        self._config = self._get_default_config()
        self.load_config()

    @staticmethod
    def get_default_config_path() -> Path:
        """Get the path to the bundled site_config.json file."""
        # project_root/config/site_config.json
        return Path(__file__).parent.parent.parent.parent / "config" / "site_config.json"

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load_config(self):
        """
        Load configuration from JSON file.

        Any invalid value (unknown sensor, wrong type, negative limit, zero
        capacity...) rejects the whole file and the defaults are used.
        """
        # Start from defaults so _config is always complete
        self._config = self._get_default_config()

        if not self._config_path.exists():
            logger.error(f"Configuration file not found: {self._config_path}")
            return

        try:
            with open(self._config_path, 'r') as f:
                json_data = json.load(f)
            self._config = self._parse(json_data)
            logger.info(f"Configuration loaded from {self._config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Invalid configuration in {self._config_path}: {e}")
            self._config = self._get_default_config()

    @classmethod
    def _parse(cls, json_data: Any) -> configData:
        if not isinstance(json_data, dict):
            raise TypeError("Top-level configuration must be an object")
        config = cls._get_default_config()

        for sensor_key, sensor_cfg in json_data.get("sensors", {}).items():
            sensor_id = SensorId(sensor_key.lower())
            default = config.sensors[sensor_id]
            config.sensors[sensor_id] = configSensorData(
                sensor_id,
                displayName=str(sensor_cfg.get("display_name", default.displayName)),
                unit=str(sensor_cfg.get("unit", default.unit)),
                limit=_read_number(sensor_cfg, "limit", default.limit),
                initial=max(0.0, float(sensor_cfg.get("initial", default.initial))),
                enabled=_read_bool(sensor_cfg, "enabled", default.enabled),
            )

        config.site_name = str(json_data.get("site_name", config.site_name))
        config.tick_interval = _read_number(json_data, "tick_interval", config.tick_interval, inclusive=False)
        config.spike_probability = _read_number(json_data, "spike_probability", config.spike_probability)
        if config.spike_probability > 1.0:
            raise ValueError(f"'spike_probability' must be <= 1, got {config.spike_probability}")
        config.alert_capacity = _read_count(json_data, "alert_capacity", config.alert_capacity)
        config.history_size = _read_count(json_data, "history_size", config.history_size)
        config.offline = _read_bool(json_data, "offline", config.offline)
        return config

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""

        return configData(
            sensors={
                SensorId.ENERGY: configSensorData(SensorId.ENERGY, displayName="Energy Consumption", unit="kWh", limit=600.0, initial=450.0),
                SensorId.WATER: configSensorData(SensorId.WATER, displayName="Water Usage", unit="L", limit=2000.0, initial=1200.0),
                SensorId.NOISE: configSensorData(SensorId.NOISE, displayName="Noise Level", unit="dB", limit=75.0, initial=68.0),
                SensorId.AIR: configSensorData(SensorId.AIR, displayName="Air Quality (PM2.5)", unit="μg/m³", limit=50.0, initial=35.0),
            }
        )

    def get_config(self) -> configData:
        return self._config

    def get_site_name(self) -> str:
        return self._config.site_name
