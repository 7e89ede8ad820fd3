"""Tests for configuration loading."""

import pytest

from indoorair.bridge.config import BridgeConfig, load_config
from indoorair.shared.config import apply_env_overrides, get_config_path

CONFIG_YAML = """
url: http://192.168.1.50/
polling_interval_ms: 10000
name: Office
mode: accessory
information:
  manufacturer: Acme
mqtt:
  broker: mqtt.local
  port: 1884
base_topic: /home/
log_level: debug
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("INDOOR_AIR_URL", "INDOOR_AIR_POLLING_INTERVAL_MS", "MQTT_BROKER", "LOG_LEVEL",
                "INDOOR_AIR_CONFIG", "INDOOR_AIR_ENV"):
        monkeypatch.delenv(var, raising=False)


def test_from_dict_defaults():
    config = BridgeConfig.from_dict({"url": "http://sensor/", "polling_interval_ms": 30000})

    assert config.name == "Indoor Air Sensor"
    assert config.mode == "platform"
    assert config.fetch_timeout == 15.0
    assert config.information.manufacturer == "Chassot"
    assert config.mqtt.broker == "localhost"
    assert config.base_topic == "homebridge"


def test_from_dict_accepts_homebridge_key():
    config = BridgeConfig.from_dict({"url": "http://sensor/", "pollingIntervalMS": "5000"})

    assert config.polling_interval_ms == 5000


def test_configured_fetch_timeout():
    config = BridgeConfig.from_dict(
        {"url": "http://sensor/", "polling_interval_ms": 30000, "fetch_timeout_ms": 2000}
    )

    assert config.fetch_timeout == 2.0


@pytest.mark.parametrize(
    "data",
    [
        {"polling_interval_ms": 1000},
        {"url": "", "polling_interval_ms": 1000},
        {"url": "http://sensor/"},
        {"url": "http://sensor/", "polling_interval_ms": 0},
        {"url": "http://sensor/", "polling_interval_ms": "often"},
        {"url": "http://sensor/", "polling_interval_ms": 1.9},
        {"url": "http://sensor/", "polling_interval_ms": True},
        {"url": "http://sensor/", "polling_interval_ms": 1000, "fetch_timeout_ms": 1000},
        {"url": "http://sensor/", "polling_interval_ms": 1000, "mode": "hub"},
    ],
)
def test_from_dict_rejects_invalid(data):
    with pytest.raises(ValueError):
        BridgeConfig.from_dict(data)


def test_load_config_from_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)

    config = load_config(path)

    assert config.url == "http://192.168.1.50/"
    assert config.polling_interval_ms == 10000
    assert config.mode == "accessory"
    assert config.information.manufacturer == "Acme"
    assert config.information.model == "Air Sensor"
    assert config.mqtt.broker == "mqtt.local"
    assert config.mqtt.port == 1884
    assert config.base_topic == "home"
    assert config.log_level == "DEBUG"


def test_load_config_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    monkeypatch.setenv("INDOOR_AIR_CONFIG", str(path))
    monkeypatch.setenv("INDOOR_AIR_POLLING_INTERVAL_MS", "60000")
    monkeypatch.setenv("MQTT_BROKER", "broker.test")

    config = load_config()

    assert config.polling_interval_ms == 60000
    assert config.mqtt.broker == "broker.test"
    assert config.mqtt.port == 1884


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_apply_env_overrides_copies_nested_sections(monkeypatch):
    data = {"mqtt": {"broker": "localhost", "port": 1883}}
    monkeypatch.setenv("MQTT_BROKER", "broker.test")
    monkeypatch.setenv("EMPTY_VAR", "")

    merged = apply_env_overrides(data, {"mqtt.broker": "MQTT_BROKER", "name": "EMPTY_VAR"})

    assert merged == {"mqtt": {"broker": "broker.test", "port": 1883}}
    assert data["mqtt"]["broker"] == "localhost"


def test_config_path_follows_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("INDOOR_AIR_ENV", "garage")

    assert get_config_path(config_dir=tmp_path) == tmp_path / "config-garage.yaml"
    assert get_config_path().name == "config-garage.yaml"


def test_from_dict_accepts_whole_float_interval():
    config = BridgeConfig.from_dict({"url": "http://sensor/", "polling_interval_ms": 5000.0})

    assert config.polling_interval_ms == 5000


def test_from_dict_null_keys_fall_back_to_defaults():
    config = BridgeConfig.from_dict(
        {"url": "http://sensor/", "polling_interval_ms": 1000, "log_level": None, "base_topic": None}
    )

    assert config.log_level == "INFO"
    assert config.base_topic == "homebridge"
