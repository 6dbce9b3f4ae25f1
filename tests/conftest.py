"""
Pytest configuration and shared fixtures for WiFi Manager tests.

This module provides reusable fixtures and configuration for all tests.
"""

import json

import pytest
from unittest.mock import MagicMock

from wifimanager.models import JoinOutcome, Network


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no OS access")


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scheduler(fake_clock):
    """A PollScheduler with the default cadence driven by the fake clock."""
    from wifimanager.workflow import PollScheduler

    return PollScheduler(sleep=fake_clock.sleep, clock=fake_clock)


@pytest.fixture
def sample_report():
    """Decoded `system_profiler SPAirPortDataType -json` output."""
    return {
        "SPAirPortDataType": [
            {
                "spairport_airport_interfaces": [
                    {
                        "_name": "en0",
                        "spairport_current_network_information": {
                            "_name": "HomeWiFi",
                            "spairport_signal_noise": "-55 dBm / -90 dBm",
                            "spairport_security_mode": "spairport_security_mode_wpa2_personal",
                        },
                        "spairport_airport_other_local_wireless_networks": [
                            {
                                "_name": "CoffeeShop",
                                "spairport_signal_noise": "-70 dBm / -92 dBm",
                                "spairport_security_mode": "spairport_security_mode_none",
                            },
                            {
                                "_name": "HomeWiFi",
                                "spairport_signal_noise": "-40 dBm / -90 dBm",
                                "spairport_security_mode": "spairport_security_mode_wpa2_personal",
                            },
                            {"_name": "Neighbor", "RSSI": "-85", "SECURITY": "WPA3 Personal"},
                            {"_name": "NoSignal", "spairport_security_mode": "spairport_security_mode_none"},
                            {"_name": "Neighbor", "RSSI": "-60", "SECURITY": "WPA3 Personal"},
                        ],
                    }
                ]
            }
        ]
    }


@pytest.fixture
def sample_report_json(sample_report):
    return json.dumps(sample_report)


@pytest.fixture
def hardware_ports_output():
    """Output of `networksetup -listallhardwareports`."""
    return """
Hardware Port: Thunderbolt Bridge
Device: bridge0
Ethernet Address: 36:a1:2b:00:00:01

Hardware Port: Wi-Fi
Device: en0
Ethernet Address: a4:83:e7:00:00:02

Hardware Port: Thunderbolt 1
Device: en1
Ethernet Address: 36:a1:2b:00:00:03

VLAN Configurations
===================
"""


@pytest.fixture
def open_network():
    return Network(name="CoffeeShop", strength=60, security="spairport_security_mode_none")


@pytest.fixture
def secured_network():
    return Network(name="HomeWiFi", strength=90, security="spairport_security_mode_wpa2_personal")


@pytest.fixture
def mock_adapter():
    """A WifiAdapter stand-in whose join succeeds and never connects."""
    adapter = MagicMock()
    adapter.interface_name = "en0"
    adapter.is_radio_enabled.return_value = True
    adapter.scan.return_value = []
    adapter.ip_address.return_value = "192.168.1.20"
    adapter.join.return_value = JoinOutcome(output="", reported_failure=False)
    adapter.current_network_name.return_value = None
    adapter.trust_password.return_value = None
    return adapter


@pytest.fixture
def usage_store(tmp_path):
    from wifimanager.storage import LocalStorage, UsageStore

    return UsageStore(LocalStorage(tmp_path / "storage.toml"))


@pytest.fixture(autouse=True)
def isolated_paths(tmp_path, monkeypatch):
    """Keep config, storage and log files out of the real home directory."""
    from wifimanager import config

    config_dir = tmp_path / ".config" / "wifimanager"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "STORAGE_FILE", config_dir / "storage.toml")
    monkeypatch.setattr(config, "LOG_DIR", tmp_path / "Logs")
    monkeypatch.setattr(config, "LOG_FILE", tmp_path / "Logs" / "wifimanager.log")
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    # Clear all handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    # Reset to default level
    root_logger.setLevel(logging.WARNING)
    yield
    # Cleanup after test
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
