"""
Configuration management for WiFi Manager.

This module handles loading and default configuration values
for the WiFi Manager application.
"""

import logging

import toml
from pathlib import Path

# --- App Constants ---
APP_NAME = "wifimanager"
APP_TITLE = "WiFi Manager"
CONFIG_DIR = Path.home() / ".config" / APP_NAME
STORAGE_FILE = CONFIG_DIR / "storage.toml"
LOG_DIR = Path.home() / "Library" / "Logs"
LOG_FILE = LOG_DIR / "wifimanager.log"

# --- Logging Constants ---
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- System Utilities ---
NETWORKSETUP = "/usr/sbin/networksetup"
SYSTEM_PROFILER = "/usr/sbin/system_profiler"
IPCONFIG = "/usr/sbin/ipconfig"
SECURITY = "/usr/bin/security"

# --- Connection Constants ---
DEFAULT_POLL_INTERVAL_MS = 500  # Delay between connection checks
DEFAULT_CONNECT_TIMEOUT_MS = 20000  # Give up verifying after this long
TOGGLE_SETTLE_SECONDS = 1  # Wait for the radio to come up before rescanning
DEFAULT_DEBUG = False

# --- Storage Keys ---
USAGE_COUNTS_KEY = "network_usage_counts"
TRUSTED_NETWORKS_KEY = "trusted_networks_attempted"

# Default configuration for the application
DEFAULT_CONFIG = {
    "settings": {
        "debug": DEFAULT_DEBUG,
        "poll_interval_ms": DEFAULT_POLL_INTERVAL_MS,
        "connect_timeout_ms": DEFAULT_CONNECT_TIMEOUT_MS,
    },
}


def get_config_path():
    """Gets the path to the configuration file."""
    return CONFIG_DIR / "config.toml"


def load_config():
    """Loads the configuration from the TOML file."""
    path = get_config_path()
    if not path.exists():
        # Create a default config if one doesn't exist
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            toml.dump(DEFAULT_CONFIG, f)
        return DEFAULT_CONFIG

    with open(path, "r") as f:
        config = toml.load(f)

    # logging_config imports this module, so use the stdlib logger directly
    logging.getLogger(__name__).debug(f"Loaded settings: {config.get('settings', {})}")
    return config


def get_setting(cfg, name):
    """Read a setting, falling back to the built-in default."""
    return cfg.get("settings", {}).get(name, DEFAULT_CONFIG["settings"][name])

