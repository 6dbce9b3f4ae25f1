"""
WiFi Manager - view, rank and join Wi-Fi networks on macOS.

A small utility that lists nearby networks ordered by how often you use
them and joins them through the system's own network utilities.
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Make key components available at package level
from . import config, logging_config

__all__ = ["config", "logging_config"]
