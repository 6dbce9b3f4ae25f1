"""
Network module for WiFi Manager.

This module handles all interaction with the macOS Wi-Fi utilities:
- Wi-Fi interface discovery
- Scan report parsing and signal strength normalization
- Keychain password lookup and trust registration
- The WifiAdapter that ties these together
"""

from .adapter import JOIN_FAILURE_TEXT, WifiAdapter
from .interfaces import InterfaceResolver, find_wifi_interface, parse_hardware_ports
from .scan import parse_scan, reconcile, rssi_to_strength

__all__ = [
    "JOIN_FAILURE_TEXT",
    "WifiAdapter",
    "InterfaceResolver",
    "find_wifi_interface",
    "parse_hardware_ports",
    "parse_scan",
    "reconcile",
    "rssi_to_strength",
]
