"""
Wi-Fi interface discovery for WiFi Manager.

This module finds the device name (e.g. ``en0``) of the Wi-Fi hardware port,
using CoreWLAN where available and falling back to networksetup.
"""

import re

try:
    import CoreWLAN
except ImportError:
    CoreWLAN = None

from .. import config
from ..errors import InterfaceNotFoundError
from ..logging_config import get_logger
from ..utils import run_command

logger = get_logger(__name__)

WIFI_PORT_NAMES = ("Wi-Fi", "AirPort")


def get_wifi_interface_native():
    """Get the Wi-Fi interface name using CoreWLAN."""
    if not CoreWLAN:
        return None

    try:
        interface = CoreWLAN.CWWiFiClient.sharedWiFiClient().interface()
        if interface:
            name = interface.interfaceName()
            if name:
                logger.debug(f"Native API found Wi-Fi interface: {name}")
                return str(name)
    except Exception as e:
        logger.debug(f"Native Wi-Fi interface lookup failed: {e}")
    return None


def parse_hardware_ports(output):
    """
    Build a mapping of port name -> device from `networksetup -listallhardwareports`.

    Args:
        output: Raw command output

    Returns:
        dict: e.g. {"Wi-Fi": "en0", "Thunderbolt Bridge": "bridge0"}
    """
    port_map = {}
    port_name = None
    for line in output.strip().split("\n"):
        line = line.strip()
        if line.startswith("Hardware Port:"):
            port_name = line.split(":", 1)[1].strip()
        elif line.startswith("Device:") and port_name:
            port_map[port_name] = line.split(":", 1)[1].strip()
            port_name = None
    return port_map


def get_wifi_interface_shell():
    """Find the Wi-Fi device from the hardware port listing."""
    output = run_command([config.NETWORKSETUP, "-listallhardwareports"], capture=True)
    if not output:
        logger.error("Failed to get hardware ports")
        return None

    port_map = parse_hardware_ports(output)
    for port_name in WIFI_PORT_NAMES:
        device = port_map.get(port_name)
        if device and re.match(r"^en\d+$", device):
            logger.debug(f"Found Wi-Fi interface {device} ({port_name})")
            return device

    logger.debug(f"No Wi-Fi port among: {list(port_map)}")
    return None


def find_wifi_interface():
    """
    Resolve the Wi-Fi interface name.

    Raises:
        InterfaceNotFoundError: if this machine has no Wi-Fi hardware port
    """
    name = get_wifi_interface_native() or get_wifi_interface_shell()
    if not name:
        raise InterfaceNotFoundError()
    logger.info(f"Using Wi-Fi interface {name}")
    return name


class InterfaceResolver:
    """
    Lazily resolves the Wi-Fi interface name once and remembers it.

    A fixed name can be given up front (mainly for tests); otherwise the
    lookup function runs on first use. A failed lookup is not cached, so a
    later call retries.
    """

    def __init__(self, name=None, lookup=find_wifi_interface):
        self._name = name
        self._lookup = lookup

    def __call__(self):
        if self._name is None:
            self._name = self._lookup()
        return self._name

    @property
    def resolved(self):
        return self._name is not None
