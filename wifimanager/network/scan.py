"""
Parsing of `system_profiler SPAirPortDataType -json` output.

The same report holds both the currently joined network and every other
network in range, so it backs both scanning and the "which network am I on"
check used while verifying a connection.
"""

import json
import re

from ..errors import ParseFailedError
from ..logging_config import get_logger
from ..models import Network

logger = get_logger(__name__)

RSSI_MIN = -100  # dBm, unusable
RSSI_MAX = -50  # dBm, excellent

CURRENT_NETWORK_KEY = "spairport_current_network_information"
OTHER_NETWORKS_KEY = "spairport_airport_other_local_wireless_networks"


def rssi_to_strength(rssi):
    """Clamp an RSSI to [-100, -50] dBm and map it linearly onto 0-100."""
    clamped = max(RSSI_MIN, min(rssi, RSSI_MAX))
    return round(2 * (clamped + 100))


def load_report(output):
    """Decode the JSON report, raising ParseFailedError when it is not JSON."""
    try:
        return json.loads(output)
    except (TypeError, ValueError) as e:
        raise ParseFailedError(f"Could not parse Wi-Fi scan results: {e}") from e


def get_interface_data(report):
    """Return the first Wi-Fi interface block of a report, or None."""
    try:
        return report["SPAirPortDataType"][0]["spairport_airport_interfaces"][0]
    except (KeyError, IndexError, TypeError):
        return None


def _current_network_entry(interface_data):
    info = interface_data.get(CURRENT_NETWORK_KEY)
    if isinstance(info, list):
        return info[0] if info else None
    return info or None


def get_current_network_name(report):
    """Name of the currently joined network in a report, or None."""
    interface_data = get_interface_data(report)
    if not interface_data:
        return None
    entry = _current_network_entry(interface_data)
    if not isinstance(entry, dict):
        return None
    return entry.get("_name") or None


def extract_rssi(entry):
    """
    Read the RSSI of a raw network entry.

    Older macOS releases report an ``RSSI`` field, newer ones a
    ``spairport_signal_noise`` string such as ``"-55 dBm / -90 dBm"``.
    """
    if entry.get("RSSI"):
        try:
            return int(entry["RSSI"])
        except (TypeError, ValueError):
            return None
    signal_noise = entry.get("spairport_signal_noise")
    if signal_noise:
        match = re.search(r"(-?\d+)", str(signal_noise))
        if match:
            return int(match.group(1))
    return None


def _parse_entry(entry, is_connected):
    if not isinstance(entry, dict):
        return None
    name = entry.get("SSID") or entry.get("_name")
    if not name:
        return None

    rssi = extract_rssi(entry)
    if rssi is None:
        logger.debug(f"Skipping {name}: no signal strength reported")
        return None

    security = (
        entry.get("SECURITY")
        or entry.get("SECURITY_TYPE")
        or entry.get("spairport_security_mode")
        or "None"
    )
    return rssi, Network(
        name=name,
        strength=rssi_to_strength(rssi),
        security=security,
        is_connected=is_connected,
    )


def reconcile(sightings):
    """
    Reduce (rssi, Network) sightings to one record per name.

    A connected sighting beats an unconnected one; otherwise the stronger
    RSSI wins. First-seen order is kept.
    """
    best = {}
    for rssi, network in sightings:
        existing = best.get(network.name)
        if (
            existing is None
            or (network.is_connected and not existing[1].is_connected)
            or (network.is_connected == existing[1].is_connected and rssi > existing[0])
        ):
            best[network.name] = (rssi, network)
    return [network for _, network in best.values()]


def parse_scan(report):
    """
    Turn a decoded report into unique Network records.

    Missing keys yield an empty list rather than an error.
    """
    interface_data = get_interface_data(report)
    if not interface_data:
        logger.debug("No Wi-Fi interface data in scan report")
        return []

    sightings = []
    current = _current_network_entry(interface_data)
    if current:
        parsed = _parse_entry(current, True)
        if parsed:
            sightings.append(parsed)

    for entry in interface_data.get(OTHER_NETWORKS_KEY) or []:
        parsed = _parse_entry(entry, False)
        if parsed:
            sightings.append(parsed)

    return reconcile(sightings)
