"""
Presentation layer for WiFi Manager.

Fetches and ranks the network listing, keeps the selection cursor, and
turns user actions (connect, toggle Wi-Fi, refresh, move selection) into
calls on the adapter and the connection workflow. Both the command line and
the menu-bar app are thin views over WifiController.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict

from . import config
from .errors import WifiError
from .logging_config import get_logger
from .models import MergedNetwork, NetworkListing
from .notifications import Notifier, Style
from .workflow import ConnectionState, ConnectionWorkflow

logger = get_logger(__name__)


def strength_bars(strength):
    """Number of signal bars (1-4) to draw for a 0-100 strength."""
    if strength > 75:
        return 4
    elif strength > 50:
        return 3
    elif strength > 25:
        return 2
    return 1


def merge_networks(networks, usage_counts, ip_address=None):
    """Attach usage counts, and the IP address for the connected network."""
    return [
        MergedNetwork(
            **asdict(network),
            usage_count=usage_counts.get(network.name, 0),
            ip_address=ip_address if network.is_connected else None,
        )
        for network in networks
    ]


def sort_networks(networks):
    """Connected network first, then by descending usage count."""
    return sorted(networks, key=lambda n: (not n.is_connected, -n.usage_count))


def fetch_listing(adapter, usage_store, radio_enabled=None):
    """
    Scan and build the ranked listing.

    The scan, the usage counts and the IP lookup are independent, so they run
    concurrently. A disabled radio gives an empty listing, not an error.
    radio_enabled skips the power check when the caller already knows it.
    """
    if radio_enabled is None:
        radio_enabled = adapter.is_radio_enabled()
    if not radio_enabled:
        return NetworkListing(networks=[], radio_enabled=False)

    with ThreadPoolExecutor(max_workers=3) as executor:
        scan = executor.submit(adapter.scan, check_radio=False)
        counts = executor.submit(usage_store.get_counts)
        ip_address = executor.submit(adapter.ip_address)
        merged = merge_networks(scan.result(), counts.result(), ip_address.result())

    return NetworkListing(networks=sort_networks(merged), radio_enabled=True)


class NetworkList:
    """Ranked networks plus a selection cursor that does not wrap around."""

    def __init__(self, networks=None):
        self.networks = []
        self.selected_name = None
        self.update(networks or [])

    def update(self, networks):
        """Replace the networks, keeping the selection when it is still listed."""
        self.networks = list(networks)
        if not self.networks:
            self.selected_name = None
            return
        if self.selected_name not in [n.name for n in self.networks]:
            connected = next((n for n in self.networks if n.is_connected), None)
            self.selected_name = (connected or self.networks[0]).name

    @property
    def selected_index(self):
        for i, network in enumerate(self.networks):
            if network.name == self.selected_name:
                return i
        return None

    @property
    def selected(self):
        index = self.selected_index
        return None if index is None else self.networks[index]

    def select(self, name):
        if any(n.name == name for n in self.networks):
            self.selected_name = name

    def select_next(self):
        index = self.selected_index
        if index is not None and index < len(self.networks) - 1:
            self.selected_name = self.networks[index + 1].name
        return self.selected

    def select_previous(self):
        index = self.selected_index
        if index is not None and index > 0:
            self.selected_name = self.networks[index - 1].name
        return self.selected

    def find(self, name):
        return next((n for n in self.networks if n.name == name), None)


class WifiController:
    """
    User actions over the adapter, usage store and connection workflow.

    Args:
        adapter: WifiAdapter
        usage_store: UsageStore
        notifier: Notifier used for all user-facing messages
        workflow: ConnectionWorkflow (built from adapter and usage_store if omitted)
        sleep: Used for the settle delay after turning Wi-Fi on
    """

    def __init__(self, adapter, usage_store, notifier=None, workflow=None, sleep=time.sleep):
        self.adapter = adapter
        self.usage_store = usage_store
        self.notifier = notifier or Notifier()
        self.workflow = workflow or ConnectionWorkflow(adapter, usage_store)
        self.list = NetworkList()
        self.radio_enabled = True
        self.error = None
        self._sleep = sleep

    # --- Listing ---

    def refresh(self):
        """Rescan and update the list. Errors are reported, never raised."""
        self.error = None
        try:
            if not self.adapter.is_radio_enabled():
                self.radio_enabled = False
                self.list.update([])
                self.notifier.notify(Style.FAILURE, "Wi-Fi is turned off")
                return self.list

            self.radio_enabled = True
            self.notifier.notify(Style.ANIMATED, "Scanning for networks...")
            listing = fetch_listing(self.adapter, self.usage_store, radio_enabled=True)
        except (WifiError, OSError) as e:
            logger.error(f"Scan failed: {e}")
            self.error = e
            self.list.update([])
            self.notifier.notify(Style.FAILURE, "Failed to scan for networks", str(e))
            return self.list

        self.radio_enabled = listing.radio_enabled
        self.list.update(listing.networks)
        if listing.networks:
            self.notifier.notify(Style.SUCCESS, f"Found {len(listing.networks)} networks")
        else:
            self.notifier.notify(Style.SUCCESS, "No networks found")
        return self.list

    def select_next(self):
        return self.list.select_next()

    def select_previous(self):
        return self.list.select_previous()

    # --- Radio ---

    def toggle_radio(self):
        """Flip the Wi-Fi power state. Returns the new state, or None on failure."""
        self.notifier.notify(Style.ANIMATED, "Toggling Wi-Fi...")
        try:
            enabled = self.adapter.is_radio_enabled()
            self.adapter.set_radio_enabled(not enabled)
        except WifiError as e:
            logger.error(f"Failed to toggle Wi-Fi: {e}")
            self.notifier.notify(Style.FAILURE, "Failed to Toggle Wi-Fi", str(e))
            return None

        if not enabled:
            # Give the radio a moment before anyone rescans
            self._sleep(config.TOGGLE_SETTLE_SECONDS)
        self.radio_enabled = not enabled
        self.notifier.notify(Style.SUCCESS, "Wi-Fi Turned Off" if enabled else "Wi-Fi Turned On")
        return self.radio_enabled

    # --- Connecting ---

    def connect(self, network):
        """
        Connect to a network from the list.

        Returns the ConnectionResult. When it needs a credential the caller
        should ask the user and call submit_password() or cancel_password().
        """
        if network.requires_password:
            self.notifier.notify(Style.ANIMATED, "Getting password from Keychain...")
        else:
            self.notifier.notify(Style.ANIMATED, f"Connecting to {network.name}...")

        try:
            result = self.workflow.connect(network)
        except (WifiError, OSError) as e:
            self._report_error(network.name, e)
            return None
        return self._report(result)

    def submit_password(self, password):
        name = self.workflow.network.name
        self.notifier.notify(Style.ANIMATED, f"Connecting to {name}...")
        try:
            result = self.workflow.submit_credential(password)
        except (WifiError, OSError) as e:
            self._report_error(name, e)
            return None
        return self._report(result)

    def cancel_password(self):
        self.workflow.abandon()

    def _report(self, result):
        if result.state is ConnectionState.CONNECTED:
            self.notifier.notify(Style.SUCCESS, f"Connected to {result.network_name}")
        elif result.state is ConnectionState.FAILED:
            self.notifier.notify(
                Style.FAILURE, f"Failed to connect to {result.network_name}", result.message
            )
        return result

    def _report_error(self, name, error):
        logger.error(f"Connection to {name} failed: {error}")
        self.notifier.notify(Style.FAILURE, f"Failed to connect to {name}", str(error))
