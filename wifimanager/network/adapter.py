"""
The Wi-Fi command adapter.

WifiAdapter wraps the macOS utilities this application drives and turns
their output into typed results. Everything that touches the OS goes through
here, so the workflow and the user interfaces can be tested with a fake.
"""

from .. import config
from ..errors import WifiError
from ..logging_config import get_logger
from ..models import JoinOutcome
from ..utils import run_command
from . import keychain
from .interfaces import InterfaceResolver
from .scan import get_current_network_name, load_report, parse_scan

logger = get_logger(__name__)

JOIN_FAILURE_TEXT = "Failed to join network"


class WifiAdapter:
    """
    Runs OS network utilities against one Wi-Fi interface.

    Args:
        interface: An InterfaceResolver, or a fixed interface name
        runner: Command runner with the run_command signature
    """

    def __init__(self, interface=None, runner=run_command):
        if not isinstance(interface, InterfaceResolver):
            interface = InterfaceResolver(interface)
        self._resolver = interface
        self._run = runner

    @property
    def interface_name(self):
        """The Wi-Fi device name; raises InterfaceNotFoundError without one."""
        return self._resolver()

    # --- Radio power ---

    def is_radio_enabled(self):
        output = self._run(
            [config.NETWORKSETUP, "-getairportpower", self.interface_name],
            capture=True,
            quiet_on_error=True,
        )
        if not output:
            return False
        return "On" in output

    def set_radio_enabled(self, enabled):
        state = "on" if enabled else "off"
        logger.info(f"Turning Wi-Fi {state}")
        self._run(
            [config.NETWORKSETUP, "-setairportpower", self.interface_name, state],
            check=True,
        )

    # --- Scanning ---

    def _airport_report(self):
        output = self._run(
            [config.SYSTEM_PROFILER, "SPAirPortDataType", "-json"],
            capture=True,
            check=True,
        )
        return load_report(output)

    def scan(self, check_radio=True):
        """
        Networks in range; empty when the radio is off.

        Callers that have just checked the radio pass check_radio=False.
        """
        if check_radio and not self.is_radio_enabled():
            logger.debug("Wi-Fi is off, skipping scan")
            return []
        networks = parse_scan(self._airport_report())
        logger.debug(f"Scan found {len(networks)} networks")
        return networks

    def current_network_name(self):
        """Name of the joined network, or None when off or not associated."""
        if not self.is_radio_enabled():
            return None
        return get_current_network_name(self._airport_report())

    # --- Joining ---

    def join(self, name, password=None):
        """
        Ask networksetup to join a network.

        Raises:
            CommandFailedError: if the command could not run or exited non-zero
        """
        command = [config.NETWORKSETUP, "-setairportnetwork", self.interface_name, name]
        if password:
            command.append(password)
        output = self._run(
            command,
            capture=True,
            check=True,
            redact=[password] if password else None,
        )
        output = output or ""
        return JoinOutcome(output=output, reported_failure=JOIN_FAILURE_TEXT in output)

    def ip_address(self):
        """IPv4 address of the Wi-Fi interface, or None."""
        try:
            output = self._run(
                [config.IPCONFIG, "getifaddr", self.interface_name],
                capture=True,
                check=True,
                quiet_on_error=True,
            )
        except WifiError:
            return None
        return (output or "").strip() or None

    # --- Credentials ---

    def find_password(self, name):
        return keychain.find_password(name, runner=self._run)

    def trust_password(self, name, password):
        keychain.trust_password(name, password, runner=self._run)
