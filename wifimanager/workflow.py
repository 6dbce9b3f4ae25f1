"""
Connection workflow for WiFi Manager.

Joining a network runs through a small state machine:

    IDLE -> RESOLVING_CREDENTIAL -> (AWAITING_CREDENTIAL) -> JOINING
         -> VERIFYING -> CONNECTED | FAILED

networksetup is unreliable about reporting the outcome of joins that use a
Keychain password, so its exit is treated as a trigger only and the joined
network is confirmed by polling. The one exception is an explicit
"Failed to join network" reply to a join that carried a password: that reply
is trusted and ends the attempt at once as a bad password.
"""

import time
from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import Callable, List, Optional

from . import config
from .errors import CommandFailedError, CredentialNotFoundError, WifiError, WorkflowBusyError
from .logging_config import get_logger

logger = get_logger(__name__)


class ConnectionState(Enum):
    IDLE = "idle"
    RESOLVING_CREDENTIAL = "resolving-credential"
    AWAITING_CREDENTIAL = "awaiting-credential"
    JOINING = "joining"
    VERIFYING = "verifying"
    CONNECTED = "connected"
    FAILED = "failed"


TERMINAL_STATES = (ConnectionState.IDLE, ConnectionState.CONNECTED, ConnectionState.FAILED)


class FailureReason(Enum):
    JOIN_COMMAND_FAILED = "join-command-failed"
    BAD_CREDENTIAL = "bad-credential"
    TIMEOUT = "timeout"


@dataclass
class ConnectionResult:
    """Where a connection attempt ended up."""

    network_name: str
    state: ConnectionState
    reason: Optional[FailureReason] = None
    message: str = ""
    polls: int = 0
    elapsed_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    @property
    def needs_credential(self) -> bool:
        return self.state is ConnectionState.AWAITING_CREDENTIAL


class PollScheduler:
    """
    Re-runs a check on a fixed cadence until it passes or attempts run out.

    Each attempt waits one interval and then checks, so exhausting every
    attempt takes at least ``max_attempts * interval_ms``.
    """

    def __init__(
        self,
        interval_ms: int = config.DEFAULT_POLL_INTERVAL_MS,
        timeout_ms: int = config.DEFAULT_CONNECT_TIMEOUT_MS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.interval_ms = interval_ms
        self.timeout_ms = timeout_ms
        self.max_attempts = max(1, timeout_ms // interval_ms)
        self._sleep = sleep
        self.clock = clock

    @classmethod
    def from_config(cls, cfg, **kwargs):
        return cls(
            interval_ms=config.get_setting(cfg, "poll_interval_ms"),
            timeout_ms=config.get_setting(cfg, "connect_timeout_ms"),
            **kwargs,
        )

    def run(self, check: Callable[[], bool]):
        """
        Poll until check() returns True.

        Returns:
            tuple: (matched, attempts made)
        """
        for attempt in range(1, self.max_attempts + 1):
            self._sleep(self.interval_ms / 1000)
            if check():
                return True, attempt
        return False, self.max_attempts


class ConnectionWorkflow:
    """
    Connects to one network at a time.

    A second connect() while an attempt is in flight (including one waiting
    for a password) raises WorkflowBusyError; abandon() releases a waiting
    attempt.

    Args:
        adapter: WifiAdapter (or compatible fake)
        usage_store: UsageStore recording successful connections
        scheduler: PollScheduler used while verifying
        on_state_change: Optional callback(state, network_name) for progress
    """

    def __init__(self, adapter, usage_store, scheduler=None, on_state_change=None):
        self.adapter = adapter
        self.usage_store = usage_store
        self.scheduler = scheduler or PollScheduler()
        self.on_state_change = on_state_change
        self.history: List[ConnectionState] = []
        self._state = ConnectionState.IDLE
        self._network = None
        self._in_flight = False
        self._lock = Lock()

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def network(self):
        return self._network

    @property
    def busy(self) -> bool:
        return self._in_flight

    def _set_state(self, state):
        self._state = state
        self.history.append(state)
        logger.debug(f"{self._network.name if self._network else '-'}: {state.value}")
        if self.on_state_change:
            self.on_state_change(state, self._network.name if self._network else None)

    # --- Entry points ---

    def connect(self, network) -> ConnectionResult:
        """Start connecting to a scanned network."""
        with self._lock:
            if self._in_flight:
                raise WorkflowBusyError(
                    f"Already connecting to {self._network.name}"
                )
            self._in_flight = True
            self._network = network
            self.history = []

        def begin():
            self._set_state(ConnectionState.IDLE)
            logger.info(f"Connecting to {network.name} (security: {network.security})")
            return self._start()

        return self._guarded(begin)

    def submit_credential(self, password: str) -> ConnectionResult:
        """Continue an attempt that is waiting for a password."""
        if self._state is not ConnectionState.AWAITING_CREDENTIAL:
            raise WifiError("No connection attempt is waiting for a password")

        def resume():
            if password:
                self._trust_once(password)
            return self._join(password or None)

        return self._guarded(resume)

    def abandon(self) -> None:
        """Give up on an attempt that is waiting for a password."""
        if self._state is ConnectionState.AWAITING_CREDENTIAL:
            logger.info(f"Abandoned connection to {self._network.name}")
            self._set_state(ConnectionState.IDLE)
            self._in_flight = False

    # --- Steps ---

    def _guarded(self, step):
        try:
            return step()
        except Exception:
            # A missing interface or an unwritable store ends the attempt for the caller to report
            self._set_state(ConnectionState.FAILED)
            raise
        finally:
            if self._state in TERMINAL_STATES:
                self._in_flight = False

    def _start(self):
        if not self._network.requires_password:
            return self._join(None)

        self._set_state(ConnectionState.RESOLVING_CREDENTIAL)
        try:
            password = self.adapter.find_password(self._network.name)
        except CredentialNotFoundError:
            logger.info(f"No stored password for {self._network.name}, asking the user")
            self._set_state(ConnectionState.AWAITING_CREDENTIAL)
            return ConnectionResult(self._network.name, ConnectionState.AWAITING_CREDENTIAL)

        self._trust_once(password)
        return self._join(password)

    def _trust_once(self, password):
        name = self._network.name
        if name in self.usage_store.get_trusted():
            return
        self.adapter.trust_password(name, password)
        self.usage_store.add_trusted(name)

    def _join(self, password):
        name = self._network.name
        self._set_state(ConnectionState.JOINING)
        try:
            outcome = self.adapter.join(name, password)
        except CommandFailedError as e:
            logger.error(f"Join command for {name} failed: {e}")
            return self._fail(FailureReason.JOIN_COMMAND_FAILED, f"Failed to connect to {name}.")

        if password and outcome.reported_failure:
            logger.warning(f"Join rejected for {name}: {outcome.output}")
            return self._fail(
                FailureReason.BAD_CREDENTIAL,
                f"Failed to join network {name}. Incorrect password?",
            )

        return self._verify()

    def _verify(self):
        name = self._network.name
        self._set_state(ConnectionState.VERIFYING)
        started = self.scheduler.clock()
        matched, polls = self.scheduler.run(self._is_joined)
        elapsed_ms = (self.scheduler.clock() - started) * 1000

        if not matched:
            logger.warning(f"Connection to {name} not confirmed after {polls} checks")
            return self._fail(
                FailureReason.TIMEOUT,
                f"Connection to {name} timed out.",
                polls=polls,
                elapsed_ms=elapsed_ms,
            )

        self._set_state(ConnectionState.CONNECTED)
        self.usage_store.increment(name)
        logger.info(f"Connected to {name} after {polls} checks")
        return ConnectionResult(
            name,
            ConnectionState.CONNECTED,
            message=f"Connected to {name}",
            polls=polls,
            elapsed_ms=elapsed_ms,
        )

    def _is_joined(self):
        try:
            return self.adapter.current_network_name() == self._network.name
        except WifiError as e:
            logger.debug(f"Current network check failed: {e}")
            return False

    def _fail(self, reason, message, polls=0, elapsed_ms=0.0):
        self._set_state(ConnectionState.FAILED)
        return ConnectionResult(
            self._network.name,
            ConnectionState.FAILED,
            reason=reason,
            message=message,
            polls=polls,
            elapsed_ms=elapsed_ms,
        )
