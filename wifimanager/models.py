"""
Data records shared by the adapter, the workflow and the user interfaces.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Network:
    """A network seen in one scan. Recreated on every scan."""

    name: str
    strength: int
    security: str
    is_connected: bool = False

    @property
    def requires_password(self) -> bool:
        return "none" not in self.security.lower()


@dataclass(frozen=True)
class MergedNetwork(Network):
    """A scanned network enriched with its usage count and, if connected, its IP."""

    usage_count: int = 0
    ip_address: Optional[str] = None


@dataclass
class NetworkListing:
    """The networks to render plus whether the radio was on when scanning."""

    networks: List[MergedNetwork] = field(default_factory=list)
    radio_enabled: bool = True


@dataclass(frozen=True)
class JoinOutcome:
    """Raw result of the join command."""

    output: str
    reported_failure: bool
