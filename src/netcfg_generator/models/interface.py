"""Network interface models.

An interface is a tagged variant keyed by ``type``: every variant carries the
addressing fields shared by all interfaces, plus only the block that applies
to its own type (Wi-Fi access point, bond members, VLAN parent, bridge
ports). Models are frozen; edits produce a new instance.

Address, gateway, nameserver, and route fields hold raw text exactly as
entered. Blank entries and malformed addresses are tolerated here and dealt
with by the renderers.
"""

import uuid
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

DEFAULT_MTU = 1500


def is_single_token(value: str) -> bool:
    """Return True if the value is non-empty with no whitespace or control characters.

    Names, addresses, and routes are written into line-oriented files where
    anything else would split or extend a line.
    """
    return bool(value) and value.isprintable() and not any(c.isspace() for c in value)


def is_single_line(value: str) -> bool:
    """Return True if the value has no line breaks or other control characters."""
    return value.isprintable()


def _new_id() -> str:
    return uuid.uuid4().hex


def _non_blank(values: tuple[str, ...]) -> list[str]:
    return [v.strip() for v in values if v.strip()]


class BondMode(str, Enum):
    """Bonding modes understood by netplan and ifenslave."""

    BALANCE_RR = "balance-rr"
    ACTIVE_BACKUP = "active-backup"
    BALANCE_XOR = "balance-xor"
    BROADCAST = "broadcast"
    LACP = "802.3ad"
    BALANCE_TLB = "balance-tlb"
    BALANCE_ALB = "balance-alb"
    BALANCE_TCP = "balance-tcp"


class Route(BaseModel):
    """A custom route, independent of the default gateway."""

    model_config = ConfigDict(frozen=True)

    to: str = Field("", description="Destination network in CIDR notation")
    via: str = Field("", description="Next-hop address")

    def is_ipv6(self) -> bool:
        """Return True if the destination looks like an IPv6 network."""
        return ":" in self.to


class WifiAccessPoint(BaseModel):
    """Wi-Fi network credentials."""

    model_config = ConfigDict(frozen=True)

    ssid: str = Field("", description="Network name")
    password: str = Field("", description="WPA passphrase (blank for open networks)")


class BaseInterface(BaseModel):
    """Fields shared by every interface type."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id, description="Stable identifier, never reused")
    name: str = Field("", description="Device name (e.g., eth0, bond0)")

    enable_ipv4: bool = True
    enable_ipv6: bool = False
    dhcp4: bool = False
    dhcp6: bool = False

    ipv4_addresses: tuple[str, ...] = Field((), description="IPv4 CIDRs, first is primary")
    ipv6_addresses: tuple[str, ...] = Field((), description="IPv6 CIDRs, first is primary")
    gateway4: str = Field("", description="IPv4 default gateway (blank for none)")
    gateway6: str = Field("", description="IPv6 default gateway (blank for none)")

    nameservers: tuple[str, ...] = Field((), description="DNS servers of either family")
    nameservers4: tuple[str, ...] = Field((), description="IPv4 DNS servers")
    nameservers6: tuple[str, ...] = Field((), description="IPv6 DNS servers")

    mtu: Annotated[int | None, Field(None, gt=0, description="Interface MTU")]
    routes: tuple[Route, ...] = Field((), description="Custom routes")
    link_local: tuple[Literal["ipv6"], ...] = Field(
        (), description="Protocols that keep link-local addressing"
    )

    def static_ipv4_addresses(self) -> list[str]:
        """Non-blank IPv4 addresses, in order."""
        return _non_blank(self.ipv4_addresses)

    def static_ipv6_addresses(self) -> list[str]:
        """Non-blank IPv6 addresses, in order."""
        return _non_blank(self.ipv6_addresses)

    def uses_static_ipv4(self) -> bool:
        """IPv4 is enabled, not DHCP, and has at least one address."""
        return self.enable_ipv4 and not self.dhcp4 and bool(self.static_ipv4_addresses())

    def uses_static_ipv6(self) -> bool:
        """IPv6 is enabled, not DHCP, and has at least one address."""
        return self.enable_ipv6 and not self.dhcp6 and bool(self.static_ipv6_addresses())

    def dns4(self) -> list[str]:
        """IPv4 nameservers, including IPv4 entries of the shared list."""
        shared = [n for n in _non_blank(self.nameservers) if ":" not in n]
        return _non_blank(self.nameservers4) + shared

    def dns6(self) -> list[str]:
        """IPv6 nameservers, including IPv6 entries of the shared list."""
        shared = [n for n in _non_blank(self.nameservers) if ":" in n]
        return _non_blank(self.nameservers6) + shared

    def valid_routes(self) -> list[Route]:
        """Routes with both destination and next hop filled in, stripped."""
        return [
            Route(to=r.to.strip(), via=r.via.strip())
            for r in self.routes
            if r.to.strip() and r.via.strip()
        ]

    def effective_mtu(self) -> int | None:
        """MTU to write, or None when unset or equal to the default."""
        if self.mtu is None or self.mtu == DEFAULT_MTU:
            return None
        return self.mtu

    def wants_link_local_ipv6(self) -> bool:
        """Return True if IPv6 link-local addressing should stay enabled."""
        return "ipv6" in self.link_local


class EthernetInterface(BaseInterface):
    """A wired interface."""

    type: Literal["ethernet"] = "ethernet"


class WifiInterface(BaseInterface):
    """A wireless interface joined to one access point."""

    type: Literal["wifi"] = "wifi"
    wifi: WifiAccessPoint = Field(default_factory=WifiAccessPoint)


class BondInterface(BaseInterface):
    """An aggregate of member interfaces."""

    type: Literal["bond"] = "bond"
    bond_interfaces: tuple[str, ...] = Field((), description="Member interface names")
    bond_mode: BondMode | None = BondMode.ACTIVE_BACKUP


class VlanInterface(BaseInterface):
    """An 802.1Q VLAN on top of a parent interface."""

    type: Literal["vlan"] = "vlan"
    vlan_id: Annotated[int | None, Field(None, ge=1, le=4094, description="VLAN tag")]
    vlan_link: str = Field("", description="Parent interface name")


class BridgeInterface(BaseInterface):
    """A software bridge."""

    type: Literal["bridge"] = "bridge"
    bridge_interfaces: tuple[str, ...] = Field((), description="Bridge port names")
    bridge_stp: bool | None = Field(None, description="Spanning tree (None leaves it unset)")


Interface = Annotated[
    Union[EthernetInterface, WifiInterface, BondInterface, VlanInterface, BridgeInterface],
    Field(discriminator="type"),
]

InterfaceAdapter = TypeAdapter(Interface)

INTERFACE_CLASSES: dict[str, type[BaseInterface]] = {
    "ethernet": EthernetInterface,
    "wifi": WifiInterface,
    "bond": BondInterface,
    "vlan": VlanInterface,
    "bridge": BridgeInterface,
}
