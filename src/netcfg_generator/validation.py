"""Advisory validation of addresses and gateways.

Nothing in this module raises or blocks rendering. Field checks return a
boolean or an error message (empty when the value is acceptable), and
:func:`validate_interfaces` gathers every finding for a collection into an
:class:`ErrorCollector`. Hosts call it again after each edit; no state is
kept between calls.
"""

import logging
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Literal

from netcfg_generator.address import ipv4_in_network, ipv6_in_network
from netcfg_generator.errors import ErrorCollector
from netcfg_generator.models.interface import (
    BaseInterface,
    BondInterface,
    BridgeInterface,
    VlanInterface,
    WifiInterface,
    is_single_line,
    is_single_token,
)

logger = logging.getLogger(__name__)

Protocol = Literal["v4", "v6"]

MAX_IPV6_PREFIX = 128

INVALID_FORMAT_MESSAGE = "Invalid IPv{version} address format"
SAME_NETWORK_MESSAGE = "Gateway must be in the same network as at least one IP address"
UNUSABLE_VALUE_MESSAGE = "Value contains whitespace or control characters"

_V4_LITERAL = re.compile(r"[0-9]{1,3}(\.[0-9]{1,3}){3}")
_V4_PREFIX = re.compile(r"1?[0-9]|2[0-9]|3[0-2]")
_V6_LITERAL = re.compile(r"[0-9A-Fa-f:]+")
_DIGITS = re.compile(r"[0-9]+")

# Shortcut inputs expanded by auto_format
_V4_SHORTCUTS = {
    "192.168": "192.168.0.1/24",
    "192.168.": "192.168.0.1/24",
    "10": "10.0.0.1/24",
    "10.": "10.0.0.1/24",
}


def is_valid_cidr(text: str, protocol: Protocol) -> bool:
    """Check CIDR syntax for one address family.

    Blank text is valid (the field is simply unused). IPv4 needs four
    1-3 digit octets and a prefix of 0-32. IPv6 needs hex digits and colons
    and a prefix of 0-128; the address part is checked for charset only.

    Args:
        text: CIDR text
        protocol: "v4" or "v6"

    Returns:
        True if the text is blank or syntactically valid
    """
    text = text.strip()
    if not text:
        return True

    address, sep, prefix = text.partition("/")
    if not sep:
        return False

    if protocol == "v4":
        return bool(_V4_LITERAL.fullmatch(address) and _V4_PREFIX.fullmatch(prefix))

    if not (_V6_LITERAL.fullmatch(address) and _DIGITS.fullmatch(prefix)):
        return False
    return int(prefix) <= MAX_IPV6_PREFIX


def is_valid_address(text: str, protocol: Protocol) -> bool:
    """Check the literal syntax of a bare address (no prefix)."""
    pattern = _V4_LITERAL if protocol == "v4" else _V6_LITERAL
    return bool(pattern.fullmatch(text.strip()))


def validate_gateway(gateway: str, candidate_cidrs: Sequence[str], protocol: Protocol) -> str:
    """Check that a gateway is reachable from at least one configured subnet.

    Args:
        gateway: Gateway address (blank means no gateway)
        candidate_cidrs: The interface's addresses for the same protocol
        protocol: "v4" or "v6"

    Returns:
        An error message, or an empty string when the gateway is acceptable
        or there is nothing to check it against
    """
    gateway = gateway.strip()
    if not gateway:
        return ""

    networks = [c.strip() for c in candidate_cidrs if c.strip() and is_valid_cidr(c, protocol)]
    if not networks:
        return ""

    version = "4" if protocol == "v4" else "6"
    if not is_valid_address(gateway, protocol):
        return INVALID_FORMAT_MESSAGE.format(version=version)

    in_network = ipv4_in_network if protocol == "v4" else ipv6_in_network
    if any(in_network(gateway, network) for network in networks):
        return ""

    return SAME_NETWORK_MESSAGE


def auto_format(text: str, protocol: Protocol) -> str:
    """Complete a partially typed address into CIDR form.

    A bare IPv4 address gets ``/24`` and a bare IPv6 address gets ``/64``.
    ``192.168`` and ``10`` (with or without a trailing dot) expand to a
    sample host address. Anything else is returned unchanged. The result
    is not guaranteed to be valid.
    """
    if protocol == "v4":
        if text in _V4_SHORTCUTS:
            return _V4_SHORTCUTS[text]
        if _V4_LITERAL.fullmatch(text):
            return f"{text}/24"
        return text

    if "/" not in text and _V6_LITERAL.fullmatch(text):
        return f"{text}/64"
    return text


def _check_addresses(
    label: str,
    field: str,
    addresses: Iterable[str],
    protocol: Protocol,
    collector: ErrorCollector,
) -> None:
    version = "4" if protocol == "v4" else "6"
    for index, address in enumerate(addresses):
        if not is_valid_cidr(address, protocol):
            collector.add_warning(
                f"{label}.{field}[{index}]", f"Invalid IPv{version} CIDR '{address.strip()}'"
            )


def _check_tokens(label: str, iface: BaseInterface, collector: ErrorCollector) -> None:
    """Warn about values that cannot be written onto a single line."""
    values: list[tuple[str, str]] = [("gateway4", iface.gateway4), ("gateway6", iface.gateway6)]
    for field in ("nameservers", "nameservers4", "nameservers6"):
        values.extend((f"{field}[{i}]", v) for i, v in enumerate(getattr(iface, field)))
    for index, route in enumerate(iface.routes):
        values.append((f"routes[{index}].to", route.to))
        values.append((f"routes[{index}].via", route.via))

    if isinstance(iface, BondInterface):
        values.extend((f"bond_interfaces[{i}]", v) for i, v in enumerate(iface.bond_interfaces))
    elif isinstance(iface, BridgeInterface):
        values.extend(
            (f"bridge_interfaces[{i}]", v) for i, v in enumerate(iface.bridge_interfaces)
        )
    elif isinstance(iface, VlanInterface):
        values.append(("vlan_link", iface.vlan_link))

    for field, value in values:
        if value.strip() and not is_single_token(value.strip()):
            collector.add_warning(f"{label}.{field}", UNUSABLE_VALUE_MESSAGE)

    if isinstance(iface, WifiInterface):
        for field, value in (("ssid", iface.wifi.ssid), ("password", iface.wifi.password)):
            if not is_single_line(value):
                collector.add_warning(f"{label}.wifi.{field}", UNUSABLE_VALUE_MESSAGE)


def validate_interface(
    iface: BaseInterface,
    collector: ErrorCollector,
    known_names: set[str] | None = None,
) -> None:
    """Record every finding for one interface.

    Args:
        iface: Interface to check
        collector: Collector receiving WARNING-level findings
        known_names: Names of all interfaces in the collection, used to
            check bond/bridge members and VLAN parents (skipped when None)
    """
    name = iface.name.strip()
    if is_single_token(name):
        label = name
    else:
        label = f"<unnamed {iface.id[:8]}>"
        if name:
            collector.add_warning(label, f"{UNUSABLE_VALUE_MESSAGE} in name {name!r}")
        else:
            collector.add_warning(label, "Interface has no name and will not be rendered")

    _check_tokens(label, iface, collector)

    _check_addresses(label, "ipv4_addresses", iface.ipv4_addresses, "v4", collector)
    _check_addresses(label, "ipv6_addresses", iface.ipv6_addresses, "v6", collector)

    message = validate_gateway(iface.gateway4, iface.ipv4_addresses, "v4")
    if message:
        collector.add_warning(f"{label}.gateway4", message)

    message = validate_gateway(iface.gateway6, iface.ipv6_addresses, "v6")
    if message:
        collector.add_warning(f"{label}.gateway6", message)

    for index, route in enumerate(iface.routes):
        if bool(route.to.strip()) != bool(route.via.strip()):
            collector.add_warning(
                f"{label}.routes[{index}]", "Route needs both a destination and a next hop"
            )

    if isinstance(iface, WifiInterface) and not iface.wifi.ssid.strip():
        collector.add_warning(f"{label}.wifi", "Wi-Fi interface has no SSID")

    if isinstance(iface, VlanInterface):
        if iface.vlan_id is None:
            collector.add_warning(f"{label}.vlan_id", "VLAN interface has no VLAN id")
        if not iface.vlan_link.strip():
            collector.add_warning(f"{label}.vlan_link", "VLAN interface has no parent link")
        elif known_names is not None and iface.vlan_link not in known_names:
            collector.add_warning(
                f"{label}.vlan_link", f"Parent interface '{iface.vlan_link}' is not configured"
            )

    members: tuple[str, ...] = ()
    if isinstance(iface, BondInterface):
        members = iface.bond_interfaces
    elif isinstance(iface, BridgeInterface):
        members = iface.bridge_interfaces

    if known_names is not None:
        for member in members:
            if member not in known_names:
                collector.add_warning(
                    f"{label}.members", f"Member interface '{member}' is not configured"
                )


def validate_interfaces(
    interfaces: Iterable[BaseInterface],
    collector: ErrorCollector | None = None,
) -> ErrorCollector:
    """Validate a whole interface collection.

    Args:
        interfaces: Interfaces to check
        collector: Collector to fill (a new one is created when None)

    Returns:
        The collector holding all findings
    """
    if collector is None:
        collector = ErrorCollector()

    interfaces = list(interfaces)
    known_names = {iface.name for iface in interfaces if iface.name.strip()}

    name_counts = Counter(iface.name for iface in interfaces if iface.name.strip())
    for name, count in name_counts.items():
        if count > 1:
            collector.add_warning(name, f"Interface name is used {count} times")

    for iface in interfaces:
        validate_interface(iface, collector, known_names)

    logger.debug(
        "Validated %d interfaces: %d finding(s)", len(interfaces), len(collector.errors)
    )
    return collector
