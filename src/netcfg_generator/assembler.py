"""Netplan configuration tree assembly.

Maps interfaces plus an OS profile onto the nested mapping that netplan
expects under ``network:``. The tree is plain dicts and lists in emission
order, ready for a YAML serializer. Interfaces are only read, never changed.
"""

import logging
from collections.abc import Iterable
from typing import Any

from netcfg_generator.models.interface import (
    BaseInterface,
    BondInterface,
    BridgeInterface,
    VlanInterface,
    WifiInterface,
)
from netcfg_generator.models.profile import OsProfile, OsStyle

logger = logging.getLogger(__name__)

NETPLAN_VERSION = 2
NETPLAN_RENDERER = "networkd"
BOND_MII_MONITOR_INTERVAL = 100

IPV4_DEFAULT_ROUTE = "default"
IPV6_DEFAULT_ROUTE = "::/0"

# Section per interface type, in output order
SECTION_BY_TYPE: dict[str, str] = {
    "ethernet": "ethernets",
    "wifi": "wifis",
    "bond": "bonds",
    "bridge": "bridges",
    "vlan": "vlans",
}


def _addressing(iface: BaseInterface, profile: OsProfile) -> dict[str, Any]:
    """Build DHCP, address, gateway, and route keys for one interface."""
    config: dict[str, Any] = {}
    addresses: list[str] = []
    routes: list[dict[str, str]] = []
    gateways: dict[str, str] = {}
    modern = profile.style == OsStyle.MODERN

    if iface.enable_ipv4 and iface.dhcp4:
        config["dhcp4"] = True
    if iface.enable_ipv6 and iface.dhcp6:
        config["dhcp6"] = True

    if iface.uses_static_ipv4():
        addresses.extend(iface.static_ipv4_addresses())
        gateway = iface.gateway4.strip()
        if gateway and modern:
            routes.append({"to": IPV4_DEFAULT_ROUTE, "via": gateway})
        elif gateway:
            gateways["gateway4"] = gateway

    if iface.uses_static_ipv6():
        addresses.extend(iface.static_ipv6_addresses())
        gateway = iface.gateway6.strip()
        if gateway and modern:
            routes.append({"to": IPV6_DEFAULT_ROUTE, "via": gateway})
        elif gateway:
            gateways["gateway6"] = gateway

    routes.extend({"to": r.to, "via": r.via} for r in iface.valid_routes())

    if addresses:
        config["addresses"] = addresses
    config.update(gateways)
    if routes:
        config["routes"] = routes
    if iface.uses_static_ipv6():
        config["accept-ra"] = False

    return config


def _type_specific(iface: BaseInterface) -> dict[str, Any]:
    """Build the keys that only apply to one interface type."""
    config: dict[str, Any] = {}

    if isinstance(iface, WifiInterface):
        ssid = iface.wifi.ssid.strip()
        if ssid:
            access_point: dict[str, str] = {}
            if iface.wifi.password:
                access_point["password"] = iface.wifi.password
            config["access-points"] = {ssid: access_point}

    elif isinstance(iface, BondInterface):
        if iface.bond_interfaces:
            config["interfaces"] = list(iface.bond_interfaces)
        parameters: dict[str, Any] = {}
        if iface.bond_mode is not None:
            parameters["mode"] = iface.bond_mode.value
        parameters["mii-monitor-interval"] = BOND_MII_MONITOR_INTERVAL
        config["parameters"] = parameters

    elif isinstance(iface, BridgeInterface):
        if iface.bridge_interfaces:
            config["interfaces"] = list(iface.bridge_interfaces)
        if iface.bridge_stp is not None:
            config["parameters"] = {"stp": iface.bridge_stp}

    elif isinstance(iface, VlanInterface):
        if iface.vlan_id is not None:
            config["id"] = iface.vlan_id
        if iface.vlan_link.strip():
            config["link"] = iface.vlan_link.strip()

    return config


def assemble_interface(iface: BaseInterface, profile: OsProfile) -> dict[str, Any]:
    """Build the netplan mapping for a single interface.

    Args:
        iface: Interface to describe
        profile: Target OS profile (selects gateway style)

    Returns:
        Mapping of netplan keys for this interface, possibly empty
    """
    config = _addressing(iface, profile)

    if iface.wants_link_local_ipv6():
        config["link-local"] = ["ipv6"]

    mtu = iface.effective_mtu()
    if mtu is not None:
        config["mtu"] = mtu

    nameservers = iface.dns4() + iface.dns6()
    if nameservers:
        config["nameservers"] = {"addresses": nameservers}

    config.update(_type_specific(iface))
    return config


def assemble_netplan(profile: OsProfile, interfaces: Iterable[BaseInterface]) -> dict[str, Any]:
    """Build the complete netplan tree.

    Interfaces with a blank name are skipped. Sections with no interfaces
    are left out.

    Args:
        profile: Target OS profile
        interfaces: Interfaces in display order

    Returns:
        Mapping rooted at ``network``
    """
    sections: dict[str, dict[str, Any]] = {section: {} for section in SECTION_BY_TYPE.values()}

    for iface in interfaces:
        name = iface.name.strip()
        if not name:
            logger.debug("Skipping interface %s with blank name", iface.id)
            continue

        section = SECTION_BY_TYPE[iface.type]  # type: ignore[attr-defined]
        if name in sections[section]:
            logger.warning("Duplicate interface name '%s'; later definition wins", name)
        sections[section][name] = assemble_interface(iface, profile)

    network: dict[str, Any] = {"version": NETPLAN_VERSION, "renderer": NETPLAN_RENDERER}
    for section, entries in sections.items():
        if entries:
            network[section] = entries

    return {"network": network}
