"""ifupdown (/etc/network/interfaces) generator.

ifupdown has one ``address`` per stanza, so only the first non-blank address
of each family is written. Secondary addresses are dropped (and logged at
debug level).

Each value is written onto a single line. Values containing whitespace or
control characters are treated as absent, and an interface whose name is
unusable is skipped entirely.
"""

import logging
from collections.abc import Iterable
from datetime import date

from netcfg_generator.address import IPV4_BITS, cidr_to_netmask_v4, parse_cidr
from netcfg_generator.generators.base import BaseGenerator
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

IFUPDOWN_PATH = "/etc/network/interfaces"
INDENT = "    "

BOND_MIIMON = 100
BOND_DOWNDELAY = 200
BOND_UPDELAY = 200


def _tokens(values: Iterable[str]) -> list[str]:
    return [v.strip() for v in values if is_single_token(v.strip())]


class IfupdownGenerator(BaseGenerator):
    """Generate an ifupdown interfaces file."""

    def __init__(self, interfaces: Iterable[BaseInterface], generated_on: date | None = None):
        """Initialize ifupdown generator.

        Args:
            interfaces: Interfaces in display order
            generated_on: Date written into the header (default: today)
        """
        super().__init__(generated_on)
        self.interfaces = list(interfaces)

    def generate(self) -> list[str]:
        """Generate the interfaces file.

        Emits the fixed preamble (interfaces.d include, loopback) and then
        one block per named interface, each followed by a blank line.

        Returns:
            Output lines
        """
        lines = [
            f"# {IFUPDOWN_PATH}",
            f"# Date: {self.date_str}",
            "",
            "source /etc/network/interfaces.d/*",
            "",
            "# The loopback network interface",
            "auto lo",
            "iface lo inet loopback",
            "",
        ]

        for iface in self.interfaces:
            name = iface.name.strip()
            if not name:
                logger.debug("Skipping interface %s with blank name", iface.id)
                continue
            if not is_single_token(name):
                logger.warning("Skipping interface %s with unusable name %r", iface.id, name)
                continue
            lines.extend(self._interface_block(iface))
            lines.append("")

        return lines

    def _interface_block(self, iface: BaseInterface) -> list[str]:
        name = iface.name.strip()
        lines = [f"# {name} - {iface.type}", f"auto {name}"]  # type: ignore[attr-defined]

        if iface.enable_ipv4:
            lines.extend(self._inet_stanza(iface, name))

        # Link-local suppression is written whether or not IPv6 is enabled
        if not iface.wants_link_local_ipv6():
            lines.append(f"{INDENT}pre-up ip link set dev {name} addrgenmode none")
            lines.append(f"{INDENT}post-up sleep 10 && ip addr flush dev {name} scope link")

        if iface.enable_ipv6:
            lines.extend(self._inet6_stanza(iface, name))

        for route in iface.valid_routes():
            if not (is_single_token(route.to) and is_single_token(route.via)):
                continue
            if route.is_ipv6():
                lines.append(f"{INDENT}up ip -6 route add {route.to} via {route.via} dev {name}")
                lines.append(f"{INDENT}down ip -6 route del {route.to} via {route.via} dev {name}")
            else:
                lines.append(f"{INDENT}up route add -net {route.to} gw {route.via} dev {name}")
                lines.append(f"{INDENT}down route del -net {route.to} gw {route.via} dev {name}")

        mtu = iface.effective_mtu()
        if mtu is not None:
            lines.append(f"{INDENT}mtu {mtu}")

        lines.extend(self._type_specific(iface))
        return lines

    def _inet_stanza(self, iface: BaseInterface, name: str) -> list[str]:
        if iface.dhcp4:
            return [f"iface {name} inet dhcp"]

        addresses = _tokens(iface.static_ipv4_addresses())
        if not addresses:
            return [f"iface {name} inet manual"]

        self._log_dropped(name, addresses)
        lines = [f"iface {name} inet static"]
        parsed = parse_cidr(addresses[0])
        if parsed is None:
            lines.append(f"{INDENT}address {addresses[0]}")
        else:
            lines.append(f"{INDENT}address {parsed.address}")
            if 0 <= parsed.prefix_length <= IPV4_BITS:
                lines.append(f"{INDENT}netmask {cidr_to_netmask_v4(parsed.prefix_length)}")

        gateway = iface.gateway4.strip()
        if is_single_token(gateway):
            lines.append(f"{INDENT}gateway {gateway}")

        dns = _tokens(iface.dns4())
        if dns:
            lines.append(f"{INDENT}dns-nameservers {' '.join(dns)}")

        return lines

    def _inet6_stanza(self, iface: BaseInterface, name: str) -> list[str]:
        if iface.dhcp6:
            return [f"iface {name} inet6 dhcp"]

        addresses = _tokens(iface.static_ipv6_addresses())
        if not addresses:
            return [f"iface {name} inet6 manual"]

        self._log_dropped(name, addresses)
        lines = [f"iface {name} inet6 static", f"{INDENT}address {addresses[0]}"]

        gateway = iface.gateway6.strip()
        if is_single_token(gateway):
            lines.append(f"{INDENT}gateway {gateway}")

        dns = _tokens(iface.dns6())
        if dns:
            lines.append(f"{INDENT}dns-nameservers {' '.join(dns)}")

        lines.append(f"{INDENT}post-up sysctl -w net.ipv6.conf.{name}.autoconf=0")
        lines.append(f"{INDENT}post-up sysctl -w net.ipv6.conf.{name}.accept_ra=0")
        return lines

    def _type_specific(self, iface: BaseInterface) -> list[str]:
        lines: list[str] = []

        if isinstance(iface, BondInterface):
            members = _tokens(iface.bond_interfaces)
            slaves = " ".join(members) if members else "none"
            lines.append(f"{INDENT}bond-slaves {slaves}")
            if iface.bond_mode is not None:
                lines.append(f"{INDENT}bond-mode {iface.bond_mode.value}")
            lines.append(f"{INDENT}bond-miimon {BOND_MIIMON}")
            lines.append(f"{INDENT}bond-downdelay {BOND_DOWNDELAY}")
            lines.append(f"{INDENT}bond-updelay {BOND_UPDELAY}")

        elif isinstance(iface, BridgeInterface):
            members = _tokens(iface.bridge_interfaces)
            ports = " ".join(members) if members else "none"
            lines.append(f"{INDENT}bridge_ports {ports}")
            if iface.bridge_stp is not None:
                lines.append(f"{INDENT}bridge_stp {'on' if iface.bridge_stp else 'off'}")

        elif isinstance(iface, VlanInterface):
            link = iface.vlan_link.strip()
            if is_single_token(link):
                lines.append(f"{INDENT}vlan-raw-device {link}")

        elif isinstance(iface, WifiInterface):
            ssid = iface.wifi.ssid.strip()
            if ssid and is_single_line(ssid):
                lines.append(f"{INDENT}wpa-ssid {ssid}")
                if iface.wifi.password and is_single_line(iface.wifi.password):
                    lines.append(f"{INDENT}wpa-psk {iface.wifi.password}")

        return lines

    @staticmethod
    def _log_dropped(name: str, addresses: list[str]) -> None:
        if len(addresses) > 1:
            logger.debug(
                "%s: ifupdown keeps only the primary address, dropping %s",
                name,
                ", ".join(addresses[1:]),
            )
