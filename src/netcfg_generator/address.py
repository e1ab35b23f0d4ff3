"""IPv4/IPv6 address arithmetic.

Pure helpers for turning address and CIDR text into numbers and for testing
subnet membership. Every function here tolerates arbitrary input: malformed
text yields ``None`` (or ``False`` for predicates) instead of an exception,
because half-typed addresses are the normal state of an interface being
edited.
"""

import re
from ipaddress import IPv4Address, IPv4Network
from typing import NamedTuple

IPV4_BITS = 32
IPV6_BITS = 128
IPV4_ALL_ONES = 0xFFFFFFFF
HEXTET_ALL_ONES = 0xFFFF

_DECIMAL = re.compile(r"-?[0-9]+")
_OCTET = re.compile(r"[0-9]+")
_HEXTET = re.compile(r"[0-9A-Fa-f]+")


class Cidr(NamedTuple):
    """An address/prefix-length pair as written by the user."""

    address: str
    prefix_length: int


def parse_cidr(text: str) -> Cidr | None:
    """Split CIDR text into address and prefix length.

    The prefix length is not range-checked; callers clamp or validate it
    for their own address family.

    Args:
        text: CIDR text such as ``192.168.1.10/24``

    Returns:
        Parsed pair, or None if there is no ``/`` or the prefix is not a
        base-10 integer
    """
    if "/" not in text:
        return None

    address, prefix = text.split("/", 1)
    prefix = prefix.strip()
    if not _DECIMAL.fullmatch(prefix):
        return None

    return Cidr(address.strip(), int(prefix))


def ipv4_to_int(text: str) -> int | None:
    """Convert a dotted-quad IPv4 address to an unsigned 32-bit integer.

    Args:
        text: Address with exactly four decimal octets

    Returns:
        Integer value, or None if the text is not a valid IPv4 address
    """
    parts = text.strip().split(".")
    if len(parts) != 4:
        return None

    value = 0
    for part in parts:
        if not _OCTET.fullmatch(part):
            return None
        octet = int(part)
        if octet > 255:
            return None
        value = (value << 8) | octet

    return value


def ipv6_to_segments(text: str) -> list[int] | None:
    """Convert an IPv6 address to its eight 16-bit segments.

    A single ``::`` is expanded to the number of zero segments needed to
    reach eight. Multiple ``::`` tokens and embedded IPv4 tails are not
    supported and yield None.

    Args:
        text: IPv6 address such as ``2001:db8::1``

    Returns:
        List of eight integers, or None if the address cannot be parsed
    """
    text = text.strip()
    if text.count("::") > 1:
        return None

    if "::" in text:
        left, right = text.split("::")
        left_parts = left.split(":") if left else []
        right_parts = right.split(":") if right else []
        missing = 8 - len(left_parts) - len(right_parts)
        if missing < 0:
            return None
        parts = left_parts + ["0"] * missing + right_parts
    else:
        parts = text.split(":")
        if len(parts) != 8:
            return None

    segments: list[int] = []
    for part in parts:
        if not _HEXTET.fullmatch(part):
            return None
        segment = int(part, 16)
        if segment > HEXTET_ALL_ONES:
            return None
        segments.append(segment)

    return segments


def _ipv4_mask(prefix_length: int) -> int:
    prefix_length = max(0, min(IPV4_BITS, prefix_length))
    if prefix_length == 0:
        return 0
    return (IPV4_ALL_ONES << (IPV4_BITS - prefix_length)) & IPV4_ALL_ONES


def ipv4_network_address(address: str, prefix_length: int) -> int | None:
    """Return the network address of ``address`` under ``prefix_length``."""
    value = ipv4_to_int(address)
    if value is None:
        return None
    return value & _ipv4_mask(prefix_length)


def ipv4_in_network(gateway: str, cidr: str) -> bool:
    """Check whether an IPv4 address lies inside a CIDR network.

    Args:
        gateway: Address to test
        cidr: Network in CIDR notation (host bits may be set)

    Returns:
        True if both parse and the masked addresses are equal
    """
    parsed = parse_cidr(cidr)
    if parsed is None:
        return False

    gateway_value = ipv4_to_int(gateway)
    network_value = ipv4_to_int(parsed.address)
    if gateway_value is None or network_value is None:
        return False

    mask = _ipv4_mask(parsed.prefix_length)
    return (gateway_value & mask) == (network_value & mask)


def ipv6_in_network(gateway: str, cidr: str) -> bool:
    """Check whether an IPv6 address lies inside a CIDR network.

    Whole segments are compared for ``prefix_length // 16`` segments, then
    the top ``prefix_length % 16`` bits of the next segment.

    Args:
        gateway: Address to test
        cidr: Network in CIDR notation (host bits may be set)

    Returns:
        True if both parse and the network bits are equal
    """
    parsed = parse_cidr(cidr)
    if parsed is None:
        return False

    gateway_segments = ipv6_to_segments(gateway)
    network_segments = ipv6_to_segments(parsed.address)
    if gateway_segments is None or network_segments is None:
        return False

    prefix_length = max(0, min(IPV6_BITS, parsed.prefix_length))
    full_segments = prefix_length // 16
    for index in range(full_segments):
        if gateway_segments[index] != network_segments[index]:
            return False

    remaining_bits = prefix_length % 16
    if remaining_bits and full_segments < 8:
        mask = (HEXTET_ALL_ONES << (16 - remaining_bits)) & HEXTET_ALL_ONES
        if (gateway_segments[full_segments] & mask) != (network_segments[full_segments] & mask):
            return False

    return True


def int_to_ipv4(value: int) -> str:
    """Render an unsigned 32-bit integer as a dotted quad."""
    return str(IPv4Address(value & IPV4_ALL_ONES))


def cidr_to_netmask_v4(prefix_length: int) -> str:
    """Convert an IPv4 prefix length to a dotted-decimal netmask.

    Prefix lengths outside 0..32 are clamped.

    Args:
        prefix_length: CIDR prefix length

    Returns:
        Netmask such as ``255.255.255.0``
    """
    prefix_length = max(0, min(IPV4_BITS, prefix_length))
    return str(IPv4Network((0, prefix_length)).netmask)
