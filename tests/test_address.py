"""Tests for address arithmetic."""

import pytest

from netcfg_generator.address import (
    Cidr,
    cidr_to_netmask_v4,
    int_to_ipv4,
    ipv4_in_network,
    ipv4_network_address,
    ipv4_to_int,
    ipv6_in_network,
    ipv6_to_segments,
    parse_cidr,
)


class TestParseCidr:
    """Tests for CIDR splitting."""

    def test_valid_ipv4_cidr(self) -> None:
        """Test splitting a normal IPv4 CIDR."""
        assert parse_cidr("192.168.1.10/24") == Cidr("192.168.1.10", 24)

    def test_valid_ipv6_cidr(self) -> None:
        """Test splitting an IPv6 CIDR."""
        assert parse_cidr("2001:db8::1/64") == Cidr("2001:db8::1", 64)

    def test_missing_slash(self) -> None:
        """Test that text without a prefix is rejected."""
        assert parse_cidr("192.168.1.10") is None

    def test_non_numeric_prefix(self) -> None:
        """Test that a non-decimal prefix is rejected."""
        assert parse_cidr("192.168.1.10/abc") is None
        assert parse_cidr("192.168.1.10/") is None
        assert parse_cidr("192.168.1.10/24/8") is None

    def test_prefix_not_range_checked(self) -> None:
        """Test that out-of-range prefixes are passed through."""
        assert parse_cidr("192.168.1.10/99") == Cidr("192.168.1.10", 99)


class TestIpv4ToInt:
    """Tests for IPv4 address conversion."""

    def test_valid_address(self) -> None:
        """Test conversion of a valid address."""
        assert ipv4_to_int("192.168.1.1") == 0xC0A80101
        assert ipv4_to_int("0.0.0.0") == 0
        assert ipv4_to_int("255.255.255.255") == 0xFFFFFFFF

    @pytest.mark.parametrize(
        "text",
        ["", "1.2.3", "1.2.3.4.5", "256.0.0.1", "a.b.c.d", "1..2.3", "1.2.3.-4", "1.2.3.4/24"],
    )
    def test_invalid_address(self, text: str) -> None:
        """Test that malformed addresses return None."""
        assert ipv4_to_int(text) is None

    def test_int_to_ipv4(self) -> None:
        """Test converting back to dotted-quad."""
        assert int_to_ipv4(0xC0A80101) == "192.168.1.1"


class TestIpv6ToSegments:
    """Tests for IPv6 address expansion."""

    def test_compressed_address(self) -> None:
        """Test expansion of a single :: token."""
        assert ipv6_to_segments("2001:db8::1") == [0x2001, 0x0DB8, 0, 0, 0, 0, 0, 1]

    def test_all_zeros(self) -> None:
        """Test the unspecified address."""
        assert ipv6_to_segments("::") == [0] * 8

    def test_leading_compression(self) -> None:
        """Test loopback style compression."""
        assert ipv6_to_segments("::1") == [0, 0, 0, 0, 0, 0, 0, 1]

    def test_trailing_compression(self) -> None:
        """Test compression at the end of the address."""
        assert ipv6_to_segments("fe80::") == [0xFE80, 0, 0, 0, 0, 0, 0, 0]

    def test_full_address(self) -> None:
        """Test an uncompressed address."""
        assert ipv6_to_segments("1:2:3:4:5:6:7:8") == [1, 2, 3, 4, 5, 6, 7, 8]

    @pytest.mark.parametrize(
        "text",
        [
            "1::2::3",
            "::ffff:192.0.2.1",
            "1:2:3:4:5:6:7",
            "1:2:3:4:5:6:7:8:9",
            "12345::1",
            "g::1",
            "1:2:3:4:5:6:7:8::9",
            "",
        ],
    )
    def test_invalid_address(self, text: str) -> None:
        """Test that unsupported or malformed addresses return None."""
        assert ipv6_to_segments(text) is None


class TestIpv4InNetwork:
    """Tests for IPv4 subnet membership."""

    def test_same_network(self) -> None:
        """Test gateway inside the subnet."""
        assert ipv4_in_network("192.168.1.1", "192.168.1.10/24")

    def test_different_network(self) -> None:
        """Test gateway outside the subnet."""
        assert not ipv4_in_network("10.0.0.1", "192.168.1.10/24")

    def test_zero_prefix_matches_everything(self) -> None:
        """Test that /0 contains every address."""
        assert ipv4_in_network("8.8.8.8", "192.168.1.10/0")

    @pytest.mark.parametrize("ip", ["0.0.0.0", "10.1.2.3", "192.168.1.10", "255.255.255.255"])
    def test_reflexive_host_route(self, ip: str) -> None:
        """Test that every address is inside its own /32."""
        assert ipv4_in_network(ip, f"{ip}/32")

    def test_invalid_inputs(self) -> None:
        """Test that unparseable input is never a member."""
        assert not ipv4_in_network("bogus", "192.168.1.10/24")
        assert not ipv4_in_network("192.168.1.1", "192.168.1.10")
        assert not ipv4_in_network("192.168.1.1", "bogus/24")


class TestIpv6InNetwork:
    """Tests for IPv6 subnet membership."""

    def test_segment_boundary_prefix(self) -> None:
        """Test a prefix that ends on a segment boundary."""
        assert ipv6_in_network("2001:db8::1", "2001:db8::/32")
        assert not ipv6_in_network("2001:db9::1", "2001:db8::/32")

    def test_partial_segment_prefix(self) -> None:
        """Test a prefix that splits a segment."""
        assert ipv6_in_network("2001:db8:8000::1", "2001:db8:8000::/33")
        assert ipv6_in_network("2001:db8:ffff::1", "2001:db8:8000::/33")
        assert not ipv6_in_network("2001:db8:7fff::1", "2001:db8:8000::/33")

    def test_full_length_prefix(self) -> None:
        """Test /128 compares every segment."""
        assert ipv6_in_network("2001:db8::1", "2001:db8::1/128")
        assert not ipv6_in_network("2001:db8::2", "2001:db8::1/128")

    def test_zero_prefix(self) -> None:
        """Test /0 contains every address."""
        assert ipv6_in_network("fe80::1", "2001:db8::/0")

    def test_invalid_inputs(self) -> None:
        """Test that unparseable input is never a member."""
        assert not ipv6_in_network("zz::1", "2001:db8::/64")
        assert not ipv6_in_network("2001:db8::1", "2001:db8::")


class TestNetmask:
    """Tests for prefix to netmask conversion."""

    @pytest.mark.parametrize(
        ("prefix", "netmask"),
        [
            (0, "0.0.0.0"),
            (8, "255.0.0.0"),
            (20, "255.255.240.0"),
            (24, "255.255.255.0"),
            (31, "255.255.255.254"),
            (32, "255.255.255.255"),
        ],
    )
    def test_netmask(self, prefix: int, netmask: str) -> None:
        """Test common prefix lengths."""
        assert cidr_to_netmask_v4(prefix) == netmask

    def test_out_of_range_prefix_is_clamped(self) -> None:
        """Test prefixes outside 0..32."""
        assert cidr_to_netmask_v4(40) == "255.255.255.255"
        assert cidr_to_netmask_v4(-1) == "0.0.0.0"

    @pytest.mark.parametrize("prefix", range(33))
    def test_netmask_reproduces_network(self, prefix: int) -> None:
        """Test that masking with the netmask yields the subnet's network address."""
        ip = "172.16.200.77"
        mask = ipv4_to_int(cidr_to_netmask_v4(prefix))
        network = ipv4_network_address(ip, prefix)

        assert mask is not None
        assert network == ipv4_to_int(ip) & mask  # type: ignore[operator]
        assert ipv4_in_network(int_to_ipv4(network), f"{ip}/{prefix}")  # type: ignore[arg-type]
