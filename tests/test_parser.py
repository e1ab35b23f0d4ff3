"""Tests for interface document parsing."""

from collections.abc import Callable
from pathlib import Path

import pytest

from netcfg_generator.errors import ErrorCollector
from netcfg_generator.models import (
    BondInterface,
    EthernetInterface,
    Route,
    VlanInterface,
    WifiInterface,
)
from netcfg_generator.parser import InterfaceDocumentParser, parse_document

WriteDocument = Callable[..., Path]

SAMPLE_DOCUMENT = """
os: ubuntu_24_04
interfaces:
  - name: eth0
    type: ethernet
    ipv4_addresses: [192.168.1.10/24]
    gateway4: 192.168.1.1
    nameservers4: [8.8.8.8]
    routes:
      - to: 10.10.0.0/16
        via: 192.168.1.254
  - name: wlan0
    type: wifi
    dhcp4: true
    wifi:
      ssid: HomeNet
      password: secret123
  - name: bond0
    type: bond
    bond_interfaces: [eth1, eth2]
    bond_mode: 802.3ad
  - name: vlan10
    type: vlan
    vlan_id: 10
    vlan_link: eth0
"""


class TestParseDocument:
    """Tests for successful parsing."""

    def test_sample_document(self, write_document: WriteDocument) -> None:
        """Test parsing every interface type."""
        document = parse_document(write_document(SAMPLE_DOCUMENT))

        assert document.os == "ubuntu_24_04"
        eth0, wlan0, bond0, vlan10 = document.interfaces

        assert isinstance(eth0, EthernetInterface)
        assert eth0.ipv4_addresses == ("192.168.1.10/24",)
        assert eth0.routes == (Route(to="10.10.0.0/16", via="192.168.1.254"),)
        assert isinstance(wlan0, WifiInterface)
        assert wlan0.wifi.password == "secret123"
        assert isinstance(bond0, BondInterface)
        assert bond0.bond_mode.value == "802.3ad"  # type: ignore[union-attr]
        assert isinstance(vlan10, VlanInterface)
        assert vlan10.vlan_id == 10

    def test_type_defaults_to_ethernet(self, write_document: WriteDocument) -> None:
        """Test entries without a type key."""
        document = parse_document(write_document("interfaces:\n  - name: eth0\n    dhcp4: true\n"))
        assert isinstance(document.interfaces[0], EthernetInterface)

    def test_json_document(self, write_document: WriteDocument) -> None:
        """Test JSON input."""
        path = write_document(
            '{"os": "debian", "interfaces": [{"name": "eth0", "dhcp4": true}]}',
            "interfaces.json",
        )
        document = parse_document(path)
        assert document.os == "debian"
        assert document.interfaces[0].dhcp4 is True

    def test_empty_document(self, write_document: WriteDocument) -> None:
        """Test an empty file yields no interfaces."""
        document = parse_document(write_document(""))
        assert document.os is None
        assert document.interfaces == ()

    def test_collection(self, write_document: WriteDocument) -> None:
        """Test converting the document into a collection."""
        document = parse_document(write_document(SAMPLE_DOCUMENT))
        collection = document.collection()
        assert len(collection) == 4
        assert collection.names() == {"eth0", "wlan0", "bond0", "vlan10"}


class TestParserErrors:
    """Tests for malformed documents."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a document that does not exist."""
        with pytest.raises(FileNotFoundError, match="Interface document not found"):
            parse_document(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, write_document: WriteDocument) -> None:
        """Test unparseable content."""
        with pytest.raises(ValueError, match="Invalid YAML"):
            parse_document(write_document("interfaces: [unclosed\n"))

    def test_top_level_not_mapping(self, write_document: WriteDocument) -> None:
        """Test a document that is a list."""
        with pytest.raises(ValueError, match="Expected a mapping"):
            parse_document(write_document("- name: eth0\n"))

    def test_interfaces_not_list(self, write_document: WriteDocument) -> None:
        """Test an interfaces key that is not a list."""
        with pytest.raises(ValueError, match="'interfaces' must be a list"):
            parse_document(write_document("interfaces: eth0\n"))

    def test_unreadable_document(self, tmp_path: Path) -> None:
        """Test a path that exists but cannot be read as a file."""
        with pytest.raises(ValueError, match="Cannot read"):
            parse_document(tmp_path)

    def test_os_not_string(self, write_document: WriteDocument) -> None:
        """Test a non-string os key."""
        with pytest.raises(ValueError, match="'os' must be a string"):
            parse_document(write_document("os: [ubuntu]\n"))

    def test_invalid_entry_raises_without_collector(self, write_document: WriteDocument) -> None:
        """Test the first invalid entry raises when no collector is given."""
        path = write_document("interfaces:\n  - name: eth0\n    mtu: -5\n")
        with pytest.raises(ValueError, match=r"interfaces\[0\]: Validation error"):
            parse_document(path)


class TestParserErrorCollection:
    """Tests for parser error collection behavior."""

    def test_invalid_entries_skipped(self, write_document: WriteDocument) -> None:
        """Test that invalid entries are collected and the rest still parse."""
        content = """
interfaces:
  - name: eth0
    dhcp4: true
  - name: eth1
    type: token-ring
  - just-a-string
  - name: vlan5
    type: vlan
    vlan_id: 5000
  - name: eth2
"""
        error_collector = ErrorCollector()
        parser = InterfaceDocumentParser(write_document(content), error_collector=error_collector)
        document = parser.parse()

        assert [i.name for i in document.interfaces] == ["eth0", "eth2"]
        assert error_collector.count() == 3
        assert error_collector.messages_for("interfaces[1]") == ["Validation error"]
        assert error_collector.messages_for("interfaces[2]") == [
            "Interface entry must be a mapping"
        ]
        assert error_collector.errors[2].section == "interfaces[3]"
        assert error_collector.errors[2].exception is not None

    def test_document_errors_still_raise(self, write_document: WriteDocument) -> None:
        """Test that a broken document raises even with a collector."""
        with pytest.raises(ValueError):
            parse_document(write_document("[1, 2"), error_collector=ErrorCollector())
