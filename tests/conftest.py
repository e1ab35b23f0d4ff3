"""Pytest configuration and fixtures for netcfg-generator tests."""

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

from netcfg_generator.models import EthernetInterface


@pytest.fixture
def generated_on() -> date:
    """Fixed generation date so rendered output is byte-stable."""
    return date(2026, 1, 15)


@pytest.fixture
def static_ethernet() -> EthernetInterface:
    """Ethernet interface with a static IPv4 address, gateway, and DNS.

    Returns:
        eth0 on 192.168.1.10/24 via 192.168.1.1
    """
    return EthernetInterface(
        name="eth0",
        ipv4_addresses=["192.168.1.10/24"],
        gateway4="192.168.1.1",
        nameservers4=["8.8.8.8", "1.1.1.1"],
    )


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[str, str], Path]:
    """Fixture that writes an interface document and returns its path.

    Usage:
        def test_something(write_document):
            path = write_document("interfaces: []")
    """

    def _write(content: str, filename: str = "interfaces.yaml") -> Path:
        path = tmp_path / filename
        path.write_text(content)
        return path

    return _write
