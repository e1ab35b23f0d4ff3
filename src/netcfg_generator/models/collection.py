"""Interface lifecycle: creation, wholesale replacement, and removal."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from netcfg_generator.models.interface import (
    INTERFACE_CLASSES,
    BaseInterface,
    EthernetInterface,
    Interface,
)

# Fields that belong to one interface type only
_VARIANT_FIELDS = {
    "type",
    "wifi",
    "bond_interfaces",
    "bond_mode",
    "vlan_id",
    "vlan_link",
    "bridge_interfaces",
    "bridge_stp",
}


def new_interface(
    type: str = "ethernet",
    name: str | None = None,
    existing: Iterable[BaseInterface] = (),
) -> Interface:
    """Create an interface with the full default field set.

    New interfaces start on DHCPv4. When no name is given, the name is
    ``eth<N>`` where N is the number of interfaces that already exist.

    Args:
        type: Interface type (ethernet, wifi, bond, vlan, bridge)
        name: Device name, or None to derive one
        existing: Interfaces already configured

    Returns:
        A new interface with a fresh id

    Raises:
        ValueError: If the type is unknown
    """
    cls = INTERFACE_CLASSES.get(type)
    if cls is None:
        raise ValueError(f"Unknown interface type '{type}'")

    if name is None:
        name = f"eth{len(list(existing))}"

    return cls(name=name, dhcp4=True)  # type: ignore[return-value]


def change_type(iface: BaseInterface, new_type: str) -> Interface:
    """Rebuild an interface as another type.

    Shared fields and the id are kept; the type-specific block of the old
    type is dropped and the new type starts from its defaults.

    Raises:
        ValueError: If the type is unknown
    """
    cls = INTERFACE_CLASSES.get(new_type)
    if cls is None:
        raise ValueError(f"Unknown interface type '{new_type}'")

    shared: dict[str, Any] = {
        key: value for key, value in iface.model_dump().items() if key not in _VARIANT_FIELDS
    }
    return cls.model_validate(shared)  # type: ignore[return-value]


@dataclass(frozen=True)
class InterfaceCollection:
    """An ordered, immutable snapshot of interfaces.

    Every operation returns a new collection and leaves this one untouched.
    Names are not required to be unique.
    """

    interfaces: tuple[Interface, ...] = ()

    def __iter__(self) -> Iterator[Interface]:
        return iter(self.interfaces)

    def __len__(self) -> int:
        return len(self.interfaces)

    def get(self, iface_id: str) -> Interface | None:
        """Return the interface with the given id, or None."""
        for iface in self.interfaces:
            if iface.id == iface_id:
                return iface
        return None

    def add(self, iface: Interface | None = None, type: str = "ethernet") -> "InterfaceCollection":
        """Append an interface, creating a default one when none is given."""
        if iface is None:
            iface = new_interface(type, existing=self.interfaces)
        return InterfaceCollection(interfaces=(*self.interfaces, iface))

    def replace(self, iface: Interface) -> "InterfaceCollection":
        """Replace the interface sharing ``iface.id`` with ``iface``.

        Raises:
            KeyError: If no interface has that id
        """
        if self.get(iface.id) is None:
            raise KeyError(iface.id)
        return InterfaceCollection(
            interfaces=tuple(iface if current.id == iface.id else current for current in self)
        )

    def remove(self, iface_id: str) -> "InterfaceCollection":
        """Drop the interface with the given id (no-op if absent)."""
        return InterfaceCollection(
            interfaces=tuple(current for current in self if current.id != iface_id)
        )

    def names(self) -> set[str]:
        """Non-blank interface names."""
        return {iface.name for iface in self if iface.name.strip()}


def default_collection() -> InterfaceCollection:
    """A collection holding a single DHCP ``eth0``, the starting state of an editor."""
    return InterfaceCollection(interfaces=(EthernetInterface(name="eth0", dhcp4=True),))
