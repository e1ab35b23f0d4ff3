"""Pydantic models for netcfg-generator.

This package holds the interface model (a tagged union keyed by interface
type), the target OS profile catalog, and the immutable interface
collection used by editors.
"""

from netcfg_generator.models.collection import (
    InterfaceCollection,
    change_type,
    default_collection,
    new_interface,
)
from netcfg_generator.models.interface import (
    DEFAULT_MTU,
    BaseInterface,
    BondInterface,
    BondMode,
    BridgeInterface,
    EthernetInterface,
    Interface,
    InterfaceAdapter,
    Route,
    VlanInterface,
    WifiAccessPoint,
    WifiInterface,
    is_single_line,
    is_single_token,
)
from netcfg_generator.models.profile import (
    DEFAULT_PROFILE_ID,
    OS_PROFILES,
    OsProfile,
    OsStyle,
    get_profile,
)

__all__ = [
    # collection
    "InterfaceCollection",
    "change_type",
    "default_collection",
    "new_interface",
    # interface
    "DEFAULT_MTU",
    "BaseInterface",
    "BondInterface",
    "BondMode",
    "BridgeInterface",
    "EthernetInterface",
    "Interface",
    "InterfaceAdapter",
    "Route",
    "VlanInterface",
    "WifiAccessPoint",
    "WifiInterface",
    "is_single_line",
    "is_single_token",
    # profile
    "DEFAULT_PROFILE_ID",
    "OS_PROFILES",
    "OsProfile",
    "OsStyle",
    "get_profile",
]
