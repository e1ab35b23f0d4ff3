"""Configuration file generators.

Each generator turns interface models into the text of one configuration
file format. ``render_netplan`` and ``render_ifupdown`` are the entry
points used by callers.
"""

from collections.abc import Iterable
from datetime import date

from netcfg_generator.generators.base import BaseGenerator
from netcfg_generator.generators.ifupdown import IFUPDOWN_PATH, IfupdownGenerator
from netcfg_generator.generators.netplan import NETPLAN_FILE_MODE, NETPLAN_PATH, NetplanGenerator
from netcfg_generator.models import BaseInterface, get_profile


def render_netplan(
    profile_id: str | None,
    interfaces: Iterable[BaseInterface],
    generated_on: date | None = None,
) -> str:
    """Render interfaces as a netplan YAML document.

    Args:
        profile_id: Target OS profile id (unknown ids use the default profile)
        interfaces: Interfaces in display order
        generated_on: Date written into the header (default: today)

    Returns:
        Complete file content
    """
    return NetplanGenerator(get_profile(profile_id), interfaces, generated_on).render()


def render_ifupdown(
    interfaces: Iterable[BaseInterface],
    generated_on: date | None = None,
) -> str:
    """Render interfaces as an ifupdown interfaces file.

    Only the first address of each family is written; see IfupdownGenerator.

    Args:
        interfaces: Interfaces in display order
        generated_on: Date written into the header (default: today)

    Returns:
        Complete file content
    """
    return IfupdownGenerator(interfaces, generated_on).render()


__all__ = [
    "BaseGenerator",
    "IFUPDOWN_PATH",
    "IfupdownGenerator",
    "NETPLAN_FILE_MODE",
    "NETPLAN_PATH",
    "NetplanGenerator",
    "render_ifupdown",
    "render_netplan",
]
