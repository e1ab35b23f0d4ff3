"""Netplan YAML generator."""

from collections.abc import Iterable
from datetime import date
from typing import Any

import yaml

from netcfg_generator.assembler import assemble_netplan
from netcfg_generator.generators.base import BaseGenerator
from netcfg_generator.models.interface import BaseInterface
from netcfg_generator.models.profile import OsProfile

NETPLAN_PATH = "/etc/netplan/01-netcfg.yaml"
NETPLAN_FILE_MODE = 0o600


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that writes repeated objects out in full instead of as &anchors."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def dump_yaml(tree: dict[str, Any]) -> str:
    """Serialize a tree as block-style YAML, keeping key insertion order."""
    return yaml.dump(
        tree,
        Dumper=_NoAliasDumper,
        indent=2,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


class NetplanGenerator(BaseGenerator):
    """Generate a netplan configuration file."""

    def __init__(
        self,
        profile: OsProfile,
        interfaces: Iterable[BaseInterface],
        generated_on: date | None = None,
    ):
        """Initialize netplan generator.

        Args:
            profile: Target OS profile
            interfaces: Interfaces in display order
            generated_on: Date written into the header (default: today)
        """
        super().__init__(generated_on)
        self.profile = profile
        self.interfaces = list(interfaces)

    def build_tree(self) -> dict[str, Any]:
        """Return the netplan mapping before serialization."""
        return assemble_netplan(self.profile, self.interfaces)

    def generate(self) -> list[str]:
        """Generate the netplan document.

        The YAML body is framed by a comment header (target OS, date,
        install path) and a footer with the apply, try, and debug commands.

        Returns:
            Output lines
        """
        lines = [
            f"# {self.profile.display_name} Netplan Configuration",
            f"# Date: {self.date_str}",
            f"# Save this file as {NETPLAN_PATH}",
            f"# Set permissions: sudo chmod {NETPLAN_FILE_MODE:o} {NETPLAN_PATH}",
            "",
        ]
        lines.extend(dump_yaml(self.build_tree()).splitlines())
        lines.extend(
            [
                "",
                "# Apply configuration: sudo netplan apply",
                "# Test configuration: sudo netplan try",
                "# Debug: sudo netplan --debug apply",
            ]
        )
        return lines
