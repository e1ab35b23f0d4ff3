"""Interface document parser.

Reads a YAML or JSON document describing a host's interfaces and converts
it into validated models:

    os: ubuntu_24_04
    interfaces:
      - name: eth0
        type: ethernet
        dhcp4: true

JSON is accepted as well since it is a subset of YAML.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from netcfg_generator.errors import ErrorCollector, ErrorSeverity
from netcfg_generator.models import Interface, InterfaceAdapter, InterfaceCollection

logger = logging.getLogger(__name__)


class InterfaceDocument(BaseModel):
    """A parsed model document."""

    model_config = ConfigDict(frozen=True)

    os: str | None = Field(None, description="Target OS profile id")
    interfaces: tuple[Interface, ...] = Field((), description="Interfaces in display order")

    def collection(self) -> InterfaceCollection:
        """Return the interfaces as an editable collection snapshot."""
        return InterfaceCollection(interfaces=self.interfaces)


class InterfaceDocumentParser:
    """Parser for interface documents.

    Each interface entry is validated on its own. With an error collector,
    invalid entries are recorded and skipped so the rest of the document
    still renders; without one, the first invalid entry raises.
    """

    def __init__(self, path: str | Path, error_collector: ErrorCollector | None = None) -> None:
        """Initialize the parser.

        Args:
            path: Path to the YAML or JSON document
            error_collector: Optional error collector for graceful error handling
        """
        self.path = Path(path)
        self.error_collector = error_collector

    def parse(self) -> InterfaceDocument:
        """Parse the document.

        Returns:
            InterfaceDocument with every valid interface

        Raises:
            FileNotFoundError: If the document does not exist
            ValueError: If the document is malformed, or an interface entry
                is invalid and no error collector was given
        """
        data = self._read_document()

        os_id = data.get("os")
        if os_id is not None and not isinstance(os_id, str):
            raise ValueError(f"'os' must be a string, got {type(os_id).__name__}")

        raw_interfaces = data.get("interfaces") or []
        if not isinstance(raw_interfaces, list):
            raise ValueError("'interfaces' must be a list")

        interfaces: list[Interface] = []
        for index, entry in enumerate(raw_interfaces):
            iface = self._parse_interface(index, entry)
            if iface is not None:
                interfaces.append(iface)

        logger.debug(
            "Parsed %d of %d interfaces from %s", len(interfaces), len(raw_interfaces), self.path
        )
        return InterfaceDocument(os=os_id, interfaces=tuple(interfaces))

    def _read_document(self) -> dict[str, Any]:
        """Load the document as a mapping.

        Raises:
            FileNotFoundError: If the document does not exist
            ValueError: If the file cannot be read, or the content is not valid
                YAML or not a mapping
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Interface document not found: {self.path}")

        try:
            content = self.path.read_text()
        except OSError as e:
            raise ValueError(f"Cannot read {self.path}: {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping at the top of {self.path}")
        return data

    def _parse_interface(self, index: int, entry: Any) -> Interface | None:
        """Validate one interface entry.

        A missing ``type`` defaults to ethernet.

        Returns:
            Validated interface, or None if invalid and an error collector is set
        """
        section = f"interfaces[{index}]"

        if not isinstance(entry, dict):
            return self._reject(section, "Interface entry must be a mapping", None)

        entry = {"type": "ethernet", **entry}
        try:
            return InterfaceAdapter.validate_python(entry)
        except ValidationError as e:
            return self._reject(section, "Validation error", e)

    def _reject(self, section: str, message: str, exception: Exception | None) -> None:
        if self.error_collector is None:
            if exception is None:
                raise ValueError(f"{section}: {message}")
            raise ValueError(f"{section}: {message}: {exception}") from exception

        self.error_collector.add_error(
            section=section,
            message=message,
            exception=exception,
            severity=ErrorSeverity.ERROR,
        )
        return None


def parse_document(
    path: str | Path,
    error_collector: ErrorCollector | None = None,
) -> InterfaceDocument:
    """Parse an interface document.

    This is a convenience function that creates an InterfaceDocumentParser
    and calls parse().

    Args:
        path: Path to the YAML or JSON document
        error_collector: Optional error collector for graceful error handling

    Returns:
        InterfaceDocument: Parsed document

    Raises:
        FileNotFoundError: If the document does not exist
        ValueError: If the document is malformed (or contains an invalid
                   interface and no error collector was given)
    """
    parser = InterfaceDocumentParser(path, error_collector=error_collector)
    return parser.parse()
