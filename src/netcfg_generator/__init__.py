"""Netplan and ifupdown configuration generator."""

from netcfg_generator.generators import render_ifupdown, render_netplan
from netcfg_generator.parser import InterfaceDocument, parse_document
from netcfg_generator.validation import validate_gateway, validate_interfaces

__version__ = "0.1.0"

__all__ = [
    "InterfaceDocument",
    "parse_document",
    "render_ifupdown",
    "render_netplan",
    "validate_gateway",
    "validate_interfaces",
    "__version__",
]
