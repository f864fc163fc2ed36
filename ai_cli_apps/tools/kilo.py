"""Kilo Code CLI."""

from __future__ import annotations

from ..models import NpmRegistry, PackageManager, ToolDescriptor


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Kilo Code CLI",
        binary_name="kilocode",
        install_strategy=PackageManager("npm", "@kilocode/cli"),
        check_command=("kilocode", "--version"),
        config_locations=(".kilocode",),
        version_source=NpmRegistry("@kilocode/cli"),
    )
