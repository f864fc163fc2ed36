"""GitHub Copilot CLI."""

from __future__ import annotations

from ..models import NpmRegistry, PackageManager, ToolDescriptor


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Copilot CLI",
        binary_name="copilot",
        install_strategy=PackageManager("npm", "@github/copilot"),
        check_command=("copilot", "--version"),
        config_locations=(".copilot",),
        version_source=NpmRegistry("@github/copilot"),
    )
