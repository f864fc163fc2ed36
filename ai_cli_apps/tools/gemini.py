"""Gemini CLI."""

from __future__ import annotations

from ..models import BrewInfo, PackageManager, ToolDescriptor


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Gemini CLI",
        binary_name="gemini",
        install_strategy=PackageManager("brew", "gemini-cli"),
        check_command=("gemini", "--version"),
        config_locations=(".gemini",),
        version_source=BrewInfo("gemini-cli"),
    )
