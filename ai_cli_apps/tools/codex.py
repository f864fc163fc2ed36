"""Codex CLI."""

from __future__ import annotations

from ..models import BrewInfo, PackageManager, ToolDescriptor


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Codex CLI",
        binary_name="codex",
        install_strategy=PackageManager("brew", "codex"),
        check_command=("codex", "--version"),
        config_locations=(".codex",),
        version_source=BrewInfo("codex"),
    )
