"""OpenCode."""

from __future__ import annotations

from ..models import BootstrapScript, BrewInfo, ToolDescriptor


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="OpenCode",
        binary_name="opencode",
        install_strategy=BootstrapScript("https://opencode.ai/install"),
        check_command=("opencode", "--version"),
        config_locations=(".opencode",),
        extra_binary_paths=(".opencode/bin/opencode",),
        version_source=BrewInfo("opencode"),
    )
