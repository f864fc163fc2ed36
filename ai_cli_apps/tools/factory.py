"""Factory CLI (``droid``)."""

from __future__ import annotations

from ..models import BootstrapScript, ScriptVariable, ToolDescriptor
from ..probe import last_version_line

INSTALL_URL = "https://app.factory.ai/cli"


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Factory CLI",
        binary_name="droid",
        install_strategy=BootstrapScript(INSTALL_URL),
        check_command=("droid", "--version"),
        version_parser=last_version_line,
        config_locations=(".factory",),
        version_source=ScriptVariable(INSTALL_URL, "VER"),
    )
