"""Cursor Agent.

Cursor publishes no machine-readable release channel, so the latest version
is never known.
"""

from __future__ import annotations

from ..models import BootstrapScript, ToolDescriptor, VendorUpdater


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Cursor Agent",
        binary_name="cursor-agent",
        install_strategy=BootstrapScript("https://cursor.com/install"),
        upgrade_strategy=VendorUpdater("cursor-agent", ("upgrade",)),
        check_command=("cursor-agent", "--version"),
        # ~/.cursor is shared with the editor, only the CLI settings belong to us
        config_locations=(".cursor/cli-config.json",),
    )
