"""Amp, installed by its own script and upgraded with ``amp update``."""

from __future__ import annotations

from ..models import BootstrapScript, NpmRegistry, ToolDescriptor, VendorUpdater


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Amp",
        binary_name="amp",
        install_strategy=BootstrapScript("https://ampcode.com/install.sh"),
        upgrade_strategy=VendorUpdater("amp", ("update",)),
        check_command=("amp", "--version"),
        # Windows shim written next to the POSIX one
        extra_binary_paths=(".local/bin/amp.bat",),
        # AMP_HOME
        version_store=".amp",
        config_locations=("{config}/amp", "{data}/amp", "{cache}/amp"),
        version_source=NpmRegistry("@sourcegraph/amp"),
    )
