"""Cline CLI.

``cline version`` reports both the CLI and the bundled core::

    Cline CLI Version: 1.0.2
    Cline Core Version: 3.34.0
"""

from __future__ import annotations

from ..models import NpmRegistry, PackageManager, ToolDescriptor
from ..probe import labeled_versions


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Cline CLI",
        binary_name="cline",
        install_strategy=PackageManager("npm", "cline"),
        check_command=("cline", "version"),
        version_parser=labeled_versions("Cline CLI Version", "Cline Core Version", "core"),
        config_locations=(".cline",),
        version_source=NpmRegistry("cline"),
    )
