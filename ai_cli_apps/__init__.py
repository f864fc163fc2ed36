"""ai-cli-apps - AI CLI Tools Manager.

Checks which AI coding CLIs (Claude Code, Amp, Codex, Copilot, ...) are
installed, looks up the latest published version of each from its own
distribution channel, and installs, upgrades or uninstalls them through
npm, Homebrew, vendor bootstrap scripts or the tool's own updater.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import actions, cli, config, models, probe, tools, utils, versions
from .actions import Action, ActionResult, Outcome, install, perform, run_batch, uninstall, upgrade
from .cli import main
from .config import AppConfig
from .models import ToolDescriptor, ToolRecord, contains_or_contained
from .probe import installed_versions, is_installed, local_version
from .tools import catalog, find_tool
from .versions import resolve_all

__all__ = [
    "Action",
    "ActionResult",
    "AppConfig",
    "Outcome",
    "ToolDescriptor",
    "ToolRecord",
    "actions",
    "catalog",
    "cli",
    "config",
    "contains_or_contained",
    "find_tool",
    "install",
    "installed_versions",
    "is_installed",
    "local_version",
    "main",
    "models",
    "perform",
    "probe",
    "resolve_all",
    "run_batch",
    "tools",
    "uninstall",
    "upgrade",
    "utils",
    "versions",
]
