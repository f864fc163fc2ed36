"""Exceptions raised by ai-cli-apps."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .actions import UninstallReport


class AiCliAppsError(Exception):
    """Base class for all ai-cli-apps errors."""


class ToolNotFound(AiCliAppsError):
    """No catalog entry matches the requested name."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = list(available)
        msg = f"Tool '{name}' not found. Available tools: {', '.join(self.available)}"
        super().__init__(msg)


class AlreadyInNoopState(AiCliAppsError):
    """The requested action would not change anything."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(message)


class AlreadyInstalled(AlreadyInNoopState):
    def __init__(self, tool: str) -> None:
        super().__init__(tool, f"{tool} is already installed")


class NotInstalled(AlreadyInNoopState):
    def __init__(self, tool: str) -> None:
        super().__init__(tool, f"{tool} is not installed")


class UnsupportedAction(AiCliAppsError):
    """The tool's install strategy cannot perform the requested action."""

    def __init__(self, tool: str, action: str, message: str | None = None) -> None:
        self.tool = tool
        self.action = action
        super().__init__(message or f"{action} is not supported for {tool}")


class ManualActionRequired(UnsupportedAction):
    """The tool can only be managed by hand; ``message`` says how."""


class ExternalFailure(AiCliAppsError):
    """A process, download or filesystem operation failed.

    ``operation`` describes what was being attempted. Uninstall failures also
    carry the ``report`` of everything removed before the failing step.
    """

    def __init__(
        self,
        operation: str,
        detail: str | None = None,
        report: UninstallReport | None = None,
    ) -> None:
        self.operation = operation
        self.detail = detail
        self.report = report
        msg = f"Failed to {operation}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UserDeclined(AiCliAppsError):
    """The operator answered "no" to a confirmation prompt."""
