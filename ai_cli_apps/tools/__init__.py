"""The catalog of managed tools.

Each module defines one tool through a ``definition()`` function. Adding a
tool means adding a module and appending it to ``_DEFINITIONS``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import ToolNotFound
from . import amp, claude, cline, codex, copilot, cursor_agent, factory, gemini, kilo, opencode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..models import ToolDescriptor

_DEFINITIONS = (
    claude.definition,
    amp.definition,
    codex.definition,
    cursor_agent.definition,
    copilot.definition,
    kilo.definition,
    gemini.definition,
    cline.definition,
    opencode.definition,
    factory.definition,
)


def catalog() -> list[ToolDescriptor]:
    """Return every tool descriptor in display order."""
    return [definition() for definition in _DEFINITIONS]


def format_available_tools(tools: Sequence[ToolDescriptor]) -> list[str]:
    return [
        f"{t.name} ({t.binary_name})" if t.binary_name else t.name
        for t in tools
    ]


def find_tool(tools: Sequence[ToolDescriptor], name: str) -> ToolDescriptor:
    """Look a tool up by display or binary name, ignoring case."""
    for tool in tools:
        if tool.matches(name):
            return tool
    raise ToolNotFound(name, format_available_tools(tools))


__all__ = ["catalog", "find_tool", "format_available_tools"]
