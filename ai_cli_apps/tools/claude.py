"""Claude Code."""

from __future__ import annotations

from ..models import BootstrapScript, GitHubRelease, ToolDescriptor


def definition() -> ToolDescriptor:
    return ToolDescriptor(
        name="Claude Code",
        binary_name="claude",
        install_strategy=BootstrapScript("https://claude.ai/install.sh"),
        check_command=("claude", "--version"),
        config_locations=(".claude", ".claude.json"),
        version_source=GitHubRelease("anthropics/claude-code"),
    )
