"""Command-line interface for ai-cli-apps."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.prompt import Prompt

from . import __version__
from .actions import Action, ActionResult, Outcome, perform, run_batch
from .config import AppConfig
from .errors import ToolNotFound
from .models import BootstrapScript, ManualOnly, PackageManager, VendorUpdater
from .probe import installed_versions, is_installed
from .tools import catalog, find_tool
from .utils import setup_logging
from .versions import resolve_all

if TYPE_CHECKING:
    from .models import InstallStrategy, ToolDescriptor, ToolRecord

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)


def describe_strategy(strategy: InstallStrategy) -> str:
    if isinstance(strategy, PackageManager):
        return f"{strategy.ecosystem}: {strategy.package_id}"
    if isinstance(strategy, BootstrapScript):
        return "bootstrap"
    if isinstance(strategy, VendorUpdater):
        return " ".join([strategy.identifier, *strategy.args])
    if isinstance(strategy, ManualOnly):
        return "manual"
    return "unknown"


def format_status(record: ToolRecord) -> str:
    """Render the installed/latest version column of a record."""
    if record.installed_version is not None:
        installed = record.installed_version
        if record.update_available:
            return f"[yellow]{installed}[/yellow] → [bright_blue]{record.latest_version}[/bright_blue] available"
        return f"[green]{installed}[/green]"
    if record.latest_version is not None:
        return f"[red]not installed[/red] ([bright_blue]{record.latest_version}[/bright_blue])"
    return "[red]not installed[/red]"


def print_version(record: ToolRecord, width: int) -> None:
    padding = " " * (width - len(record.name) + 1)
    console.print(f"[bold]{record.name}:[/bold]{padding}{format_status(record)}", highlight=False)


def _collect_records(config: AppConfig) -> list[ToolRecord]:
    records = installed_versions(catalog())
    resolve_all(records, config)
    return records


def list_tools(_args: argparse.Namespace, config: AppConfig) -> int:
    """Show installed and missing tools with their latest versions."""
    records = _collect_records(config)
    width = max((len(r.name) for r in records), default=0)
    installed = [r for r in records if r.is_installed]
    not_installed = [r for r in records if not r.is_installed]

    if installed:
        console.print("[bold bright_green]Installed:[/bold bright_green]")
        for record in installed:
            print_version(record, width)
        if not any(r.update_available for r in installed):
            console.print("\n[green]✓ All tools are up to date[/green]")

    if not_installed:
        if installed:
            console.print()
        console.print("[bold bright_black]Not Installed:[/bold bright_black]")
        for record in not_installed:
            print_version(record, width)
    return 0


def check_tools(_args: argparse.Namespace, config: AppConfig) -> int:
    """Show every tool with its latest version."""
    records = _collect_records(config)
    width = max((len(r.name) for r in records), default=0)
    console.print()
    for record in records:
        print_version(record, width)
    return 0


def print_result(result: ActionResult) -> None:
    """Report the outcome of one action."""
    if result.outcome is Outcome.SUCCEEDED:
        console.print(f"[green]✓[/green] {result.message}")
    elif result.outcome in (Outcome.NOOP, Outcome.MANUAL):
        console.print(f"[yellow]![/yellow] {result.message}")
    elif result.outcome is Outcome.DECLINED:
        console.print(f"[cyan]→[/cyan] {result.message}")
    else:
        console.print(
            f"[red]✗[/red] Failed to {result.action.value} {result.tool}: {result.message}",
        )

    if result.report is not None and result.report.removed:
        console.print("[cyan]→[/cyan] Removed:")
        for item in result.report.removed:
            console.print(f"  - {item.kind}: {item.path}")


def parse_selection(answer: str, count: int) -> list[int]:
    """Turn ``"1 3,4"`` or ``"all"`` into zero-based indices."""
    answer = answer.strip().lower()
    if answer in {"a", "all", "*"}:
        return list(range(count))
    selected: list[int] = []
    for token in answer.replace(",", " ").split():
        if token.isdigit() and 1 <= int(token) <= count:
            index = int(token) - 1
            if index not in selected:
                selected.append(index)
        else:
            console.print(f"⚠️ [yellow]Ignoring invalid selection: {token}[/yellow]")
    return selected


def select_tools(title: str, tools: list[ToolDescriptor], labels: list[str]) -> list[ToolDescriptor]:
    """Let the operator pick any number of ``tools`` from a numbered list."""
    console.print(f"\n[bold bright_cyan]{title}[/bold bright_cyan]")
    for number, label in enumerate(labels, 1):
        console.print(f"  [bold]{number})[/bold] {label}", highlight=False)
    try:
        answer = Prompt.ask(
            "Tools (numbers separated by spaces, 'all' for every tool)",
            default="",
            show_default=False,
            console=console,
        )
    except (EOFError, KeyboardInterrupt):
        console.print("\n[red]✗[/red] Selection cancelled")
        return []
    return [tools[i] for i in parse_selection(answer, len(tools))]


def _single(args: argparse.Namespace, config: AppConfig, action: Action) -> int:
    try:
        tool = find_tool(catalog(), args.tool)
    except ToolNotFound as e:
        console.print(f"❌ [bold red]{e}[/bold red]")
        return 1
    result = perform(
        tool,
        action,
        config=config,
        remove_config=getattr(args, "remove_config", False),
        force=getattr(args, "force", False),
    )
    print_result(result)
    return 0 if result.ok else 1


def _batch(
    tools: list[ToolDescriptor],
    action: Action,
    config: AppConfig,
    **kwargs,
) -> int:
    if not tools:
        console.print("[yellow]No tools selected.[/yellow]")
        return 0
    console.print(f"\n[bright_cyan]Starting {action.value}...[/bright_cyan]")
    results = run_batch(tools, action, on_result=print_result, config=config, **kwargs)
    failed = [r for r in results if not r.ok]
    console.print(
        f"\n🔄 [blue]Completed: {len(results) - len(failed)}/{len(results)} tools[/blue]",
    )
    return 0


def install_tools(args: argparse.Namespace, config: AppConfig) -> int:
    """Install one named tool, or a selection of the missing ones."""
    if args.tool:
        return _single(args, config, Action.INSTALL)

    tools = catalog()
    missing = sorted((t for t in tools if not is_installed(t)), key=lambda t: t.name)
    present = [t for t in tools if t not in missing]
    if not missing:
        console.print("[green]All tools are already installed! ✓[/green]")
        return 0
    if present:
        console.print("\n[bright_black]Already installed:[/bright_black]")
        for tool in present:
            console.print(f"  [green]✓[/green] [bright_black]{tool.name}[/bright_black]")

    labels = [f"{t.name} ({describe_strategy(t.install_strategy)})" for t in missing]
    selected = select_tools("Select tools to install:", missing, labels)
    return _batch(selected, Action.INSTALL, config)


def uninstall_tools(args: argparse.Namespace, config: AppConfig) -> int:
    """Uninstall one named tool, or a selection of the installed ones."""
    if args.tool:
        return _single(args, config, Action.UNINSTALL)

    installed = sorted((t for t in catalog() if is_installed(t)), key=lambda t: t.name)
    if not installed:
        console.print("[yellow]No tools are currently installed.[/yellow]")
        return 0
    selected = select_tools("Select tools to uninstall:", installed, [t.name for t in installed])
    return _batch(
        selected,
        Action.UNINSTALL,
        config,
        remove_config=args.remove_config,
        force=args.force,
    )


def upgrade_tools(args: argparse.Namespace, config: AppConfig) -> int:
    """Upgrade one named tool, or a selection of the installed ones."""
    if args.tool:
        return _single(args, config, Action.UPGRADE)

    installed = sorted((t for t in catalog() if is_installed(t)), key=lambda t: t.name)
    if not installed:
        console.print("[yellow]No tools are currently installed.[/yellow]")
        return 0
    labels = [f"{t.name} ({describe_strategy(t.upgrade_method)})" for t in installed]
    selected = select_tools("Select tools to upgrade:", installed, labels)
    return _batch(selected, Action.UPGRADE, config)


def print_cli_version(_args: argparse.Namespace, _config: AppConfig) -> int:
    console.print(f"[yellow]ai-cli-apps[/] [bold]v{__version__}[/]")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    tool_names = "\n".join(f"  {t.name} ({t.binary})" for t in catalog())
    parser = argparse.ArgumentParser(
        prog="ai-cli-apps",
        description="Check and manage AI CLI tools versions",
        epilog=f"Supported tools:\n{tool_names}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Enable verbose output (repeat for debug output)",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"ai-cli-apps v{__version__}",
        help="Print version",
    )
    parser.add_argument(
        "--config-file",
        type=str,
        help="Path to configuration file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    list_parser = subparsers.add_parser("list", help="List installed AI CLI tools (default)")
    list_parser.set_defaults(func=list_tools)

    check_parser = subparsers.add_parser("check", help="Check latest versions available")
    check_parser.set_defaults(func=check_tools)

    for name, aliases, func, verb in (
        ("install", ["add"], install_tools, "install"),
        ("upgrade", ["update"], upgrade_tools, "upgrade"),
    ):
        action_parser = subparsers.add_parser(
            name,
            aliases=aliases,
            help=f"{verb.capitalize()} AI CLI tools",
        )
        action_parser.add_argument(
            "tool",
            nargs="?",
            help=f"Tool to {verb} directly (e.g. 'amp')",
        )
        action_parser.set_defaults(func=func)

    uninstall_parser = subparsers.add_parser(
        "uninstall",
        aliases=["remove"],
        help="Uninstall AI CLI tools",
    )
    uninstall_parser.add_argument(
        "tool",
        nargs="?",
        help="Tool to uninstall directly (e.g. 'claude')",
    )
    uninstall_parser.add_argument(
        "--remove-config",
        action="store_true",
        help="Remove config directories (asks for confirmation unless --force)",
    )
    uninstall_parser.add_argument(
        "--force",
        action="store_true",
        help="Skip all confirmation prompts",
    )
    uninstall_parser.set_defaults(func=uninstall_tools)

    version_parser = subparsers.add_parser("version", help="Print version information")
    version_parser.set_defaults(func=print_cli_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments and execute commands."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    console.print("\n[bold bright_cyan]🤖 AI Tools Manager[/bold bright_cyan]")
    console.print(f"[bright_cyan]{'=' * 19}[/bright_cyan]\n")

    try:
        config = AppConfig.load_from_file(args.config_file)
        func = getattr(args, "func", list_tools)
        code = func(args, config)
    except KeyboardInterrupt:
        console.print("\n[red]✗[/red] Interrupted")
        code = 130
    except Exception as e:  # noqa: BLE001
        console.print(f"❌ [bold red]Error: {e!s}[/bold red]")
        console.print_exception()
        code = 1

    console.print()
    sys.exit(code)


if __name__ == "__main__":
    main()
