"""Install, upgrade and uninstall tools according to their strategy."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, NamedTuple

from rich.console import Console

from . import utils
from .config import AppConfig
from .errors import (
    AlreadyInNoopState,
    AlreadyInstalled,
    ExternalFailure,
    ManualActionRequired,
    NotInstalled,
    UnsupportedAction,
    UserDeclined,
)
from .models import BootstrapScript, ManualOnly, PackageManager, VendorUpdater
from .probe import is_installed
from .utils import (
    base_dirs,
    get_text,
    make_executable,
    path_exists,
    remove_path,
    resolve_location,
    run_command,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .models import InstallStrategy, ToolDescriptor

console = Console()
logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

PACKAGE_MANAGER_COMMANDS: dict[str, dict[str, tuple[str, ...]]] = {
    "npm": {
        "install": ("npm", "install", "-g"),
        "upgrade": ("npm", "install", "-g"),
        "uninstall": ("npm", "uninstall", "-g"),
    },
    "brew": {
        "install": ("brew", "install"),
        "upgrade": ("brew", "upgrade"),
        "uninstall": ("brew", "uninstall"),
    },
}


class Action(str, Enum):
    INSTALL = "install"
    UPGRADE = "upgrade"
    UNINSTALL = "uninstall"


class Outcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NOOP = "noop"
    UNSUPPORTED = "unsupported"
    MANUAL = "manual"
    DECLINED = "declined"


class RemovedPath(NamedTuple):
    """One item removed by an uninstall: a binary, version store, config or package."""

    kind: str
    path: str


@dataclass
class UninstallReport:
    """What an uninstall removed and which configuration it left in place."""

    tool: str
    removed: list[RemovedPath] = field(default_factory=list)
    kept_config: list[Path] = field(default_factory=list)
    config_declined: bool = False

    @property
    def noop(self) -> bool:
        return not self.removed

    def paths(self, kind: str) -> list[str]:
        return [item.path for item in self.removed if item.kind == kind]


class ActionResult(NamedTuple):
    """Terminal state of one action on one tool."""

    tool: str
    action: Action
    outcome: Outcome
    message: str = ""
    report: UninstallReport | None = None

    @property
    def ok(self) -> bool:
        return self.outcome not in (Outcome.FAILED, Outcome.UNSUPPORTED)


def _strategy_for(descriptor: ToolDescriptor, action: Action) -> InstallStrategy:
    """Return the strategy for ``action`` or raise if it cannot perform it."""
    name = descriptor.name
    strategy = descriptor.upgrade_method if action is Action.UPGRADE else descriptor.install_strategy
    if isinstance(strategy, ManualOnly):
        raise ManualActionRequired(name, action.value, strategy.message)
    if isinstance(strategy, VendorUpdater) and action is Action.INSTALL:
        msg = f"{name} can only be upgraded with `{strategy.identifier}`, install it with the vendor's installer"
        raise UnsupportedAction(name, action.value, msg)
    if isinstance(strategy, PackageManager) and strategy.ecosystem not in PACKAGE_MANAGER_COMMANDS:
        msg = f"Unknown package manager '{strategy.ecosystem}' for {name}"
        raise UnsupportedAction(name, action.value, msg)
    return strategy


def _run_step(args: Sequence[str], operation: str) -> None:
    """Run a command attached to the terminal; non-zero exit is a failure."""
    console.print(f"[cyan]→[/cyan] Running `{' '.join(args)}`...")
    try:
        result = run_command(args, capture=False)
    except OSError as e:
        raise ExternalFailure(operation, str(e)) from e
    if result.returncode != 0:
        raise ExternalFailure(operation, f"exit status {result.returncode}")


def _run_package_manager(strategy: PackageManager, action: Action) -> None:
    command = [*PACKAGE_MANAGER_COMMANDS[strategy.ecosystem][action.value], strategy.package_id]
    _run_step(command, f"{strategy.ecosystem} {action.value} {strategy.package_id}")


def run_install_script(url: str, description: str, config: AppConfig) -> None:
    """Download a shell script, run it, and always delete it afterwards."""
    console.print(f"[cyan]→[/cyan] Downloading {description}...")
    script = get_text(url, config)
    if script is None:
        raise ExternalFailure(f"download {description}", url)

    fd, name = tempfile.mkstemp(prefix="ai-cli-apps-", suffix=".sh")
    script_path = Path(name)
    try:
        try:
            with os.fdopen(fd, "w") as f:
                f.write(script)
            make_executable(script_path)
        except OSError as e:
            raise ExternalFailure(f"write {description}", str(e)) from e
        _run_step([config.shell, str(script_path)], f"run {description}")
    finally:
        script_path.unlink(missing_ok=True)


def install(descriptor: ToolDescriptor, config: AppConfig | None = None) -> None:
    """Install a tool that is not installed yet."""
    config = config or AppConfig()
    strategy = _strategy_for(descriptor, Action.INSTALL)
    if is_installed(descriptor):
        raise AlreadyInstalled(descriptor.name)

    console.print(f"Installing [bright_cyan]{descriptor.name}[/bright_cyan]...")
    if isinstance(strategy, PackageManager):
        _run_package_manager(strategy, Action.INSTALL)
    elif isinstance(strategy, BootstrapScript):
        run_install_script(strategy.url, "bootstrap script", config)


def upgrade(descriptor: ToolDescriptor, config: AppConfig | None = None) -> None:
    """Upgrade an installed tool in place."""
    config = config or AppConfig()
    strategy = _strategy_for(descriptor, Action.UPGRADE)
    if not is_installed(descriptor):
        raise NotInstalled(descriptor.name)

    console.print(f"Upgrading [bright_cyan]{descriptor.name}[/bright_cyan]...")
    if isinstance(strategy, PackageManager):
        _run_package_manager(strategy, Action.UPGRADE)
    elif isinstance(strategy, BootstrapScript):
        run_install_script(strategy.upgrade_url or strategy.url, "upgrade script", config)
    elif isinstance(strategy, VendorUpdater):
        _run_step(
            [strategy.identifier, *strategy.args],
            f"run `{strategy.identifier} {' '.join(strategy.args)}`",
        )


def _remove(path: Path, kind: str, report: UninstallReport) -> None:
    try:
        remove_path(path)
    except OSError as e:
        raise ExternalFailure(f"remove {kind} {path}", str(e), report=report) from e
    report.removed.append(RemovedPath(kind, str(path)))


def _version_store(descriptor: ToolDescriptor, bases: Mapping[str, Path]) -> Path | None:
    if descriptor.version_store:
        store = resolve_location(descriptor.version_store, bases)
        return store if path_exists(store) else None
    # The default data directory is only ours when it holds installed versions.
    store = bases["data"] / descriptor.binary
    return store if (store / "versions").exists() else None


def _config_paths(descriptor: ToolDescriptor, bases: Mapping[str, Path]) -> list[Path]:
    locations = descriptor.config_locations or (f".{descriptor.binary}",)
    paths = (resolve_location(location, bases) for location in locations)
    return [path for path in paths if path_exists(path)]


def _require_confirmation(prompt: str, confirm: Confirm) -> None:
    if not confirm(prompt):
        raise UserDeclined(prompt)


def _remove_config(
    descriptor: ToolDescriptor,
    bases: Mapping[str, Path],
    report: UninstallReport,
    *,
    remove_config: bool,
    force: bool,
    confirm: Confirm,
) -> None:
    existing = _config_paths(descriptor, bases)
    if not existing:
        return

    console.print("[cyan]→[/cyan] Config found at:")
    for path in existing:
        console.print(f"  - {path}")

    if not remove_config:
        report.kept_config = existing
        console.print("[cyan]→[/cyan] Keeping config (use --remove-config to remove it)")
        return

    if not force:
        try:
            _require_confirmation("Remove config? (contains settings and history)", confirm)
        except UserDeclined:
            report.kept_config = existing
            report.config_declined = True
            console.print("[cyan]→[/cyan] Keeping config")
            return

    for path in existing:
        _remove(path, "config", report)


def uninstall(
    descriptor: ToolDescriptor,
    remove_config: bool = False,  # noqa: FBT001, FBT002
    force: bool = False,  # noqa: FBT001, FBT002
    config: AppConfig | None = None,
    confirm: Confirm | None = None,
) -> UninstallReport:
    """Remove an installed tool and, if asked, its configuration.

    Package-manager tools are removed by their package manager. Other tools
    lose their binary in ``bin_dir``, every extra binary path and, for
    bootstrap installs, their version store. Configuration is removed only
    with ``remove_config`` and after confirmation unless ``force``.

    The first failing removal raises ``ExternalFailure``; anything removed
    before it stays removed and is listed in the error's report.
    """
    config = config or AppConfig()
    strategy = _strategy_for(descriptor, Action.UNINSTALL)
    if not is_installed(descriptor):
        raise NotInstalled(descriptor.name)

    console.print(f"Uninstalling [bright_cyan]{descriptor.name}[/bright_cyan]...")
    bases = base_dirs()
    report = UninstallReport(descriptor.name)

    if isinstance(strategy, PackageManager):
        _run_package_manager(strategy, Action.UNINSTALL)
        report.removed.append(
            RemovedPath("package", f"{strategy.ecosystem}:{strategy.package_id}"),
        )
    else:
        binaries = [bases["home"] / config.bin_dir / descriptor.binary]
        binaries.extend(resolve_location(p, bases) for p in descriptor.extra_binary_paths)
        for path in binaries:
            if path_exists(path):
                _remove(path, "binary", report)
        if isinstance(strategy, BootstrapScript):
            store = _version_store(descriptor, bases)
            if store is not None:
                _remove(store, "versions", report)

    _remove_config(
        descriptor,
        bases,
        report,
        remove_config=remove_config,
        force=force,
        confirm=confirm or utils.confirm,
    )
    return report


def perform(
    descriptor: ToolDescriptor,
    action: Action,
    *,
    config: AppConfig | None = None,
    remove_config: bool = False,
    force: bool = False,
    confirm: Confirm | None = None,
) -> ActionResult:
    """Run one action on one tool and turn every expected error into a result."""
    name = descriptor.name
    try:
        if action is Action.INSTALL:
            install(descriptor, config)
            return ActionResult(name, action, Outcome.SUCCEEDED, f"{name} installed successfully")
        if action is Action.UPGRADE:
            upgrade(descriptor, config)
            return ActionResult(name, action, Outcome.SUCCEEDED, f"{name} upgraded successfully")
        report = uninstall(descriptor, remove_config, force, config, confirm)
    except ManualActionRequired as e:
        return ActionResult(name, action, Outcome.MANUAL, str(e))
    except UnsupportedAction as e:
        return ActionResult(name, action, Outcome.UNSUPPORTED, str(e))
    except AlreadyInNoopState as e:
        return ActionResult(name, action, Outcome.NOOP, str(e))
    except UserDeclined:
        return ActionResult(name, action, Outcome.DECLINED, "No changes made")
    except ExternalFailure as e:
        logger.debug("%s of %s failed", action.value, name, exc_info=True)
        return ActionResult(name, action, Outcome.FAILED, str(e), e.report)

    if report.noop:
        if report.config_declined:
            return ActionResult(name, action, Outcome.DECLINED, "No changes made", report)
        return ActionResult(name, action, Outcome.NOOP, f"{name} not found on system", report)
    return ActionResult(name, action, Outcome.SUCCEEDED, f"{name} uninstalled successfully", report)


def run_batch(
    descriptors: Iterable[ToolDescriptor],
    action: Action,
    on_result: Callable[[ActionResult], None] | None = None,
    **kwargs,
) -> list[ActionResult]:
    """Perform ``action`` on each tool in turn; one failure never stops the rest."""
    results = []
    for descriptor in descriptors:
        try:
            result = perform(descriptor, action, **kwargs)
        except Exception as e:  # noqa: BLE001
            console.print_exception()
            result = ActionResult(descriptor.name, action, Outcome.FAILED, str(e))
        if on_result is not None:
            on_result(result)
        results.append(result)
    return results
