"""Tool descriptors, per-invocation records and the strategy variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional, Union


class PackageManager(NamedTuple):
    """Installed and upgraded through a package manager (``npm`` or ``brew``)."""

    ecosystem: str
    package_id: str


class BootstrapScript(NamedTuple):
    """Installed by a vendor shell script downloaded from ``url``.

    ``upgrade_url`` is the upgrade-flavored variant; ``url`` is re-run when unset.
    """

    url: str
    upgrade_url: Optional[str] = None


class VendorUpdater(NamedTuple):
    """Upgraded by the tool's own self-update subcommand."""

    identifier: str
    args: tuple[str, ...] = ("update",)


class ManualOnly(NamedTuple):
    """No automated procedure; ``message`` tells the operator what to do."""

    message: str


InstallStrategy = Union[PackageManager, BootstrapScript, VendorUpdater, ManualOnly]


class NpmRegistry(NamedTuple):
    package: str


class GitHubRelease(NamedTuple):
    repo: str


class BrewInfo(NamedTuple):
    formula: str


class ScriptVariable(NamedTuple):
    """A ``KEY=value`` assignment inside a published installer script."""

    url: str
    key: str = "VER"


VersionSource = Union[NpmRegistry, GitHubRelease, BrewInfo, ScriptVariable]

VersionParser = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Static description of one managed tool."""

    name: str
    install_strategy: InstallStrategy
    check_command: tuple[str, ...]
    binary_name: str | None = None
    config_locations: tuple[str, ...] = ()
    extra_binary_paths: tuple[str, ...] = ()
    upgrade_strategy: InstallStrategy | None = None
    version_source: VersionSource | None = None
    version_command: tuple[str, ...] | None = None
    version_parser: VersionParser | None = None
    version_store: str | None = None

    @property
    def binary(self) -> str:
        return self.binary_name or self.name.lower()

    @property
    def upgrade_method(self) -> InstallStrategy:
        return self.upgrade_strategy or self.install_strategy

    def matches(self, name: str) -> bool:
        """Case-insensitive match against the display name or the binary name."""
        name = name.lower()
        return self.name.lower() == name or (
            self.binary_name is not None and self.binary_name.lower() == name
        )


def contains_or_contained(a: str, b: str) -> bool:
    """Loose version match: either string contains the other.

    ``"1.2.3 (build 44)"`` matches ``"1.2.3"``. Note that ``"1.2.3"`` also
    matches ``"1.2.30"``.
    """
    return a in b or b in a


@dataclass
class ToolRecord:
    """Installed and latest versions of one tool for the current invocation."""

    descriptor: ToolDescriptor
    installed_version: str | None = None
    latest_version: str | None = None

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def is_installed(self) -> bool:
        return self.installed_version is not None

    @property
    def is_up_to_date(self) -> bool:
        if self.installed_version is None or self.latest_version is None:
            return False
        return contains_or_contained(self.installed_version, self.latest_version)

    @property
    def update_available(self) -> bool:
        # An unknown latest version never counts as an update.
        return (
            self.installed_version is not None
            and self.latest_version is not None
            and not self.is_up_to_date
        )
