"""Resolve the latest published version of every tool concurrently."""

from __future__ import annotations

import concurrent.futures
import json
import logging
from typing import TYPE_CHECKING

from rich.console import Console

from .config import AppConfig
from .models import BrewInfo, GitHubRelease, NpmRegistry, ScriptVariable
from .utils import get_json, get_text, run_command

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .models import ToolRecord, VersionSource

console = Console()
logger = logging.getLogger(__name__)


def fetch_npm_latest(url: str, config: AppConfig) -> str | None:
    """Read ``dist-tags.latest`` from an npm registry document."""
    info = get_json(url, config)
    if not isinstance(info, dict):
        return None
    tags = info.get("dist-tags")
    if not isinstance(tags, dict):
        return None
    latest = tags.get("latest")
    return latest if isinstance(latest, str) and latest else None


def npm_latest(package: str, config: AppConfig) -> str | None:
    return fetch_npm_latest(f"{config.npm_registry}/{package}", config)


def github_latest(repo: str, config: AppConfig) -> str | None:
    """Return the tag of the latest GitHub release, without a leading ``v``."""
    url = f"{config.github_api}/repos/{repo}/releases/latest"
    release = get_json(url, config, {"Accept": "application/vnd.github+json"})
    if not isinstance(release, dict):
        return None
    tag = release.get("tag_name")
    if not isinstance(tag, str):
        return None
    return tag.removeprefix("v") or None


def parse_brew_info(data: dict) -> str | None:
    """Pick the stable formula version, falling back to the first cask."""
    for formula in data.get("formulae") or []:
        stable = (formula.get("versions") or {}).get("stable")
        if stable:
            return stable
        break
    for cask in data.get("casks") or []:
        return cask.get("version") or None
    return None


def brew_latest(formula: str) -> str | None:
    try:
        result = run_command(["brew", "info", "--json=v2", formula])
    except OSError as e:
        logger.debug("brew is not available: %s", e)
        return None
    if result.returncode != 0:
        return None
    try:
        data = json.loads(result.stdout)
    except ValueError:
        return None
    return parse_brew_info(data) if isinstance(data, dict) else None


def refresh_brew() -> bool:
    """Run ``brew update``; returns whether it succeeded."""
    try:
        result = run_command(["brew", "update"])
    except OSError:
        return False
    return result.returncode == 0


def parse_script_variable(script: str, key: str) -> str | None:
    """Find ``KEY=value`` in an installer script and strip the quoting."""
    prefix = f"{key}="
    for line in script.splitlines():
        line = line.strip()
        if line.startswith(prefix):
            return line[len(prefix) :].strip().strip("\"'") or None
    return None


def script_variable_latest(url: str, key: str, config: AppConfig) -> str | None:
    script = get_text(url, config)
    if script is None:
        return None
    return parse_script_variable(script, key)


def lookup_latest(source: VersionSource, config: AppConfig) -> str | None:
    """Resolve one version source. Never raises."""
    try:
        if isinstance(source, NpmRegistry):
            return npm_latest(source.package, config)
        if isinstance(source, GitHubRelease):
            return github_latest(source.repo, config)
        if isinstance(source, BrewInfo):
            return brew_latest(source.formula)
        if isinstance(source, ScriptVariable):
            return script_variable_latest(source.url, source.key, config)
    except Exception:  # noqa: BLE001
        logger.debug("Version lookup for %s failed", source, exc_info=True)
        return None
    logger.debug("Unknown version source %r", source)
    return None


def merge_latest(records: Sequence[ToolRecord], latest: Mapping[str, str | None]) -> None:
    """Copy looked-up versions onto the records with the same name.

    Names with no matching record are ignored.
    """
    for record in records:
        if record.name in latest:
            record.latest_version = latest[record.name]


def resolve_all(records: Sequence[ToolRecord], config: AppConfig | None = None) -> None:
    """Look up the latest version of every record in parallel.

    Every lookup runs in its own worker and a failure only leaves that
    record's ``latest_version`` at ``None``. Homebrew lookups are submitted
    after ``brew update`` has finished so they read a fresh index.
    """
    config = config or AppConfig()
    sources = {
        r.name: r.descriptor.version_source
        for r in records
        if r.descriptor.version_source is not None
    }
    if not sources:
        return

    console.print("🔍 [cyan]Checking latest versions...[/cyan]")
    brew_sources = {n: s for n, s in sources.items() if isinstance(s, BrewInfo)}
    other_sources = {n: s for n, s in sources.items() if n not in brew_sources}

    latest: dict[str, str | None] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(sources)) as executor:
        future_to_name = {
            executor.submit(lookup_latest, source, config): name
            for name, source in other_sources.items()
        }
        if brew_sources:
            if config.refresh_brew and refresh_brew():
                console.print("[dim]Updated Homebrew package database[/dim]")
            future_to_name.update(
                {
                    executor.submit(lookup_latest, source, config): name
                    for name, source in brew_sources.items()
                },
            )
        for future in concurrent.futures.as_completed(future_to_name):
            latest[future_to_name[future]] = future.result()

    merge_latest(records, latest)
