"""Process, HTTP, filesystem and terminal helpers for ai-cli-apps."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Any

import requests
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .config import AppConfig

# Initialize rich console
console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: int = 0) -> None:
    """Configure logging level based on verbosity."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def run_command(
    args: Sequence[str],
    *,
    capture: bool = True,
) -> subprocess.CompletedProcess:
    """Run ``args`` without raising on a non-zero exit status.

    With ``capture`` the standard output is returned as text; otherwise the
    process inherits the terminal. Launch failures raise ``OSError``.
    """
    logger.debug("Running %s", " ".join(args))
    if capture:
        return subprocess.run(  # noqa: S603
            list(args),
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    return subprocess.run(list(args), check=False)  # noqa: S603


def _get(url: str, config: AppConfig, headers: Mapping[str, str] | None) -> requests.Response | None:
    request_headers = {"User-Agent": config.user_agent}
    if headers:
        request_headers.update(headers)
    try:
        response = requests.get(url, headers=request_headers, timeout=config.timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.debug("GET %s failed: %s", url, e)
        return None
    return response


def get_json(
    url: str,
    config: AppConfig,
    headers: Mapping[str, str] | None = None,
) -> Any | None:
    """Fetch ``url`` and decode it as JSON, or ``None`` on any failure."""
    response = _get(url, config, headers)
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as e:
        logger.debug("Invalid JSON from %s: %s", url, e)
        return None


def get_text(
    url: str,
    config: AppConfig,
    headers: Mapping[str, str] | None = None,
) -> str | None:
    """Fetch ``url`` as text, or ``None`` on any failure."""
    response = _get(url, config, headers)
    if response is None:
        return None
    return response.text


def home_dir() -> Path:
    """Return the user's home directory (``HOME``, then the password database)."""
    return Path.home()


def base_dirs(home: Path | None = None) -> dict[str, Path]:
    """Return the home directory and the XDG config/data/cache bases.

    Unset XDG variables fall back to ``~/.config``, ``~/.local/share`` and
    ``~/.cache``.
    """
    home = home or home_dir()
    return {
        "home": home,
        "config": Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config"),
        "data": Path(os.environ.get("XDG_DATA_HOME") or home / ".local" / "share"),
        "cache": Path(os.environ.get("XDG_CACHE_HOME") or home / ".cache"),
    }


def resolve_location(location: str, bases: Mapping[str, Path]) -> Path:
    """Resolve a catalog path.

    ``"{config}/amp"`` is anchored at an XDG base, anything else at home.
    """
    if location.startswith("{"):
        return Path(location.format(**bases))
    return bases["home"] / location


def path_exists(path: Path) -> bool:
    """Like ``Path.exists`` but also true for dangling symlinks."""
    return path.is_symlink() or path.exists()


def remove_path(path: Path) -> None:
    """Remove a file, a symlink or a whole directory tree."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def make_executable(path: Path) -> None:
    """Set the executable bits on ``path`` (no-op outside POSIX)."""
    if os.name != "posix":
        return
    path.chmod(path.stat().st_mode | 0o755)


def confirm(prompt: str) -> bool:
    """Ask a yes/no question; anything but an explicit yes means no."""
    try:
        answer = console.input(f"[yellow]?[/yellow] {prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}
