"""Configuration management for ai-cli-apps."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml
from rich.console import Console

from .utils import base_dirs

console = Console()
logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    return base_dirs()["config"] / "ai-cli-apps" / "config.yaml"


@dataclass
class AppConfig:
    """Configuration for ai-cli-apps."""

    npm_registry: str = "https://registry.npmjs.org"
    github_api: str = "https://api.github.com"
    user_agent: str = "ai-cli-apps"
    timeout: float = 30.0
    shell: str = "bash"
    refresh_brew: bool = True
    bin_dir: str = ".local/bin"

    @classmethod
    def from_dict(cls, data: dict) -> AppConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            console.print(f"⚠️ [yellow]Unknown configuration key '{key}' ignored[/yellow]")
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.npm_registry = config.npm_registry.rstrip("/")
        config.github_api = config.github_api.rstrip("/")
        config.timeout = float(config.timeout)
        return config

    @classmethod
    def load_from_file(cls, config_path: str | Path | None = None) -> AppConfig:
        """Load configuration from YAML file."""
        explicit = config_path is not None
        path = Path(config_path) if explicit else default_config_path()

        try:
            with open(path) as file:
                config_data = yaml.safe_load(file) or {}
            if not isinstance(config_data, dict):
                console.print(
                    f"❌ [bold red]Configuration file must contain a mapping: {path}[/bold red]",
                )
                return cls()
            logger.info("Loaded configuration from %s", path)
            return cls.from_dict(config_data)

        except FileNotFoundError:
            if explicit:
                console.print(
                    f"⚠️ [yellow]Configuration file not found: {path}[/yellow]",
                )
            return cls()
        except yaml.YAMLError:
            console.print(
                f"❌ [bold red]Invalid YAML in configuration file: {path}[/bold red]",
            )
            return cls()
        except (OSError, AttributeError, TypeError, ValueError) as e:
            console.print(f"❌ [bold red]Error loading configuration: {e}[/bold red]")
            return cls()
