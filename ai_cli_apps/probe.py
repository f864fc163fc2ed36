"""Detect locally installed tools and their reported versions."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .models import ToolRecord, VersionParser
from .utils import run_command

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import ToolDescriptor

logger = logging.getLogger(__name__)

_VERSION_LINE = re.compile(r"[0-9.]+")


def _run(args: Sequence[str]) -> str | None:
    """Return stdout of a successful run, ``None`` otherwise."""
    if not args:
        return None
    try:
        result = run_command(args)
    except OSError as e:
        logger.debug("Could not run %s: %s", args[0], e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout


def is_installed(descriptor: ToolDescriptor) -> bool:
    """Return True iff the check command starts and exits with status 0."""
    if not descriptor.check_command:
        return False
    try:
        result = run_command(descriptor.check_command)
    except OSError:
        return False
    return result.returncode == 0


def first_line(output: str) -> str | None:
    """First non-empty line, e.g. ``"2.0.14 (Claude Code)"``."""
    for line in output.splitlines():
        line = line.strip()
        if line:
            return line
    return None


def last_version_line(output: str) -> str | None:
    """Last line made only of digits and dots, optionally ``v``-prefixed.

    Used for tools that print banners or update notices around the version.
    """
    found = None
    for line in output.splitlines():
        candidate = line.strip().lstrip("v")
        if candidate and _VERSION_LINE.fullmatch(candidate):
            found = candidate
    return found


def labeled_versions(primary: str, secondary: str, label: str) -> VersionParser:
    """Build a parser for ``Primary: X`` / ``Secondary: Y`` style output.

    The result is ``"X (label Y)"``, or just ``"X"`` when the secondary line
    is missing.
    """

    def parse(output: str) -> str | None:
        values = {}
        for line in output.splitlines():
            key, sep, value = line.partition(":")
            if sep:
                values[key.strip().lower()] = value.strip()
        main = values.get(primary.lower())
        if not main:
            return first_line(output)
        extra = values.get(secondary.lower())
        return f"{main} ({label} {extra})" if extra else main

    return parse


def local_version(descriptor: ToolDescriptor) -> str | None:
    """Return the version the installed tool reports, if any."""
    output = _run(descriptor.version_command or descriptor.check_command)
    if output is None:
        return None
    parser = descriptor.version_parser or first_line
    return parser(output)


def installed_versions(descriptors: Iterable[ToolDescriptor]) -> list[ToolRecord]:
    """Probe each tool in turn and build its record."""
    return [
        ToolRecord(descriptor=descriptor, installed_version=local_version(descriptor))
        for descriptor in descriptors
    ]
