# SPDX-License-Identifier: MIT
"""Common utilities for checks.

This module isolates everything platform-specific about invoking and
locating external tools, plus the file readers shared by the config checks:
- shell_command / locate_command: the platform command table
- invoke / locate: run or find a tool through the RunConfig's runner
- read_text / read_json / read_config_json: file access off the event loop
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path

from deebo_doctor.core.result import Result, is_ok
from deebo_doctor.platform.detection import Platform
from deebo_doctor.platform.process import ProcessError

from .base import RunConfig

__all__ = [
    "shell_command",
    "locate_command",
    "invoke",
    "locate",
    "read_text",
    "read_json",
    "read_config_json",
    "first_line",
    "parse_version_triplet",
]


def shell_command(platform: Platform, args: list[str]) -> list[str]:
    """Wrap a command so that .cmd shims (npm, npx) resolve on Windows."""
    if platform.is_windows:
        return ["cmd.exe", "/c", *args]
    return list(args)


def locate_command(platform: Platform, exe: str) -> list[str]:
    """Command that prints the full path of exe when it is on PATH."""
    if platform.is_windows:
        return ["cmd.exe", "/c", "where", exe]
    return ["which", exe]


async def invoke(config: RunConfig, args: list[str]) -> Result[str, ProcessError]:
    """Run a command with the platform wrapper and the configured timeout."""
    return await config.runner.run(shell_command(config.platform, args), timeout=config.timeout)


async def locate(config: RunConfig, exe: str) -> str | None:
    """Resolve exe on PATH, returning the first reported location or None."""
    result = await config.runner.run(locate_command(config.platform, exe), timeout=config.timeout)
    if is_ok(result):
        return first_line(result.value) or None
    return None


async def read_text(path: Path) -> str:
    """Read a UTF-8 file without blocking the event loop.

    Raises OSError or UnicodeDecodeError like Path.read_text.
    """
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


async def read_json(path: Path) -> object:
    """Read and parse a JSON file.

    Raises OSError, or ValueError (UnicodeDecodeError, json.JSONDecodeError)
    for content that is not valid JSON, including nesting too deep to decode.
    """
    content = await read_text(path)
    try:
        return json.loads(content)
    except RecursionError as e:
        raise ValueError(f"{path}: JSON nested too deeply") from e


async def read_config_json(path: Path) -> object:
    """Read a host or tools config file.

    A `null` document cannot hold any settings and is rejected like a parse
    error (ValueError).
    """
    data = await read_json(path)
    if data is None:
        raise ValueError(f"{path}: document is null")
    return data


def first_line(text: str) -> str:
    """Extract first non-empty line from text.

    Useful for parsing version output and where/which listings.
    """
    for line in text.strip().splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


_VERSION_TRIPLET_RE = re.compile(r"\b(\d+)\.(\d+)\.(\d+)\b")


def parse_version_triplet(text: str) -> str | None:
    """Find a SemVer-like X.Y.Z triplet in text.

    Returns None if no triplet is found.
    """
    match = _VERSION_TRIPLET_RE.search(text)
    if not match:
        return None
    return ".".join(match.groups())
