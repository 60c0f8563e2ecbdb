# SPDX-License-Identifier: MIT
"""Tool paths check.

Locates the executables deebo spawns at runtime (node, npm, npx, uvx, git,
ripgrep) and inspects PATH for the directories they normally live in.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import ClassVar

from deebo_doctor.platform.detection import Platform

from .base import BaseCheck, CheckResult, CheckStatus, Policy, RunConfig, fold, format_details
from .common import locate


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """An executable to locate.

    Attributes:
        name: Display name of the tool
        unix_exe: Executable name on Linux/macOS
        windows_exe: Executable (or .cmd shim) name on Windows
        unix_hint: Install hint on Linux/macOS
        windows_hint: Install hint on Windows (defaults to unix_hint)
    """

    name: str
    unix_exe: str
    windows_exe: str
    unix_hint: str
    windows_hint: str | None = None

    def exe(self, platform: Platform) -> str:
        return self.windows_exe if platform.is_windows else self.unix_exe

    def hint(self, platform: Platform) -> str:
        if platform.is_windows and self.windows_hint:
            return self.windows_hint
        return self.unix_hint


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec("node", "node", "node.exe", "Install Node.js from https://nodejs.org"),
    ToolSpec("npm", "npm", "npm.cmd", "Install Node.js to get npm"),
    ToolSpec("npx", "npx", "npx.cmd", "Install Node.js to get npx"),
    ToolSpec(
        "uvx",
        "uvx",
        "uvx.exe",
        "Run: curl -LsSf https://astral.sh/uv/install.sh | sh",
        "Run in PowerShell: irm https://astral.sh/uv/install.ps1 | iex",
    ),
    ToolSpec("git", "git", "git.exe", "Install git from https://git-scm.com"),
    ToolSpec(
        "ripgrep",
        "rg",
        "rg.exe",
        "Run: brew install ripgrep",
        "Run in Command Prompt: winget install -e --id BurntSushi.ripgrep",
    ),
)

# Directory fragments expected somewhere in PATH (case-insensitive substring match)
_EXPECTED_PATHS_WINDOWS = ("\\npm", "\\git", "\\nodejs")
_EXPECTED_PATHS_UNIX = ("/usr/local/bin", "/usr/bin", "/bin", "/usr/sbin")

TROUBLESHOOTING = """Troubleshooting Tips:
1. If deebo is failing at runtime (when starting a session), it's likely the system cannot find paths for MCP tools (git-mcp and desktopCommander). Run 'where uvx' to verify uvx is in your PATH.

2. If this check says "unable to find tool paths" even after installation:
   - Make sure to add the uvx/node paths to your environment
   - On Windows, check if uvx.exe is in your PATH by running 'where uvx'
   - Try closing and reopening your terminal to refresh environment variables

3. If deebo fails in the middle of a run after spawning scenario agents:
   - Don't worry! This is not a critical failure
   - You can always start a new deebo session
   - Tell it to look at its memory bank from the previous run
   - The memory bank contains all the progress and findings so far"""


class ToolPathsCheck(BaseCheck):
    """Check that every runtime tool resolves on PATH."""

    name: ClassVar[str] = "Tool Paths"

    async def _run(self, config: RunConfig) -> CheckResult:
        results: list[CheckResult] = list(
            await asyncio.gather(*(self.check_tool(config, tool) for tool in TOOLS))
        )
        results.append(self.check_path_env(config))

        status = fold((r.status for r in results), Policy.MIXED)
        match status:
            case CheckStatus.PASS:
                message = "All tool paths found"
            case CheckStatus.FAIL:
                message = "Some required tools missing"
            case _:
                message = "Tools found but some paths may need attention"

        details = format_details(results, with_details=True, indent="  ")
        return CheckResult(
            name=self.name,
            status=status,
            message=message,
            details=f"{details}\n\n{TROUBLESHOOTING}",
        )

    async def check_tool(self, config: RunConfig, tool: ToolSpec) -> CheckResult:
        """Locate one tool."""
        path = await locate(config, tool.exe(config.platform))
        if path is None:
            return CheckResult.failed(
                tool.name, f"{tool.name} not found", details=tool.hint(config.platform)
            )
        return CheckResult.passed(tool.name, f"{tool.name} found", details=f"Path: {path}")

    def check_path_env(self, config: RunConfig) -> CheckResult:
        """Look for the usual tool directories in PATH."""
        path_env = config.env.get("PATH", "")
        entries = [p.lower() for p in path_env.split(config.platform.path_separator)]
        expected = (
            _EXPECTED_PATHS_WINDOWS if config.platform.is_windows else _EXPECTED_PATHS_UNIX
        )

        missing = [frag for frag in expected if not any(frag.lower() in p for p in entries)]
        if missing:
            return CheckResult.warned(
                "PATH",
                "Some expected paths missing from PATH",
                details=f"Missing: {', '.join(missing)}\nCurrent PATH: {path_env}",
            )
        return CheckResult.passed(
            "PATH", "All expected paths found in PATH", details=f"PATH: {path_env}"
        )
