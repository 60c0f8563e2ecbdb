# SPDX-License-Identifier: MIT
"""MCP tools check.

deebo drives two external MCP servers: git-mcp (run through uvx) and
desktop-commander (an npm package). Both must respond.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import ClassVar

from deebo_doctor.core.result import is_ok
from deebo_doctor.platform.paths import appdata_dir

from .base import BaseCheck, CheckResult, CheckStatus, Policy, RunConfig, fold, format_details
from .common import first_line, invoke

logger = logging.getLogger(__name__)

DESKTOP_COMMANDER_PACKAGE = "@wonderwhy-er/desktop-commander"
DESKTOP_COMMANDER_SHIM = "desktop-commander.cmd"


class ExternalServicesCheck(BaseCheck):
    """Check that git-mcp and desktop-commander respond."""

    name: ClassVar[str] = "MCP Tools"

    async def _run(self, config: RunConfig) -> CheckResult:
        results = await asyncio.gather(
            self.check_git_mcp(config),
            self.check_desktop_commander(config),
        )

        status = fold((r.status for r in results), Policy.ALL_MUST_PASS)
        message = "All MCP tools installed" if status == CheckStatus.PASS else "Some MCP tools missing"
        return CheckResult(
            name=self.name,
            status=status,
            message=message,
            details=format_details(results),
        )

    async def check_git_mcp(self, config: RunConfig) -> CheckResult:
        result = await invoke(config, ["uvx", "mcp-server-git", "--help"])
        if is_ok(result):
            return CheckResult.passed("git-mcp", "git-mcp installed")
        return CheckResult.failed(
            "git-mcp", "git-mcp not found", details="Install with: uvx mcp-server-git --help"
        )

    async def check_desktop_commander(self, config: RunConfig) -> CheckResult:
        if config.platform.is_windows:
            return await self._check_desktop_commander_shim(config)

        result = await invoke(config, ["npx", DESKTOP_COMMANDER_PACKAGE, "--help"])
        if is_ok(result):
            return CheckResult.passed("desktop-commander", "desktop-commander installed")
        return CheckResult.failed(
            "desktop-commander",
            "desktop-commander not found",
            details=f"Install with: npx {DESKTOP_COMMANDER_PACKAGE} setup",
        )

    async def _check_desktop_commander_shim(self, config: RunConfig) -> CheckResult:
        """Windows needs the global .cmd shim for proper stdin/stdout handling."""
        shim = await self.desktop_commander_shim_path(config)
        exists = await asyncio.to_thread(shim.is_file)
        if exists:
            return CheckResult.passed(
                "desktop-commander", f"{DESKTOP_COMMANDER_SHIM} found", details=f"Path: {shim}"
            )
        return CheckResult.failed(
            "desktop-commander",
            f"{DESKTOP_COMMANDER_SHIM} not found",
            details=f"Install globally with: npm install -g {DESKTOP_COMMANDER_PACKAGE}",
        )

    async def desktop_commander_shim_path(self, config: RunConfig) -> Path:
        """Where npm installs the global shim.

        Uses the configured npm prefix (nvm relocates it) and falls back to
        the roaming npm directory.
        """
        result = await invoke(config, ["npm", "config", "get", "prefix"])
        if is_ok(result):
            prefix = first_line(result.value)
            if prefix:
                return Path(prefix) / DESKTOP_COMMANDER_SHIM

        logger.debug("npm prefix unavailable, using roaming npm directory")
        return appdata_dir(config.env, config.home) / "npm" / DESKTOP_COMMANDER_SHIM
