# SPDX-License-Identifier: MIT
"""Configuration files check.

Validates the host-application MCP configs that can launch deebo (Cline,
Claude Desktop, VS Code, Cursor) and deebo's own .env and tools manifest.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from deebo_doctor.core.structured import has_entry
from deebo_doctor.platform.paths import app_support_dir, appdata_dir

from .base import BaseCheck, CheckResult, CheckStatus, Policy, RunConfig, fold, format_details
from .common import read_config_json, read_text

logger = logging.getLogger(__name__)

CLINE_SETTINGS = (
    "Code/User/globalStorage/saoudrizwan.claude-dev/settings/cline_mcp_settings.json"
)

# Hosts where a deebo registration makes deebo usable; one is enough.
MCP_TARGETS = ("cline", "claude", "vscode", "cursor")
# deebo's own files; all are required.
CORE_TARGETS = ("env", "tools")
# Hosts whose config must register the deebo server itself.
DEEBO_REGISTRATION_TARGETS = ("cline", "claude")
REQUIRED_TOOLS = ("desktopCommander", "git-mcp")


def host_config_paths(config: RunConfig) -> dict[str, Path]:
    """Locations of the host-application MCP configs for the platform."""
    base = app_support_dir(config.platform, config.env, config.home)
    if config.platform.is_windows:
        cursor = appdata_dir(config.env, config.home) / ".cursor" / "mcp.json"
    else:
        cursor = config.home / ".cursor" / "mcp.json"

    return {
        "cline": base / CLINE_SETTINGS,
        "claude": base / "Claude" / "claude_desktop_config.json",
        "vscode": base / "Code" / "User" / "settings.json",
        "cursor": cursor,
    }


def env_file_path(config: RunConfig) -> Path:
    return config.deebo_path / ".env"


class ConfigFilesCheck(BaseCheck):
    """Check host MCP configs and deebo's core configuration files."""

    name: ClassVar[str] = "Configuration Files"

    def config_paths(self, config: RunConfig) -> dict[str, Path]:
        """All six targets in report order."""
        return {
            **host_config_paths(config),
            "env": env_file_path(config),
            "tools": config.deebo_path / "config" / "tools.json",
        }

    async def _run(self, config: RunConfig) -> CheckResult:
        results = [
            await self.check_target(name, path) for name, path in self.config_paths(config).items()
        ]

        by_name = {r.name: r for r in results}
        mcp_status = fold((by_name[n].status for n in MCP_TARGETS), Policy.ANY_MUST_PASS)
        core_status = fold((by_name[n].status for n in CORE_TARGETS), Policy.ALL_MUST_PASS)
        status = fold([mcp_status, core_status], Policy.ALL_MUST_PASS)

        if mcp_status != CheckStatus.PASS:
            message = "No valid MCP configuration found"
        elif core_status != CheckStatus.PASS:
            message = "deebo .env or config/tools.json missing or invalid"
        else:
            message = "All configuration files valid"

        return CheckResult(
            name=self.name,
            status=status,
            message=message,
            details=format_details(results, with_details=True),
        )

    async def check_target(self, name: str, path: Path) -> CheckResult:
        """Read (and, except for .env, parse) one target and validate its shape."""
        try:
            if name == "env":
                await read_text(path)
                data: object = None
            else:
                data = await read_config_json(path)
        except (OSError, ValueError) as e:
            logger.debug("%s config unreadable at %s: %s", name, path, e)
            return CheckResult.failed(
                name, f"{name} config not found or invalid", details=f"Expected at: {path}"
            )

        if name in DEEBO_REGISTRATION_TARGETS and not has_entry(data, "mcpServers", "deebo"):
            return CheckResult.failed(
                name,
                f"{name} config exists but Deebo not configured",
                details=f"Path: {path}\nAdd Deebo configuration to mcpServers",
            )

        if name == "tools" and not all(has_entry(data, "tools", t) for t in REQUIRED_TOOLS):
            return CheckResult.failed(
                name,
                f"{name} config exists but missing required tools",
                details=f"Path: {path}\nMissing one or more required tools: "
                + ", ".join(REQUIRED_TOOLS),
            )

        return CheckResult.passed(name, f"{name} config found and valid", details=f"Path: {path}")
