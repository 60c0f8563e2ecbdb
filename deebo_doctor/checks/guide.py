# SPDX-License-Identifier: MIT
"""Guide server check.

The deebo-guide MCP server lives in ~/.deebo-guide and must be registered
as "deebo-guide" in every host that runs deebo.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import ClassVar

from deebo_doctor.core.structured import has_entry

from .base import BaseCheck, CheckResult, CheckStatus, Policy, RunConfig, fold, format_details
from .common import read_config_json
from .configs import host_config_paths

logger = logging.getLogger(__name__)

GUIDE_DIR = ".deebo-guide"
GUIDE_SERVER_KEY = "deebo-guide"
GUIDE_HOSTS = ("cline", "claude", "cursor")


class GuideServerCheck(BaseCheck):
    """Check guide server files and their host registrations."""

    name: ClassVar[str] = "Guide Server"

    async def _run(self, config: RunConfig) -> CheckResult:
        guide_dir = config.home / GUIDE_DIR
        results = [
            await self.check_file("guide_file", "Deebo guide file", guide_dir / "deebo_guide.md"),
            await self.check_file(
                "server_file", "Guide server file", guide_dir / "guide-server.js"
            ),
        ]

        hosts = host_config_paths(config)
        for host in GUIDE_HOSTS:
            results.append(await self.check_registration(host, hosts[host]))

        # Sub-results are only ever PASS or FAIL, so the WARN outcome of MIXED
        # cannot occur today.
        status = fold((r.status for r in results), Policy.MIXED)
        return CheckResult(
            name=self.name,
            status=status,
            message=(
                "Guide server files and configuration valid"
                if status == CheckStatus.PASS
                else "Guide server setup incomplete"
            ),
            details=format_details(results, with_details=True),
        )

    async def check_file(self, name: str, label: str, path: Path) -> CheckResult:
        if await asyncio.to_thread(path.exists):
            return CheckResult.passed(name, f"{label} found", details=f"Path: {path}")
        return CheckResult.failed(name, f"{label} not found", details=f"Expected at: {path}")

    async def check_registration(self, host: str, path: Path) -> CheckResult:
        name = f"{host}_config"
        try:
            data = await read_config_json(path)
        except (OSError, ValueError) as e:
            logger.debug("%s config unreadable at %s: %s", host, path, e)
            return CheckResult.failed(
                name, f"Could not read {host} config", details=f"Expected at: {path}"
            )

        if not has_entry(data, "mcpServers", GUIDE_SERVER_KEY):
            return CheckResult.failed(
                name,
                f"Guide server not configured in {host}",
                details=f"Path: {path}\nMissing '{GUIDE_SERVER_KEY}' in mcpServers",
            )
        return CheckResult.passed(
            name, f"Guide server properly configured in {host}", details=f"Path: {path}"
        )
