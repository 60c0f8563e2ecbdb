# SPDX-License-Identifier: MIT
"""Runtime prerequisite checks.

- RuntimeVersionCheck: the Node.js runtime deebo runs on is a supported major
- VersionControlCheck: git is invocable
"""

from __future__ import annotations

from typing import ClassVar

from deebo_doctor.core.result import is_ok

from .base import BaseCheck, CheckResult, RunConfig
from .common import first_line, invoke, parse_version_triplet


class RuntimeVersionCheck(BaseCheck):
    """Check the Node.js version against the supported majors.

    Attributes:
        version: Version string to validate; probed with `node --version`
            when not given
    """

    name: ClassVar[str] = "Node.js Version"
    SUPPORTED_MAJORS: ClassVar[tuple[str, ...]] = ("v18", "v20", "v22")
    INSTALL_HINT: ClassVar[str] = "Install Node.js v18 or later from https://nodejs.org"

    def __init__(self, version: str | None = None) -> None:
        self.version = version

    async def _run(self, config: RunConfig) -> CheckResult:
        version = self.version
        if version is None:
            result = await invoke(config, ["node", "--version"])
            version = first_line(result.value) if is_ok(result) else "not installed"

        if version.startswith(self.SUPPORTED_MAJORS):
            return CheckResult.passed(self.name, f"Node {version} detected")

        return CheckResult.failed(
            self.name,
            f"Node.js v18+ required, found {version or 'unknown version'}",
            details=self.INSTALL_HINT,
        )


class VersionControlCheck(BaseCheck):
    """Check that git answers `git --version`."""

    name: ClassVar[str] = "Git Installation"

    async def _run(self, config: RunConfig) -> CheckResult:
        result = await invoke(config, ["git", "--version"])
        if is_ok(result):
            version = parse_version_triplet(result.value) or first_line(result.value) or "unknown"
            return CheckResult.passed(self.name, f"Git {version} detected")

        return CheckResult.failed(
            self.name,
            "Git not found",
            details="Install Git from https://git-scm.com",
        )
