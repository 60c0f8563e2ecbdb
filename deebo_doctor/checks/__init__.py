# SPDX-License-Identifier: MIT
"""Checks for a deebo installation.

Each check is an independent probe resolving to one CheckResult:
- RuntimeVersionCheck: Node.js major version
- VersionControlCheck: git is invocable
- ToolPathsCheck: node, npm, npx, uvx, git, ripgrep on PATH
- ExternalServicesCheck: git-mcp and desktop-commander respond
- ConfigFilesCheck: host MCP configs, .env and config/tools.json
- ApiKeysCheck: at least one provider key in .env
- GuideServerCheck: deebo-guide files and registrations
"""

from deebo_doctor.checks.api_keys import ApiKeysCheck
from deebo_doctor.checks.base import (
    BaseCheck,
    Check,
    CheckResult,
    CheckStatus,
    Policy,
    RunConfig,
    fold,
)
from deebo_doctor.checks.configs import ConfigFilesCheck
from deebo_doctor.checks.guide import GuideServerCheck
from deebo_doctor.checks.runtime import RuntimeVersionCheck, VersionControlCheck
from deebo_doctor.checks.services import ExternalServicesCheck
from deebo_doctor.checks.tools import ToolPathsCheck


def all_checks() -> list[Check]:
    """Every check, in report order."""
    return [
        RuntimeVersionCheck(),
        VersionControlCheck(),
        ToolPathsCheck(),
        ExternalServicesCheck(),
        ConfigFilesCheck(),
        ApiKeysCheck(),
        GuideServerCheck(),
    ]


__all__ = [
    # Result types
    "CheckResult",
    "CheckStatus",
    "Policy",
    "fold",
    # Contract
    "BaseCheck",
    "Check",
    "RunConfig",
    # Checks
    "RuntimeVersionCheck",
    "VersionControlCheck",
    "ToolPathsCheck",
    "ExternalServicesCheck",
    "ConfigFilesCheck",
    "ApiKeysCheck",
    "GuideServerCheck",
    "all_checks",
]
