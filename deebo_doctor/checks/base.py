# SPDX-License-Identifier: MIT
"""Base types for checks.

Every check is an independent probe that resolves to exactly one
CheckResult. Composite checks collect ordered sub-results and fold their
statuses with a declared Policy instead of hand-rolling the verdict.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import ClassVar, Protocol

from deebo_doctor.core.config import DEFAULT_TIMEOUT
from deebo_doctor.platform.detection import Platform, detect_platform
from deebo_doctor.platform.paths import home
from deebo_doctor.platform.process import AsyncCommandRunner, CommandRunner

logger = logging.getLogger(__name__)


class CheckStatus(Enum):
    """Status of a check result."""

    PASS = "pass"
    """Check passed."""

    WARN = "warn"
    """Optional item missing or suspicious; does not fail the run."""

    FAIL = "fail"
    """Required item missing or broken."""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check or sub-check.

    Attributes:
        name: What was checked (e.g., "Tool Paths", "npx", "cline")
        status: Whether the check passed, warned, or failed
        message: Human-readable result message
        details: Optional multi-line context (paths, remediation hints)
    """

    name: str
    status: CheckStatus
    message: str
    details: str | None = None

    @property
    def is_pass(self) -> bool:
        return self.status == CheckStatus.PASS

    @property
    def is_warn(self) -> bool:
        return self.status == CheckStatus.WARN

    @property
    def is_fail(self) -> bool:
        return self.status == CheckStatus.FAIL

    def to_dict(self) -> dict[str, str | None]:
        """Plain mapping for JSON output."""
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "details": self.details,
        }

    @classmethod
    def passed(cls, name: str, message: str, details: str | None = None) -> CheckResult:
        """Create a passing check result."""
        return cls(name=name, status=CheckStatus.PASS, message=message, details=details)

    @classmethod
    def warned(cls, name: str, message: str, details: str | None = None) -> CheckResult:
        """Create a warning check result."""
        return cls(name=name, status=CheckStatus.WARN, message=message, details=details)

    @classmethod
    def failed(cls, name: str, message: str, details: str | None = None) -> CheckResult:
        """Create a failed check result."""
        return cls(name=name, status=CheckStatus.FAIL, message=message, details=details)


def _environ_snapshot() -> dict[str, str]:
    return dict(os.environ)


@dataclass(frozen=True)
class RunConfig:
    """Immutable context threaded into every check.

    Attributes:
        deebo_path: Installation root holding .env and config/tools.json
        platform: Platform whose command forms and paths apply
        home: User home directory
        env: Environment snapshot (PATH, APPDATA, XDG_CONFIG_HOME)
        runner: Process invocation capability
        timeout: Seconds allowed for each external process
    """

    deebo_path: Path
    platform: Platform = field(default_factory=detect_platform)
    home: Path = field(default_factory=home)
    env: Mapping[str, str] = field(default_factory=_environ_snapshot)
    runner: CommandRunner = field(default_factory=AsyncCommandRunner)
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_environment(
        cls,
        deebo_path: Path | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        runner: CommandRunner | None = None,
    ) -> RunConfig:
        """Snapshot the current process state (platform, home, environment)."""
        return cls(
            deebo_path=deebo_path if deebo_path is not None else Path.cwd(),
            runner=runner if runner is not None else AsyncCommandRunner(),
            timeout=timeout,
        )


class Check(Protocol):
    """Contract shared by every check."""

    name: str

    async def check(self, config: RunConfig | None = None) -> CheckResult: ...


class BaseCheck(ABC):
    """Base for checks: supplies a default RunConfig and never raises.

    Subclasses implement _run(); anything that escapes it is reported as a
    failed result carrying the check's name.
    """

    name: ClassVar[str]

    async def check(self, config: RunConfig | None = None) -> CheckResult:
        if config is None:
            config = RunConfig.from_environment()
        try:
            return await self._run(config)
        except Exception as e:
            logger.debug("%s raised while checking", self.name, exc_info=True)
            return CheckResult.failed(
                self.name,
                f"{self.name} check could not complete",
                details=f"{type(e).__name__}: {e}",
            )

    @abstractmethod
    async def _run(self, config: RunConfig) -> CheckResult: ...


class Policy(Enum):
    """How a composite check folds its sub-statuses."""

    ALL_MUST_PASS = auto()
    """PASS only if every sub-check passed, FAIL otherwise."""

    ANY_MUST_PASS = auto()
    """PASS if at least one sub-check passed, the fallback otherwise."""

    MIXED = auto()
    """PASS if all passed, FAIL if any failed, WARN otherwise."""


def fold(
    statuses: Iterable[CheckStatus],
    policy: Policy,
    *,
    fallback: CheckStatus = CheckStatus.FAIL,
) -> CheckStatus:
    """Reduce ordered sub-statuses to one aggregate status."""
    items = list(statuses)
    all_pass = all(s == CheckStatus.PASS for s in items)

    match policy:
        case Policy.ALL_MUST_PASS:
            return CheckStatus.PASS if all_pass else CheckStatus.FAIL
        case Policy.ANY_MUST_PASS:
            if any(s == CheckStatus.PASS for s in items):
                return CheckStatus.PASS
            return fallback
        case Policy.MIXED:
            if all_pass:
                return CheckStatus.PASS
            if any(s == CheckStatus.FAIL for s in items):
                return CheckStatus.FAIL
            return CheckStatus.WARN


def format_details(
    results: Sequence[CheckResult],
    *,
    with_details: bool = False,
    indent: str = "",
) -> str:
    """Render sub-results as "name: message" lines.

    With with_details, each sub-result becomes a block followed by its own
    details (indented) and blocks are separated by blank lines.
    """
    if not with_details:
        return "\n".join(f"{r.name}: {r.message}" for r in results)

    blocks: list[str] = []
    for r in results:
        block = f"{r.name}: {r.message}"
        if r.details:
            block += "\n" + "\n".join(f"{indent}{line}" for line in r.details.splitlines())
        blocks.append(block)
    return "\n\n".join(blocks)
