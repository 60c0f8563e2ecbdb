from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from deebo_doctor.checks import Check, CheckResult, CheckStatus, RunConfig, all_checks
from deebo_doctor.core.errors import ErrorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DoctorReport:
    results: tuple[CheckResult, ...]

    def count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    def has_failures(self) -> bool:
        return any(r.is_fail for r in self.results)

    def has_warnings(self) -> bool:
        return any(r.is_warn for r in self.results)

    def exit_code(self) -> ErrorCode:
        # Warnings never fail the run
        return ErrorCode.ENV_ERROR if self.has_failures() else ErrorCode.OK


class DoctorService:
    def __init__(
        self,
        *,
        config: RunConfig,
        checks: Sequence[Check] | None = None,
        concurrent: bool = True,
    ) -> None:
        self._config = config
        self._checks = list(checks) if checks is not None else all_checks()
        self._concurrent = concurrent

    @property
    def checks(self) -> list[Check]:
        return list(self._checks)

    async def run(self) -> DoctorReport:
        if self._concurrent:
            results = await asyncio.gather(*(c.check(self._config) for c in self._checks))
        else:
            results = [await c.check(self._config) for c in self._checks]

        for r in results:
            logger.debug("%s: %s (%s)", r.name, r.status, r.message)
        return DoctorReport(results=tuple(results))

    def run_sync(self) -> DoctorReport:
        return asyncio.run(self.run())
