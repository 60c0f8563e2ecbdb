# SPDX-License-Identifier: MIT
"""API keys check.

deebo needs at least one LLM provider credential in its .env file. Values
are only checked for the provider's key prefix, never sent anywhere.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from .base import BaseCheck, CheckResult, CheckStatus, Policy, RunConfig, fold, format_details
from .common import read_text
from .configs import env_file_path

logger = logging.getLogger(__name__)

# Recognized variables and the prefix a well-formed value starts with
KEY_PREFIXES: dict[str, str] = {
    "OPENROUTER_API_KEY": "sk-or-v1-",
    "OPENAI_API_KEY": "sk-",
    "ANTHROPIC_API_KEY": "sk-ant-",
    "GEMINI_API_KEY": "AI",
}


def find_value(lines: list[str], key: str) -> str | None:
    """Value of the first line starting with key, or None when absent.

    The value is everything after the first "=", trimmed.
    """
    for line in lines:
        if line.startswith(key):
            _, _, value = line.partition("=")
            return value.strip()
    return None


class ApiKeysCheck(BaseCheck):
    """Check that at least one provider key in .env looks valid."""

    name: ClassVar[str] = "API Keys"

    async def _run(self, config: RunConfig) -> CheckResult:
        env_path = env_file_path(config)
        try:
            content = await read_text(env_path)
        except (OSError, ValueError) as e:
            logger.debug("cannot read %s: %s", env_path, e)
            return CheckResult.failed(
                self.name, "Could not read .env file", details=f"Expected at {env_path}"
            )

        lines = content.split("\n")
        results = [self.check_key(lines, key, prefix) for key, prefix in KEY_PREFIXES.items()]

        status = fold((r.status for r in results), Policy.ANY_MUST_PASS, fallback=CheckStatus.WARN)
        return CheckResult(
            name=self.name,
            status=status,
            message=(
                "At least one valid API key found"
                if status == CheckStatus.PASS
                else "No valid API keys found"
            ),
            details=format_details(results),
        )

    def check_key(self, lines: list[str], key: str, prefix: str) -> CheckResult:
        value = find_value(lines, key)
        if value is None:
            return CheckResult.warned(key, f"{key} not found")
        if not value.startswith(prefix):
            return CheckResult.warned(
                key, f"{key} may be invalid", details=f"Expected prefix: {prefix}"
            )
        return CheckResult.passed(key, f"{key} found and valid")
