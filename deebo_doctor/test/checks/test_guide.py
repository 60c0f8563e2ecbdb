# SPDX-License-Identifier: MIT
"""Tests for GuideServerCheck."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from deebo_doctor.checks.base import CheckStatus, RunConfig
from deebo_doctor.checks.configs import host_config_paths
from deebo_doctor.checks.guide import GUIDE_HOSTS, GuideServerCheck
from deebo_doctor.test.fakes import make_config

GUIDE_SERVER = {"mcpServers": {"deebo-guide": {"command": "node"}}}


def _register_everywhere(config: RunConfig) -> None:
    paths = host_config_paths(config)
    for host in GUIDE_HOSTS:
        paths[host].parent.mkdir(parents=True, exist_ok=True)
        paths[host].write_text(json.dumps(GUIDE_SERVER), encoding="utf-8")


def _guide_files(config: RunConfig, *names: str) -> None:
    guide_dir = config.home / ".deebo-guide"
    guide_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (guide_dir / name).write_text("x", encoding="utf-8")


class TestGuideServerCheck:
    def test_everything_in_place_passes(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)
        _guide_files(config, "deebo_guide.md", "guide-server.js")
        _register_everywhere(config)

        result = asyncio.run(GuideServerCheck().check(config))

        assert result.status == CheckStatus.PASS
        assert result.message == "Guide server files and configuration valid"

    def test_missing_guide_document_fails(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)
        _guide_files(config, "guide-server.js")
        _register_everywhere(config)

        result = asyncio.run(GuideServerCheck().check(config))

        assert result.status == CheckStatus.FAIL
        assert result.message == "Guide server setup incomplete"
        assert "guide_file: Deebo guide file not found" in (result.details or "")

    def test_host_without_guide_key_fails(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)
        _guide_files(config, "deebo_guide.md", "guide-server.js")
        _register_everywhere(config)
        host_config_paths(config)["cursor"].write_text(
            json.dumps({"mcpServers": {"deebo": {}}}), encoding="utf-8"
        )

        result = asyncio.run(GuideServerCheck().check(config))

        assert result.status == CheckStatus.FAIL
        assert "Guide server not configured in cursor" in (result.details or "")
        assert "Missing 'deebo-guide' in mcpServers" in (result.details or "")

    def test_unreadable_host_config(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)

        result = asyncio.run(GuideServerCheck().check(config))

        assert result.status == CheckStatus.FAIL
        assert "cline_config: Could not read cline config" in (result.details or "")
        assert "server_file: Guide server file not found" in (result.details or "")

    def test_deeply_nested_host_config_is_unreadable(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)
        _guide_files(config, "deebo_guide.md", "guide-server.js")
        _register_everywhere(config)
        host_config_paths(config)["claude"].write_text("{" * 200_000, encoding="utf-8")

        result = asyncio.run(GuideServerCheck().check(config))

        assert result.message == "Guide server setup incomplete"
        assert "claude_config: Could not read claude config" in (result.details or "")
        assert "cline_config: Guide server properly configured in cline" in (result.details or "")

    def test_empty_guide_registration_counts(self, tmp_path: Path) -> None:
        config = make_config(tmp_path)
        _guide_files(config, "deebo_guide.md", "guide-server.js")
        paths = host_config_paths(config)
        for host in GUIDE_HOSTS:
            paths[host].parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps({"mcpServers": {"deebo-guide": {}}})
            paths[host].write_text(content, encoding="utf-8")

        result = asyncio.run(GuideServerCheck().check(config))

        assert result.status == CheckStatus.PASS
