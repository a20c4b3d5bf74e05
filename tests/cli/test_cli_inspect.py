"""Tests for ``wastemcp inspect`` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner
from conftest import CONTRACT_ID, FIXTURE

from wastemcp.cli import main

if TYPE_CHECKING:
    from pathlib import Path


class TestInspectCommand:
    def test_tools_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "tools"])

        assert result.exit_code == 0
        assert "Tools" in result.output
        assert "get_facility" in result.output

    def test_tools_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "tools", "--json"])

        assert result.exit_code == 0
        names = [t["name"] for t in json.loads(result.output)]
        assert names[0] == "create_facility"
        assert names[-1] == "suggest_inspection_questions"

    def test_prompts_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "prompts", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.output)[0]["name"] == "analyze-facility-compliance"

    def test_prompts_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "prompts"])

        assert result.exit_code == 0
        assert "Prompts" in result.output

    def test_resources_with_fixture(self, tmp_path: Path) -> None:
        f = tmp_path / "fixture.json"
        f.write_text(json.dumps(FIXTURE))

        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "resources", "--data", str(f), "--json"])

        assert result.exit_code == 0
        uris = [r["uri"] for r in json.loads(result.output)]
        assert f"contract://{CONTRACT_ID}" in uris

    def test_resources_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "resources"])

        assert result.exit_code == 0
        assert "stats://overview" in result.output

    def test_unknown_section(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", "agents"])

        assert result.exit_code != 0
