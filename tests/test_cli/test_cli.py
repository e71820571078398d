"""Tests for the pcoslint CLI commands."""
from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from pcoslint import __version__
from pcoslint.cli.main import cli

FIXTURE = Path(__file__).parent.parent / "fixtures" / "project"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def broken_project(tmp_path: Path) -> Path:
    (tmp_path / "main.scss").write_text('@import "card";\n\n.button {}\n')
    (tmp_path / "_card.scss").write_text('@use "missing";\n.c-card {}\n')
    return tmp_path


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


class TestCLIGroup:
    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "inspect" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


class TestCheckCommand:
    def test_clean_project(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["check", str(FIXTURE)])
        assert result.exit_code == 0
        assert "OK: 3 file(s) checked (0 diagnostics)" in result.output

    def test_clean_project_from_entry(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["check", str(FIXTURE), "--entry", str(FIXTURE / "main.scss")]
        )
        assert result.exit_code == 0

    def test_violations_exit_nonzero(self, runner: CliRunner, broken_project: Path) -> None:
        result = runner.invoke(cli, ["check", str(broken_project)])
        assert result.exit_code == 1
        assert "main.scss:3:1: error [missing-prefix]" in result.output
        assert "(suggestion: c-button)" in result.output
        assert "_card.scss:1:1: warning [unresolved-import]" in result.output
        assert "Summary: 1 error(s), 1 warning(s), 0 info" in result.output

    def test_diagnostics_in_location_order(self, runner: CliRunner, broken_project: Path) -> None:
        result = runner.invoke(cli, ["check", str(broken_project)])
        assert result.output.index("_card.scss:1:1") < result.output.index("main.scss:3:1")

    def test_json_output(self, runner: CliRunner, broken_project: Path) -> None:
        result = runner.invoke(cli, ["check", str(broken_project), "--format", "json"])
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["summary"] == {"error": 1, "warning": 1, "info": 0}
        codes = [d["code"] for d in payload["diagnostics"]]
        assert codes == ["unresolved-import", "missing-prefix"]
        assert payload["diagnostics"][1]["span"]["file"] == "main.scss"

    def test_fail_on_warning(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "main.scss").write_text('@import "gone";\n.c-a {}\n')
        assert runner.invoke(cli, ["check", str(tmp_path)]).exit_code == 0
        result = runner.invoke(cli, ["check", str(tmp_path), "--fail-on", "warning"])
        assert result.exit_code == 1

    def test_extra_prefix(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "main.scss").write_text(".l-grid {}\n")
        assert runner.invoke(cli, ["check", str(tmp_path)]).exit_code == 1
        result = runner.invoke(
            cli, ["check", str(tmp_path), "--prefix", "c", "--prefix", "u", "--prefix", "l-"]
        )
        assert result.exit_code == 0

    def test_max_depth(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "main.scss").write_text(".c-a__b__c {}\n")
        assert runner.invoke(cli, ["check", str(tmp_path)]).exit_code == 1
        assert runner.invoke(cli, ["check", str(tmp_path), "--max-depth", "2"]).exit_code == 0

    def test_ignore(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "main.scss").write_text(".js-toggle {}\n")
        result = runner.invoke(cli, ["check", str(tmp_path), "--ignore", "^js-"])
        assert result.exit_code == 0

    def test_invalid_ignore_pattern(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "main.scss").write_text(".c-a {}\n")
        result = runner.invoke(cli, ["check", str(tmp_path), "--ignore", "["])
        assert result.exit_code == 2
        assert "Invalid ignore_selectors pattern" in result.output

    def test_unresolved_as_warning(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "main.scss").write_text("/** @implements i-gone */\n.c-a {}\n")
        assert runner.invoke(cli, ["check", str(tmp_path)]).exit_code == 1
        result = runner.invoke(cli, ["check", str(tmp_path), "--unresolved-as-warning"])
        assert result.exit_code == 0
        assert "warning [unresolved-reference]" in result.output

    def test_no_stylesheets(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "notes.txt").write_text("hello")
        result = runner.invoke(cli, ["check", str(tmp_path)])
        assert result.exit_code == 2
        assert "No .scss, .sass or .css files found" in result.output

    def test_missing_path(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["check", str(tmp_path / "nope.scss")])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------


class TestInspectCommand:
    def test_text_listing(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["inspect", str(FIXTURE)])
        assert result.exit_code == 0
        assert "Files: 3" in result.output
        assert "c-button" in result.output
        assert "implements i-theme" in result.output

    def test_json_listing(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["inspect", str(FIXTURE), "--entry", str(FIXTURE / "main.scss"), "--format", "json"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["files"] == ["main.scss", "objects/_theme.scss", "components/_button.scss"]
        by_name = {d["name"]: d for d in payload["declarations"]}
        assert by_name["o-theme"]["kind"] == "object"
        assert by_name["o-theme"]["implements"] == "i-theme"
        assert by_name["o-theme"]["members"] == ["accent", "primary", "shadow"]
        assert by_name["c-button"]["modifiers"] == ["large", "primary"]
