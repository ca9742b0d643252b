"""Tests für die Kommandozeile (main.py)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli

DATA_PATH = Path("output/planner_data.json")


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    """CliRunner in einem leeren Arbeitsverzeichnis mit Demo-Datensatz."""
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["demo", "--seed", "3"])
    assert result.exit_code == 0, result.output
    return runner


class TestCli:
    def test_demo_writes_json(self, runner: CliRunner):
        assert DATA_PATH.exists()
        raw = json.loads(DATA_PATH.read_text(encoding="utf-8"))
        assert raw["user_plans"][0]["id"] == "plan-demo"

    def test_check(self, runner: CliRunner):
        result = runner.invoke(cli, ["check", "--plan", "plan-demo", "--language", "en"])
        assert result.exit_code == 0, result.output
        assert "All mandatory courses included" in result.output

    def test_validate(self, runner: CliRunner):
        result = runner.invoke(cli, ["validate"])
        assert result.exit_code == 0, result.output
        assert "KONSISTENT" in result.output

    def test_plan_create_and_list(self, runner: CliRunner):
        result = runner.invoke(cli, ["plan", "create", "Winterplan", "--semester", "winter"])
        assert result.exit_code == 0, result.output
        result = runner.invoke(cli, ["plan", "list"])
        assert "Winterplan" in result.output

    def test_plan_toggle(self, runner: CliRunner):
        offering_id = "fm-logic-2026-summer"
        result = runner.invoke(cli, ["plan", "toggle", offering_id, "--plan", "plan-demo"])
        assert result.exit_code == 0, result.output
        assert "ausgeschlossen" in result.output

        raw = json.loads(DATA_PATH.read_text(encoding="utf-8"))
        plan = next(p for p in raw["user_plans"] if p["id"] == "plan-demo")
        sel = next(s for s in plan["selected_offerings"] if s["offering_id"] == offering_id)
        assert sel["is_included"] is False

    def test_plan_toggle_unknown_offering(self, runner: CliRunner):
        result = runner.invoke(cli, ["plan", "toggle", "gibt-es-nicht", "--plan", "plan-demo"])
        assert result.exit_code == 1

    def test_unknown_plan(self, runner: CliRunner):
        result = runner.invoke(cli, ["check", "--plan", "plan-xyz"])
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output

    def test_lanes_and_zoom(self, runner: CliRunner):
        result = runner.invoke(cli, ["lanes", "--plan", "plan-demo"])
        assert result.exit_code == 0, result.output
        assert "Lanes" in result.output
        result = runner.invoke(cli, ["zoom", "--season", "summer"])
        assert result.exit_code == 0, result.output
        assert "Jan" in result.output

    def test_plan_sync_keeps_complete_plan(self, runner: CliRunner):
        result = runner.invoke(cli, ["plan", "sync", "--plan", "plan-demo"])
        assert result.exit_code == 0, result.output
        assert "0 Angebote ergänzt" in result.output

    def test_zoom_month_lists_plan_events(self, runner: CliRunner):
        result = runner.invoke(cli, ["zoom", "--month", "4", "--plan", "plan-demo"])
        assert result.exit_code == 0, result.output
        assert "Termine May 2026" in result.output
        assert "lecture" in result.output

    def test_zoom_season_lists_visible_offerings(self, runner: CliRunner):
        result = runner.invoke(cli, ["zoom", "--season", "spring", "--plan", "plan-demo"])
        assert result.exit_code == 0, result.output
        assert "Sichtbare Angebote" in result.output

    def test_zoom_month_unknown_plan(self, runner: CliRunner):
        result = runner.invoke(cli, ["zoom", "--month", "4", "--plan", "plan-xyz"])
        assert result.exit_code == 1

    def test_export(self, runner: CliRunner):
        result = runner.invoke(cli, ["export", "svg", "--plan", "plan-demo", "-o", "k.svg"])
        assert result.exit_code == 0, result.output
        assert Path("k.svg").exists()
        result = runner.invoke(cli, ["export", "excel", "--plan", "plan-demo", "-o", "p.xlsx"])
        assert result.exit_code == 0, result.output
        assert Path("p.xlsx").exists()


class TestCliWithoutData:
    def test_check_without_data(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "Keine Datendatei" in result.output

    def test_setup_writes_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["setup"])
        assert result.exit_code == 0, result.output
        assert Path("config/planner_config.yaml").exists()
        result = CliRunner().invoke(cli, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "base_radius" in result.output

    def test_zoom_without_data_shows_angles_only(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["zoom", "--month", "4"])
        assert result.exit_code == 0, result.output
        assert "Termine" not in result.output
