#!/usr/bin/env python3
"""
Tests for the game report tool: text report, exports and command line entry point.
"""

import csv
import json
import os
import sys

import pytest

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from quake_log_tools.log.errors import NoCurrentMatchError
from quake_log_tools.tools import game_report
from quake_log_tools.tools.game_report import GameReportTool, format_match_report

SAMPLE_LOG = r"""  0:00 ------------------------------------------------------------
  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000
 15:00 Exit: Timelimit hit.
 20:34 ClientConnect: 2
 20:34 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\xian/default\hmodel\xian/default
 20:37 ClientBegin: 2
 20:37 ShutdownGame:
 20:37 ------------------------------------------------------------
 20:37 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000
 20:38 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\uriel/zael\hmodel\uriel/zael
 20:40 Item: 2 weapon_rocketlauncher
 20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
 21:07 ClientUserinfoChanged: 3 n\Mocinha\t\0\model\sarge\hmodel\sarge
 21:10 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\uriel/zael\hmodel\uriel/zael
 21:42 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
 22:06 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH
 22:18 Kill: 2 2 7: Isgalamido killed Isgalamido by MOD_ROCKET_SPLASH
 22:40 Kill: 2 3 7: Isgalamido killed Mocinha by MOD_ROCKET_SPLASH
"""


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "qgames.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return str(path)


@pytest.fixture
def tool(tmp_path):
    config = {"general": {"output_path": str(tmp_path / "output")}}
    return GameReportTool(config)


def test_parse_log(tool, log_file):
    session = tool.parse_log(log_file)

    assert len(session) == 2
    first, second = session.matches
    assert first.players == ["Isgalamido"]
    assert first.total_kills == 0
    assert second.players == ["Isgalamido", "Mocinha"]
    assert second.total_kills == 5
    assert second.scores == {"Isgalamido": -1}
    assert second.cause_tally == {"MOD_TRIGGER_HURT": 2, "MOD_ROCKET_SPLASH": 3}


def test_format_match_report(tool, log_file):
    session = tool.parse_log(log_file)
    text = format_match_report(2, session.matches[1])

    assert text == (
        "Game 2:\n"
        "Total kills: 5\n"
        "Players: Isgalamido, Mocinha\n"
        "Kills: {'Isgalamido': -1}\n"
        "Kills by means: {'MOD_TRIGGER_HURT': 2, 'MOD_ROCKET_SPLASH': 3}\n"
        "Ranking: 1. Isgalamido (-1)\n"
        "\n"
    )


def test_ranking_can_be_disabled(tmp_path, log_file):
    tool = GameReportTool({"game_report": {"show_ranking": False}})
    report = tool.format_report(tool.parse_log(log_file))
    assert "Ranking:" not in report
    assert report.startswith("Game 1:\nTotal kills: 0\nPlayers: Isgalamido\nKills: {}\n")


def test_run_prints_report_and_exports(tool, log_file, capsys):
    result = tool.run([log_file], export_json=True, export_csv=True)

    assert result["success"]
    assert result["game_count"] == 2
    assert result["kill_count"] == 5
    assert len(result["output_files"]) == 2

    out = capsys.readouterr().out
    assert "Game 1:" in out
    assert "Game 2:" in out

    json_file = next(path for path in result["output_files"] if path.endswith(".json"))
    with open(json_file) as f:
        data = json.load(f)
    assert data["game_2"]["kills_by_means"] == {"MOD_TRIGGER_HURT": 2, "MOD_ROCKET_SPLASH": 3}
    assert os.path.basename(json_file).startswith("game_report_qgames_")

    csv_file = next(path for path in result["output_files"] if path.endswith(".csv"))
    with open(csv_file, newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows[0] == {"Game": "1", "Category": "Total kills", "Name": "", "Value": "0"}
    assert {"Game": "2", "Category": "Kills by means", "Name": "MOD_ROCKET_SPLASH", "Value": "3"} in rows


def test_exports_land_in_output_dir_sharing_file_name_prefix(tmp_path, log_file, monkeypatch):
    monkeypatch.chdir(tmp_path)
    tool = GameReportTool({"general": {"output_path": "game"}})

    json_file = tool.save_to_json(tool.parse_log(log_file), log_file)

    assert os.path.dirname(json_file) == str(tmp_path / "game")
    assert os.path.isfile(json_file)


def test_paths_already_in_output_dir_are_not_nested(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    tool = GameReportTool({"general": {"output_path": "output"}})

    assert tool.output_path_for(os.path.join("output", "a.json")) == str(tmp_path / "output" / "a.json")
    assert tool.output_path_for("a.json") == str(tmp_path / "output" / "a.json")


def test_run_uses_configured_log_file(tmp_path, log_file, capsys):
    tool = GameReportTool({"paths": {"log_file": log_file}})
    result = tool.run()
    assert result["game_count"] == 2


def test_failed_log_prints_nothing(tool, tmp_path, capsys):
    bad_log = tmp_path / "bad.log"
    bad_log.write_text(" 20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT\n")

    with pytest.raises(NoCurrentMatchError):
        tool.run([str(bad_log)])
    assert capsys.readouterr().out == ""


def test_missing_log_file_propagates(tool, tmp_path):
    with pytest.raises(FileNotFoundError):
        tool.run([str(tmp_path / "missing.log")])


def test_main_success(monkeypatch, log_file, capsys):
    monkeypatch.setattr(sys, "argv", ["quake-game-report", log_file])
    assert game_report.main() == 0
    assert "Total kills: 5" in capsys.readouterr().out


def test_main_missing_file(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", ["quake-game-report", str(tmp_path / "missing.log")])
    assert game_report.main() == 1


def test_main_malformed_log(monkeypatch, tmp_path):
    bad_log = tmp_path / "bad.log"
    bad_log.write_text("  0:00 InitGame: \\x\\1\n 2:11 Kill: 2 4 6: Zeh shot Bob\n")
    monkeypatch.setattr(sys, "argv", ["quake-game-report", str(bad_log)])
    assert game_report.main() == 1


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
