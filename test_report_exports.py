#!/usr/bin/env python3
"""
Tests for the Excel export and the kills-by-means chart.
"""

import os
import sys

import pytest

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

import matplotlib
matplotlib.use("Agg")

import pandas as pd

from quake_log_tools.log.accumulator import parse_lines
from quake_log_tools.tools.kill_chart import KillChartTool
from quake_log_tools.tools.report_to_excel import ReportToExcelTool

LINES = [
    r"  0:00 InitGame: \sv_floodProtect\1",
    r" 20:38 ClientUserinfoChanged: 2 n\Isgalamido\t\0",
    r" 20:39 ClientUserinfoChanged: 3 n\Dono da Bola\t\0",
    " 20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT",
    " 22:06 Kill: 2 3 7: Isgalamido killed Dono da Bola by MOD_ROCKET_SPLASH",
    " 22:08 Kill: 2 3 7: Isgalamido killed Dono da Bola by MOD_ROCKET_SPLASH",
    " 22:10 Kill: 3 2 7: Dono da Bola killed Isgalamido by MOD_RAILGUN",
    "  1:47 ShutdownGame:",
    r"  0:00 InitGame: \sv_floodProtect\1",
]


@pytest.fixture
def session():
    return parse_lines(LINES)


@pytest.fixture
def config(tmp_path):
    return {"general": {"output_path": str(tmp_path / "output")}, "kill_chart": {"output_dpi": 50}}


def test_session_to_frames(session, config):
    frames = ReportToExcelTool(config).session_to_frames(session)

    games = frames["Games"]
    assert list(games["game"]) == [1, 2]
    assert list(games["total_kills"]) == [4, 0]
    assert games.loc[0, "players"] == "Isgalamido, Dono da Bola"

    scores = frames["Scores"]
    assert list(scores["player"]) == ["Isgalamido", "Dono da Bola"]
    assert list(scores["kills"]) == [1, 1]
    assert list(scores["rank"]) == [1, 2]

    means = frames["Kills by means"]
    assert dict(zip(means["means"], means["kills"])) == {
        "MOD_TRIGGER_HURT": 1, "MOD_ROCKET_SPLASH": 2, "MOD_RAILGUN": 1,
    }


def test_write_excel(session, config, tmp_path):
    path = ReportToExcelTool(config).run(session, "report.xlsx")

    assert path == str(tmp_path / "output" / "report.xlsx")
    sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
    assert set(sheets) == {"Games", "Scores", "Kills by means"}
    assert int(sheets["Games"].loc[0, "total_kills"]) == 4


def test_plot_match(session, config, tmp_path):
    tool = KillChartTool(config)
    path = tool.plot_match(session.matches[0], 1)

    assert os.path.isfile(path)
    assert os.path.basename(path).startswith("kill_chart_game_1_")
    assert path.endswith(".png")


def test_plot_match_without_kills(session, config, tmp_path):
    output = str(tmp_path / "charts" / "empty.png")
    path = KillChartTool(config).plot_match(session.matches[1], 2, output_path=output)
    assert path == output
    assert os.path.isfile(output)


def test_run_plots_every_game(config, tmp_path):
    log_file = tmp_path / "qgames.log"
    log_file.write_text("\n".join(LINES) + "\n")

    result = KillChartTool(config).run(str(log_file))
    assert result["game_count"] == 2
    assert len(result["output_files"]) == 2


def test_run_single_game_out_of_range(config, tmp_path):
    log_file = tmp_path / "qgames.log"
    log_file.write_text("\n".join(LINES) + "\n")

    with pytest.raises(ValueError):
        KillChartTool(config).run(str(log_file), game_number=3)


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
