"""
Quake Log Analysis Tools

This package provides the command line tools built on the log parser:
the per-game text report with its JSON/CSV/Excel exports and the
kills-by-means chart.
"""

from .game_report import GameReportTool
from .kill_chart import KillChartTool
from .report_to_excel import ReportToExcelTool

__all__ = [
    'GameReportTool',
    'KillChartTool',
    'ReportToExcelTool',
]
