#!/usr/bin/env python3
"""
Quake Log Tools - Game Report

Parses Quake server logs and reports, per game, the total number of kills,
the players, each player's score and the kills grouped by cause of death.
"""

import argparse
import logging
import os
import sys
from typing import Dict, List, Any, Optional

from quake_log_tools.base import QuakeTool, JSONTool
from quake_log_tools.log.accumulator import parse_lines
from quake_log_tools.log.models import Match, ParseSession
from quake_log_tools.log.reader import read_log_lines

logger = logging.getLogger(__name__)


def format_match_report(index: int, match: Match, show_ranking: bool = True) -> str:
    """
    Render one match as text.

    Args:
        index: 1-based game number
        match: The match to render
        show_ranking: Whether to append the player ranking line

    Returns:
        The report block, terminated by a blank line
    """
    lines = [
        f"Game {index}:",
        f"Total kills: {match.total_kills}",
        f"Players: {', '.join(match.players)}",
        f"Kills: {match.scores}",
        f"Kills by means: {match.cause_tally}",
    ]
    if show_ranking and match.scores:
        ranking = ", ".join(f"{rank}. {player} ({score})"
                            for rank, (player, score) in enumerate(match.ranking(), start=1))
        lines.append(f"Ranking: {ranking}")
    return "\n".join(lines) + "\n\n"


class GameReportTool(JSONTool):
    """
    Builds per-game statistics from Quake server logs.

    Each log file is parsed into its own ParseSession. The report is only
    printed once a file has been parsed completely, so a file that fails to
    parse never shows a half-built game.
    """

    CSV_HEADERS = ["Game", "Category", "Name", "Value"]

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the report tool.

        Args:
            config: Configuration dictionary from Config class
        """
        super().__init__(config)
        self.initialize_directories()
        self.show_ranking = bool(self.get_config('game_report.show_ranking', True))

    def parse_log(self, file_path: str) -> ParseSession:
        """
        Parse a single log file.

        Args:
            file_path: Path to the log file

        Returns:
            The parsed session

        Raises:
            OSError: If the file cannot be read
            LogParseError: If the log contains a line that cannot be applied
        """
        resolved_path = self.resolve_path(file_path)
        logger.info(f"Parsing log file: {resolved_path}")

        session = parse_lines(read_log_lines(resolved_path))

        total_kills = sum(match.total_kills for match in session)
        logger.info(f"Parsed {len(session)} games with {total_kills} kills from {resolved_path}")
        return session

    def format_report(self, session: ParseSession) -> str:
        return "".join(format_match_report(index, match, self.show_ranking)
                       for index, match in enumerate(session, start=1))

    def print_report(self, session: ParseSession) -> None:
        if not len(session):
            logger.warning("No games found in the log.")
            return
        print(self.format_report(session), end="")

    def _prepare_csv_data(self, session: ParseSession) -> List[Dict[str, Any]]:
        """
        Flatten a session into CSV rows, one row per value.

        Args:
            session: The parsed session

        Returns:
            List of dictionaries ready for CSV export
        """
        data = []
        for index, match in enumerate(session, start=1):
            data.append({"Game": index, "Category": "Total kills", "Name": "", "Value": match.total_kills})
            for player in match.players:
                data.append({"Game": index, "Category": "Player", "Name": player, "Value": ""})
            for player, score in match.scores.items():
                data.append({"Game": index, "Category": "Kills", "Name": player, "Value": score})
            for cause, count in match.cause_tally.items():
                data.append({"Game": index, "Category": "Kills by means", "Name": cause, "Value": count})
        return data

    def _output_name(self, log_file: str, extension: str) -> str:
        stem = os.path.splitext(os.path.basename(log_file))[0]
        return self.generate_timestamped_filename("game_report", extension, prefix=stem)

    def save_to_json(self, session: ParseSession, log_file: str) -> str:
        return self.write_json(session.to_dict(), self._output_name(log_file, "json"))

    def save_to_csv(self, session: ParseSession, log_file: str) -> str:
        data = self._prepare_csv_data(session)
        return self.write_csv(data, self._output_name(log_file, "csv"), headers=self.CSV_HEADERS)

    def save_to_excel(self, session: ParseSession, log_file: str) -> str:
        from quake_log_tools.tools.report_to_excel import ReportToExcelTool

        excel_tool = ReportToExcelTool(self.config)
        return excel_tool.run(session, self._output_name(log_file, "xlsx"))

    def run(self, log_files: Optional[List[str]] = None, export_json: bool = False,
            export_csv: bool = False, export_excel: bool = False) -> Dict[str, Any]:
        """
        Parse each log file, print its report and write the requested exports.

        Args:
            log_files: Log files to parse (default: the configured log file)
            export_json: Write a JSON export per log file
            export_csv: Write a CSV export per log file
            export_excel: Write an Excel export per log file

        Returns:
            Dictionary with analysis results
        """
        log_files = log_files or [self.log_file]

        result = {
            "success": True,
            "game_count": 0,
            "kill_count": 0,
            "output_files": [],
        }

        for i, log_file in enumerate(log_files, 1):
            logger.info(f"Processing file {i}/{len(log_files)}: {os.path.basename(log_file)}")
            session = self.parse_log(log_file)

            self.print_report(session)

            if export_json:
                result["output_files"].append(self.save_to_json(session, log_file))
            if export_csv:
                result["output_files"].append(self.save_to_csv(session, log_file))
            if export_excel:
                result["output_files"].append(self.save_to_excel(session, log_file))

            result["game_count"] += len(session)
            result["kill_count"] += sum(match.total_kills for match in session)

        logger.info(f"Report complete: {result['game_count']} games, {result['kill_count']} kills")
        return result


def main():
    """
    Main entry point for the game report command line tool.
    """
    parser = argparse.ArgumentParser(
        description="Parse Quake server logs and report kills per game.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s
    %(prog)s games.log --json --csv
    %(prog)s server1.log server2.log --excel --profile my_server

Configuration:
    - paths.log_file: Log file used when none is given (default: qgames.log)
    - general.output_path: Directory for exported files
    - game_report.show_ranking: Append a player ranking to each game
        """
    )
    parser.add_argument(
        "log_files",
        nargs="*",
        help="Log files to parse. If not specified, uses the configured log file."
    )
    parser.add_argument("--json", action="store_true", help="Export the parsed games to JSON")
    parser.add_argument("--csv", action="store_true", help="Export the parsed games to CSV")
    parser.add_argument("--excel", action="store_true", help="Export the parsed games to Excel")

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args()

    try:
        config = GameReportTool.load_config(args.profile)

        tool = GameReportTool(config)
        result = tool.run(args.log_files, export_json=args.json,
                          export_csv=args.csv, export_excel=args.excel)

        if args.console:
            logger.info(f"Game report completed: {result}")

        return 0 if result["success"] else 1

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid log: {e}")
        return 1
    except OSError as e:
        logger.error(f"Error reading log: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
