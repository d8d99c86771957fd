"""
Report to Excel Tool

Writes parsed Quake games to an Excel workbook with one sheet for the game
summaries, one for player scores and one for kills by cause of death.
"""

import logging
from typing import Dict, Any, Optional

from quake_log_tools.base import FileBasedTool
from quake_log_tools.log.models import ParseSession

try:
    import pandas as pd
    from openpyxl.utils import get_column_letter
except ImportError:
    raise ImportError("This tool requires pandas and openpyxl. Install with: pip install pandas openpyxl")

__all__ = ['ReportToExcelTool']

logger = logging.getLogger(__name__)


class ReportToExcelTool(FileBasedTool):
    """Tool for exporting parsed games to Excel."""

    GAMES_SHEET = "Games"
    SCORES_SHEET = "Scores"
    MEANS_SHEET = "Kills by means"

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(config)
        self.initialize_directories()

    def session_to_frames(self, session: ParseSession) -> Dict[str, pd.DataFrame]:
        """
        Build one DataFrame per sheet.

        Args:
            session: The parsed session

        Returns:
            Mapping of sheet name to DataFrame
        """
        games, scores, means = [], [], []
        for index, match in enumerate(session, start=1):
            games.append({
                "game": index,
                "total_kills": match.total_kills,
                "player_count": len(match.players),
                "players": ", ".join(match.players),
            })
            for rank, (player, score) in enumerate(match.ranking(), start=1):
                scores.append({"game": index, "rank": rank, "player": player, "kills": score})
            for cause, count in match.cause_tally.items():
                means.append({"game": index, "means": cause, "kills": count})

        return {
            self.GAMES_SHEET: pd.DataFrame(games, columns=["game", "total_kills", "player_count", "players"]),
            self.SCORES_SHEET: pd.DataFrame(scores, columns=["game", "rank", "player", "kills"]),
            self.MEANS_SHEET: pd.DataFrame(means, columns=["game", "means", "kills"]),
        }

    def write_excel(self, session: ParseSession, excel_file: str) -> str:
        """
        Write the session to an Excel workbook.

        Args:
            session: The parsed session
            excel_file: Path to the output Excel file

        Returns:
            Absolute path of the written workbook
        """
        excel_path = self.output_path_for(excel_file)
        frames = self.session_to_frames(session)

        with pd.ExcelWriter(excel_path, engine='openpyxl') as writer:
            for sheet_name, df in frames.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                worksheet = writer.sheets[sheet_name]

                # Widen columns to fit their longest value
                for idx, column in enumerate(df.columns, 1):
                    letter = get_column_letter(idx)
                    longest = max([len(str(column))] + [len(str(value)) for value in df[column]])
                    worksheet.column_dimensions[letter].width = min(longest + 2, 80)

        logger.info(f"Successfully exported to {excel_path}")
        return excel_path

    def run(self, session: ParseSession, excel_file: str) -> str:
        return self.write_excel(session, excel_file)
