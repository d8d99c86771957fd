"""
Kill Chart Tool

This tool parses a Quake server log and draws, for each game, a bar chart of
the kills grouped by cause of death.
"""

import sys
import os
from typing import Dict, Any, List, Optional
import argparse
import logging

import matplotlib.pyplot as plt
import numpy as np

from quake_log_tools.base import FileBasedTool, QuakeTool
from quake_log_tools.log.accumulator import parse_lines
from quake_log_tools.log.models import Match
from quake_log_tools.log.reader import read_log_lines

logger = logging.getLogger(__name__)


class KillChartTool(FileBasedTool):
    """
    A tool for plotting the kills-by-means tally of each game as a bar chart.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the Kill Chart Tool.

        Args:
            config: Configuration dictionary from Config class
        """
        super().__init__(config)
        self.initialize_directories()

        chart_config = self.config.get('kill_chart', {}) if self.config else {}

        self.output_dpi = int(chart_config.get('output_dpi', 150))
        self.bar_color = chart_config.get('bar_color', 'steelblue')

    def plot_match(self, match: Match, game_number: int, output_path: Optional[str] = None,
                   title: Optional[str] = None) -> str:
        """
        Plot the kills by means of one game.

        Args:
            match: The game to plot
            game_number: 1-based game number, used for the default title and filename
            output_path: Output image path (default: timestamped file in the output directory)
            title: Chart title (default: "Game <n> - <k> kills")

        Returns:
            Path to the generated image
        """
        # Most frequent cause first
        tally = sorted(match.cause_tally.items(), key=lambda item: item[1], reverse=True)
        causes = [cause for cause, _ in tally]
        counts = [count for _, count in tally]
        positions = np.arange(len(causes))

        fig, ax = plt.subplots(figsize=(10, max(3, 0.5 * len(causes) + 1.5)))
        ax.barh(positions, counts, color=self.bar_color, edgecolor='black', linewidth=0.5)
        ax.set_yticks(positions)
        ax.set_yticklabels(causes)
        ax.invert_yaxis()
        ax.set_xlabel("Kills")

        for y, count in zip(positions, counts):
            ax.annotate(str(count), xy=(count, y), xytext=(3, 0), textcoords='offset points',
                        va='center', fontsize=8)

        if not causes:
            ax.text(0.5, 0.5, "No kills", transform=ax.transAxes, ha='center', va='center')

        ax.set_title(title or f"Game {game_number} - {match.total_kills} kills", fontsize=14, fontweight='bold')

        if output_path is None:
            output_filename = self.generate_timestamped_filename(f"kill_chart_game_{game_number}", "png")
            output_path = self.output_path_for(output_filename)
        else:
            output_path = self.resolve_path(output_path)
            self.ensure_dir(os.path.dirname(output_path))

        fig.savefig(output_path, dpi=self.output_dpi, bbox_inches='tight', facecolor='white')
        plt.close(fig)  # Close the figure to free memory

        logger.info(f"Chart saved to: {output_path}")
        return output_path

    def run(self, log_file: Optional[str] = None, game_number: Optional[int] = None,
            output_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Parse a log and plot its games.

        Args:
            log_file: Log file to parse (default: the configured log file)
            game_number: Only plot this 1-based game (default: all games)
            output_path: Output image path, only valid together with game_number

        Returns:
            Dictionary with the number of games and the generated files

        Raises:
            ValueError: If game_number is out of range
        """
        log_file = log_file or self.log_file
        resolved_path = self.resolve_path(log_file)
        logger.info(f"Parsing log file: {resolved_path}")
        session = parse_lines(read_log_lines(resolved_path))

        if game_number is not None:
            if not 1 <= game_number <= len(session):
                raise ValueError(f"Game {game_number} not found, the log has {len(session)} games")
            selected = [(game_number, session.matches[game_number - 1])]
        else:
            selected = list(enumerate(session, start=1))

        output_files: List[str] = []
        for number, match in selected:
            path = output_path if game_number is not None else None
            output_files.append(self.plot_match(match, number, output_path=path))

        return {
            "log_file": resolved_path,
            "game_count": len(session),
            "output_files": output_files,
        }


def main():
    """Main function for command line usage."""
    parser = argparse.ArgumentParser(
        description="Plot the kills by cause of death of each game in a Quake server log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plot every game of the configured log file
  %(prog)s

  # Plot game 3 of a specific log to a chosen file
  %(prog)s games.log --game 3 --output game3.png
        """
    )
    parser.add_argument('log_file', nargs='?',
                        help='Log file to parse. If not specified, uses the configured log file.')
    parser.add_argument('--game', type=int, help='Only plot this game number (1-based)')
    parser.add_argument('--output', help='Output image path (only with --game)')

    QuakeTool.add_standard_arguments(parser)
    args = parser.parse_args()

    if args.output and args.game is None:
        parser.error("--output can only be used together with --game")

    config = KillChartTool.load_config(profile=args.profile)
    tool = KillChartTool(config=config)

    try:
        result = tool.run(args.log_file, game_number=args.game, output_path=args.output)

        print(f"\nCharts generated for {len(result['output_files'])} of {result['game_count']} games:")
        for path in result['output_files']:
            print(f"  {path}")

        if args.console:
            logger.info(f"Kill chart completed: {result}")

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Error reading log: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
