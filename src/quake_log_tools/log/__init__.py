"""
Quake Log Parsing

This package turns Quake server log lines into per-match statistics:
line classification, match accumulation and the resulting data model.
"""

__all__ = ['accumulator', 'classifier', 'errors', 'models', 'reader']

from .accumulator import MatchAccumulator, parse_lines
from .classifier import LineClassifier, classify_line
from .errors import LogParseError, MalformedKillLineError, MalformedPlayerLineError, NoCurrentMatchError
from .models import KillEvent, Match, ParseSession
from .reader import read_log_lines
