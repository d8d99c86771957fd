"""
Match accumulation for Quake server logs.

MatchAccumulator applies classified events to a ParseSession. An InitGame
line opens a new match; join and kill lines update the match opened last.
"""

import logging
from typing import Iterable, Optional

from quake_log_tools.log.classifier import Event, Ignored, LineClassifier, MatchStart, PlayerJoin
from quake_log_tools.log.errors import LogParseError, NoCurrentMatchError
from quake_log_tools.log.models import KillEvent, Match, ParseSession

logger = logging.getLogger(__name__)


class MatchAccumulator:
    """
    Applies events to a ParseSession.

    The session starts without a current match. Join and kill events that
    arrive before the first MatchStart raise NoCurrentMatchError instead of
    being dropped or opening an implicit match.
    """

    def __init__(self, session: Optional[ParseSession] = None):
        self.session = session if session is not None else ParseSession()

    def _require_current_match(self, event: Event) -> Match:
        if not self.session.has_current_match:
            raise NoCurrentMatchError(f"{type(event).__name__} event before any InitGame line")
        return self.session.current

    def apply(self, event: Event) -> None:
        """
        Apply one event to the session.

        Args:
            event: Event produced by LineClassifier

        Raises:
            NoCurrentMatchError: If a join or kill arrives before any match start
        """
        if isinstance(event, MatchStart):
            self.session.start_match()
            logger.debug(f"Match {len(self.session)} started")
        elif isinstance(event, PlayerJoin):
            match = self._require_current_match(event)
            match.add_player(event.name)
        elif isinstance(event, KillEvent):
            match = self._require_current_match(event)
            match.record_kill(event)
        elif isinstance(event, Ignored):
            pass
        else:
            raise TypeError(f"Unsupported event: {event!r}")


def parse_lines(lines: Iterable[str], classifier: Optional[LineClassifier] = None) -> ParseSession:
    """
    Parse a sequence of log lines into a ParseSession.

    Lines are consumed lazily and strictly in order; each one is classified
    and applied before the next is read.

    Args:
        lines: Log lines, e.g. an open file
        classifier: Classifier to use (default rules if None)

    Returns:
        The session holding every match found

    Raises:
        LogParseError: On the first malformed line or event outside a match.
            line_number and line are set to the offending line.
    """
    classifier = classifier or LineClassifier()
    accumulator = MatchAccumulator()

    for line_number, line in enumerate(lines, 1):
        try:
            accumulator.apply(classifier.classify(line))
        except LogParseError as e:
            e.line_number = line_number
            e.line = line.rstrip("\r\n")
            raise

    return accumulator.session
