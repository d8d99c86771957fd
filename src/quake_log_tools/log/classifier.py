"""
Line classification for Quake server logs.

Each log line is turned into exactly one event:

    20:37 InitGame: \\sv_floodProtect\\1\\...                      -> MatchStart
    20:38 ClientUserinfoChanged: 2 n\\Isgalamido\\t\\0\\...        -> PlayerJoin
    20:54 Kill: 1022 2 22: <world> killed Isgalamido by MOD_TRIGGER_HURT -> Kill

Anything else is Ignored. Rules are checked in order and the first marker
found in the line decides the event, so an InitGame line is a MatchStart
even if it also mentions another marker.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Union

from quake_log_tools.log.errors import MalformedKillLineError, MalformedPlayerLineError
from quake_log_tools.log.models import KillEvent

MATCH_START_MARKER = "InitGame:"
PLAYER_JOIN_MARKER = "ClientUserinfoChanged:"
KILL_MARKER = "Kill:"

# Timestamp, "Kill:", killer id, victim id and means id come before the payload
KILL_PREFIX_TOKENS = 5

# Bracketed client slot id such as <3> in front of a name
CLIENT_SLOT_PATTERN = re.compile(r'^<\d+>')


@dataclass(frozen=True)
class MatchStart:
    pass


@dataclass(frozen=True)
class PlayerJoin:
    name: str


@dataclass(frozen=True)
class Ignored:
    pass


Event = Union[MatchStart, PlayerJoin, KillEvent, Ignored]


class ClassificationRule(NamedTuple):
    """A marker substring and the function that builds the event for a matching line."""
    marker: str
    extract: Callable[[str], Event]

    def matches(self, line: str) -> bool:
        return self.marker in line


def extract_player(line: str) -> str:
    """
    Extract the player name from a ClientUserinfoChanged line.

    The name is the second backslash-delimited field.

    Raises:
        MalformedPlayerLineError: If the line has no backslash or the name field is empty
    """
    fields = line.split("\\")
    if len(fields) < 2 or not fields[1]:
        raise MalformedPlayerLineError(f"No player name field in line: {line!r}", line=line)
    return fields[1]


def strip_client_slot(name: str) -> str:
    """Drop a leading <n> client slot id, then any remaining angle brackets, from a name."""
    return CLIENT_SLOT_PATTERN.sub("", name).replace("<", "").replace(">", "")


def extract_kill_details(line: str) -> KillEvent:
    """
    Extract killer, victim and cause of death from a Kill line.

    The killer is everything before the first "killed" token, the victim is
    everything between it and the last "by" token. The cause is taken as the
    final token of the line, so a cause made of several words is cut to its
    last word.

    Raises:
        MalformedKillLineError: If "killed" or "by" is missing or out of order
    """
    parts = line.split()[KILL_PREFIX_TOKENS:]

    if "killed" not in parts or "by" not in parts:
        raise MalformedKillLineError(f"Kill line without 'killed ... by' markers: {line!r}", line=line)

    killed_index = parts.index("killed")
    by_index = len(parts) - 1 - parts[::-1].index("by")
    if killed_index >= by_index:
        raise MalformedKillLineError(f"'by' appears before 'killed' in kill line: {line!r}", line=line)

    killer = strip_client_slot(" ".join(parts[:killed_index]))
    victim = " ".join(parts[killed_index + 1:by_index])
    cause = parts[-1]
    return KillEvent(killer, victim, cause)


class LineClassifier:
    """
    Turns raw log lines into events using an ordered list of rules.
    """

    RULES: List[ClassificationRule] = [
        ClassificationRule(MATCH_START_MARKER, lambda line: MatchStart()),
        ClassificationRule(PLAYER_JOIN_MARKER, lambda line: PlayerJoin(extract_player(line))),
        ClassificationRule(KILL_MARKER, extract_kill_details),
    ]

    def __init__(self, rules: Optional[List[ClassificationRule]] = None):
        self.rules = list(rules) if rules is not None else list(self.RULES)

    def classify(self, line: str) -> Event:
        """
        Classify a single line.

        Args:
            line: One log line, with or without its line terminator

        Returns:
            The event produced by the first rule whose marker is in the line,
            or Ignored if none is
        """
        line = line.rstrip("\r\n")
        for rule in self.rules:
            if rule.matches(line):
                return rule.extract(line)
        return Ignored()


def classify_line(line: str) -> Event:
    """Classify a line with the default rules."""
    return _default_classifier.classify(line)


_default_classifier = LineClassifier()
