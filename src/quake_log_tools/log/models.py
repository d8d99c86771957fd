"""
Data model for parsed Quake logs.

A ParseSession holds every Match found in one log, in the order the
InitGame lines appeared, plus the match currently being filled.
"""

from typing import Dict, Any, List, NamedTuple, Optional, Tuple

WORLD_KILLER = "world"


def increment(mapping: Dict[str, int], key: str, delta: int = 1) -> int:
    """
    Add delta to mapping[key], treating a missing key as zero.

    Args:
        mapping: Dictionary of counters
        key: Counter name
        delta: Amount to add (may be negative)

    Returns:
        The new value stored under key
    """
    mapping[key] = mapping.get(key, 0) + delta
    return mapping[key]


class KillEvent(NamedTuple):
    """One parsed kill line."""
    killer: str
    victim: str
    cause: str

    @property
    def is_world_kill(self) -> bool:
        return self.killer == WORLD_KILLER

    @property
    def is_suicide(self) -> bool:
        return self.killer == self.victim


class Match:
    """
    Statistics for one game session.

    Attributes:
        total_kills: Number of kill lines seen in this match, world kills and suicides included
        players: Player names in first-join order, without duplicates
        scores: Player name to score; kills add one, deaths to the world or to oneself subtract one
        cause_tally: Cause of death to number of kills
    """

    def __init__(self):
        self.total_kills = 0
        self.players: List[str] = []
        self.scores: Dict[str, int] = {}
        self.cause_tally: Dict[str, int] = {}

    def add_player(self, name: str) -> bool:
        """
        Register a player, ignoring repeated joins.

        Returns:
            True if the player was new to this match
        """
        if name in self.players:
            return False
        self.players.append(name)
        return True

    def record_kill(self, kill: KillEvent) -> None:
        """
        Apply one kill to the match counters.

        World kills and suicides cost the victim a point. Any other kill
        gives the killer a point and leaves the victim's score alone.
        """
        self.total_kills += 1
        if kill.is_world_kill or kill.is_suicide:
            increment(self.scores, kill.victim, -1)
        else:
            increment(self.scores, kill.killer)
        increment(self.cause_tally, kill.cause)

    def ranking(self) -> List[Tuple[str, int]]:
        """Return (player, score) pairs, best score first."""
        return sorted(self.scores.items(), key=lambda item: item[1], reverse=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_kills": self.total_kills,
            "players": list(self.players),
            "kills": dict(self.scores),
            "kills_by_means": dict(self.cause_tally),
        }

    def __repr__(self):
        return (f"Match(total_kills={self.total_kills}, players={self.players!r}, "
                f"scores={self.scores!r}, cause_tally={self.cause_tally!r})")


class ParseSession:
    """
    All matches parsed from one log.

    Attributes:
        matches: Matches in creation order
        current: The match receiving events, or None before the first InitGame line
    """

    def __init__(self):
        self.matches: List[Match] = []
        self.current: Optional[Match] = None

    @property
    def has_current_match(self) -> bool:
        return self.current is not None

    def start_match(self) -> Match:
        match = Match()
        self.matches.append(match)
        self.current = match
        return match

    def __len__(self):
        return len(self.matches)

    def __iter__(self):
        return iter(self.matches)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Return the matches keyed as game_1, game_2, ..."""
        return {f"game_{index}": match.to_dict() for index, match in enumerate(self.matches, start=1)}
