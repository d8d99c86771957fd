"""
Errors raised while parsing Quake server logs.
"""

from typing import Optional


class LogParseError(ValueError):
    """
    Base class for log parsing errors.

    Attributes:
        line_number: 1-based number of the offending line, when known
        line: Text of the offending line, when known
    """

    def __init__(self, message: str, line: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.line_number = line_number

    def __str__(self):
        if self.line_number is not None:
            return f"line {self.line_number}: {self.message}"
        return self.message


class NoCurrentMatchError(LogParseError):
    """A player join or kill line appeared before any InitGame line."""


class MalformedPlayerLineError(LogParseError):
    """A ClientUserinfoChanged line has no backslash-delimited player name."""


class MalformedKillLineError(LogParseError):
    """A Kill line is missing its 'killed' or 'by' marker, or has them out of order."""
