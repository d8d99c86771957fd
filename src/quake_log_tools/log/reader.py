"""
Lazy line source for log files.
"""

import logging
from typing import Iterator

logger = logging.getLogger(__name__)


def read_log_lines(file_path: str, encoding: str = 'utf-8') -> Iterator[str]:
    """
    Yield the lines of a log file one at a time.

    Undecodable bytes are replaced rather than aborting the read. Errors
    opening or reading the file propagate to the caller.

    Args:
        file_path: Path to the log file
        encoding: Text encoding of the file

    Yields:
        Each line, including its terminator
    """
    logger.debug(f"Reading log lines from {file_path}")
    with open(file_path, 'r', encoding=encoding, errors='replace') as file:
        for line in file:
            yield line
