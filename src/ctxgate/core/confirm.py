# src/ctxgate/core/confirm.py
import sys
import logging
from abc import ABC, abstractmethod
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


class LineReader(ABC):
    @abstractmethod
    def read_line(self) -> str:
        """Returns one line of input. Raises EOFError/OSError when no input can be read."""


class StdinLineReader(LineReader):
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def read_line(self) -> str:
        stream = self.stream or sys.stdin
        line = stream.readline()
        # An answer cut off by end of input is not a complete reply
        if not line.endswith("\n"):
            raise EOFError("end of input")
        return line


class AnswerLineReader(LineReader):
    """Answers every prompt with a fixed response, without blocking."""

    def __init__(self, answer: str):
        self.answer = answer

    def read_line(self) -> str:
        return self.answer + "\n"


def prompt_for_confirmation(
    token_count: int,
    threshold: int,
    reader: Optional[LineReader] = None,
    log: Optional[logging.Logger] = None,
) -> bool:
    """
    Asks the user to approve a large request. Only an explicit "y"/"yes"
    approves; anything else, including a failed read, declines.
    """
    log = log or logger
    if threshold <= 0 or threshold > token_count:
        log.debug("No confirmation needed: threshold=%d, tokenCount=%d", threshold, token_count)
        return True

    log.info("Token count (%d) exceeds confirmation threshold (%d).", token_count, threshold)
    log.info("Do you want to proceed? [y/N]: ")

    reader = reader or StdinLineReader()
    try:
        response = reader.read_line()
    except (EOFError, OSError, ValueError) as e:
        # ValueError: reading from a closed file
        log.error("Error reading input: %s", e)
        return False

    log.debug("User confirmation response (raw): %r", response)
    response = response.strip().lower()
    approved = response in ("y", "yes")
    log.debug("User confirmation result: %s", approved)
    return approved
