"""
Console Output

Where the interpreter writes its lines. The real console window is not
part of this package; BufferedOutput keeps the lines for the caller and
mirrors them to the log.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class OutputLevel(str, Enum):
    """Kind of console line."""

    DEFAULT = "default"
    ERROR = "error"
    HELP = "help"


@dataclass(frozen=True)
class OutputLine:
    level: OutputLevel
    text: str


class ConsoleOutput(ABC):
    """Sink for console lines."""

    @abstractmethod
    def write(self, level: OutputLevel, text: str) -> None:
        pass

    def print(self, text: str) -> None:
        self.write(OutputLevel.DEFAULT, text)

    def error(self, text: str) -> None:
        self.write(OutputLevel.ERROR, text)

    def help(self, text: str) -> None:
        self.write(OutputLevel.HELP, text)


class BufferedOutput(ConsoleOutput):
    """Keeps every line written, in order."""

    def __init__(self):
        self.lines: List[OutputLine] = []

    def write(self, level: OutputLevel, text: str) -> None:
        self.lines.append(OutputLine(level, text))
        if level == OutputLevel.ERROR:
            logger.warning(text)
        else:
            logger.debug(text)

    def texts(self, level: OutputLevel = None) -> List[str]:
        """Text of all lines, or only of lines with the given level."""
        return [line.text for line in self.lines if level is None or line.level == level]

    @property
    def errors(self) -> List[str]:
        return self.texts(OutputLevel.ERROR)

    def clear(self) -> None:
        self.lines.clear()


class StreamOutput(ConsoleOutput):
    """Writes lines to a text stream; errors get an 'ERROR: ' prefix."""

    def __init__(self, stream):
        self._stream = stream

    def write(self, level: OutputLevel, text: str) -> None:
        if level == OutputLevel.ERROR and not text.startswith("ERROR"):
            text = f"ERROR: {text}"
        self._stream.write(text + "\n")
