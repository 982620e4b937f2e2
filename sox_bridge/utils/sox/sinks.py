"""Line sinks: receivers for the output lines of one sox invocation.

The process runner delivers every line from a single thread, so sinks keep
plain instance state without locking. A sink belongs to exactly one
invocation and is discarded afterwards.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..logging_utils import get_logger

log = get_logger(__name__)


class LineSink(ABC):
    """Receives captured output lines, then the exit code exactly once."""

    @abstractmethod
    def on_line(self, line: str) -> None:
        """Handle one output line (newline stripped)."""
        pass

    @abstractmethod
    def on_complete(self, exit_code: int) -> None:
        """Handle process completion. No line follows this call."""
        pass


class LoggingSink(LineSink):
    """Logs every line and the final exit code."""

    def __init__(self, name: str = "sox"):
        self.name = name

    def on_line(self, line: str) -> None:
        log.info("%s: %s", self.name, line)

    def on_complete(self, exit_code: int) -> None:
        log.info("%s: got return value %d", self.name, exit_code)


class RecordingSink(LoggingSink):
    """Logs like LoggingSink and also keeps every line and the exit code.

    Used for operations whose error result quotes sox's own output.
    """

    def __init__(self, name: str = "sox"):
        super().__init__(name)
        self.lines: list[str] = []
        self.exit_code: Optional[int] = None

    def on_line(self, line: str) -> None:
        super().on_line(line)
        self.lines.append(line)

    def on_complete(self, exit_code: int) -> None:
        super().on_complete(exit_code)
        self.exit_code = exit_code


class LengthParser(LineSink):
    """Extracts the duration from `sox <file> -n stat` output.

    The stat effect prints a line such as ``Length (seconds):  12.340000``.
    Lines not starting with ``Length`` are ignored. A line whose value does
    not parse as a float is logged and leaves the duration untouched.
    """

    FIELD = "Length"

    def __init__(self):
        self.length: Optional[float] = None
        self.exit_code: Optional[int] = None

    def on_line(self, line: str) -> None:
        log.debug("sox: %s", line)
        if not line.startswith(self.FIELD):
            return

        parts = line.split(":")
        if len(parts) != 2:
            return

        value = parts[1].strip()
        try:
            self.length = float(value)
        except ValueError:
            log.warning("Could not parse sox length value %r", value)

    def on_complete(self, exit_code: int) -> None:
        self.exit_code = exit_code
