"""sinks.py - Where rendered log lines end up.

This module defines the Sink base class and the two destinations a Logger
can write to:

    StreamSink   - plain writes to a text stream (default: sys.stdout).
    ChannelSink  - a named stdlib ``logging`` channel per level code, so
                   the output can be routed by whatever logging setup the
                   application already has.

Typical usage::

    from wherelog import Logger, ChannelSink

    log = Logger(track="Jobs", sink=ChannelSink("myapp"))
    log.info(lambda: "queue drained")   # -> logger "myapp.INF"
"""

import logging
import sys
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict

from .severity import Severity


class Sink(ABC):
    """Abstract base class for log line destinations.

    Example:
        >>> class ListSink(Sink):
        ...     def __init__(self):
        ...         self.lines = []
        ...     def write(self, line, severity, timestamp):
        ...         self.lines.append(line)
    """

    @abstractmethod
    def write(self, line: str, severity: Severity, timestamp: datetime) -> None:
        """Emit one already-colorized display line.

        Args:
            line: The text to emit, without trailing newline.
            severity: Level of the call that produced the line.
            timestamp: Moment the record was built.
        """


class StreamSink(Sink):
    """Write each line to a text stream.

    Attributes:
        _stream: The writable file-like object, or None to look up
            ``sys.stdout`` on every write (so redirection keeps working).
    """

    def __init__(self, stream=None) -> None:
        self._stream = stream

    def write(self, line: str, severity: Severity, timestamp: datetime) -> None:
        stream = self._stream or sys.stdout
        print(line, file=stream)


_STDLIB_LEVELS: Dict[Severity, int] = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.START: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.OFF: logging.NOTSET,
}


class ChannelSink(Sink):
    """Send each line to the stdlib logger ``<prefix>.<CODE>``.

    The level code becomes the channel tag; tag and timestamp travel in
    ``extra`` as ``wherelog_tag`` and ``wherelog_timestamp``.
    """

    def __init__(self, prefix: str = "wherelog") -> None:
        self._prefix = prefix

    def channel(self, severity: Severity) -> logging.Logger:
        tag = severity.code.strip() or severity.name
        return logging.getLogger(f"{self._prefix}.{tag}")

    def write(self, line: str, severity: Severity, timestamp: datetime) -> None:
        self.channel(severity).log(
            _STDLIB_LEVELS[severity],
            line,
            extra={
                "wherelog_tag": severity.code.strip(),
                "wherelog_timestamp": timestamp,
            },
        )
