"""wherelog/__init__.py - Public API for the wherelog package.

wherelog is a console logger that tags every message with the place it was
logged from: file, function, line and column, rendered as a link most
terminals and IDEs can open. Messages are filtered by level, cut when they
grow too long, colorized per level and written to stdout or to a named
stdlib logging channel.

Quick start:
    from wherelog import Logger, Severity

    log = Logger(level=Severity.INFO, track="Checkout")

    def pay(order_id, amount):
        log.start(order_id, amount)              # pay(42, 9.99)
        log.debug(lambda: expensive_dump())      # filtered out, never evaluated
        log.success(lambda: f"charged {amount}")

    # Share a default formatter between loggers
    from wherelog import LoggerConfig, compact_formatter
    base = LoggerConfig(formatter=compact_formatter, level="debug")
    routing = Logger(base, track="Routing")

    # Route output through the logging module instead of stdout
    from wherelog import ChannelSink
    log = Logger(sink=ChannelSink("myapp"))

Exported names:
    Logger:            The level methods and the print pipeline.
    LoggerConfig:      Immutable configuration shared between loggers.
    Severity:          Ordered log levels with codes and colors.
    Frame, parse_frame: Structured call site and the stack-line parser.
    resolve_trace:     Caller / caller's-caller lookup on the live stack.
    LogRecord:         What formatters receive.
    default_formatter, compact_formatter: Built-in formatters.
    Sink, StreamSink, ChannelSink: Output destinations.
"""

from .config import LoggerConfig
from .formatting import Formatter, compact_formatter, default_formatter
from .frames import SENTINEL_FRAME, Frame, parse_frame
from .logger import Logger
from .records import CUT_MARKER, LogRecord
from .severity import Severity
from .sinks import ChannelSink, Sink, StreamSink
from .stack import resolve_trace

__all__ = [
    "Logger",
    "LoggerConfig",
    "Severity",
    "Frame",
    "SENTINEL_FRAME",
    "parse_frame",
    "resolve_trace",
    "LogRecord",
    "CUT_MARKER",
    "Formatter",
    "default_formatter",
    "compact_formatter",
    "Sink",
    "StreamSink",
    "ChannelSink",
]
__version__ = "0.1.0"
