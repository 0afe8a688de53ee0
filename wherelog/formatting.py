"""formatting.py - Turn a LogRecord into display text.

A formatter is any pure callable ``(record, previous) -> str``. The text
may span several lines; the line carrying ``record.link`` should stay
short or consoles stop rendering the link as clickable.
"""

from typing import Callable, Optional

from .records import LogRecord

Formatter = Callable[[LogRecord, Optional[LogRecord]], str]


def _track_prefix(record: LogRecord) -> str:
    return f"[{record.track}] " if record.track else ""


def default_formatter(record: LogRecord, previous: Optional[LogRecord] = None) -> str:
    """Header with track, time of day, function and link; then the message.

    With a track set, every message line repeats the ``[track]`` prefix so
    multi-line bodies stay grouped.

    Example::

        [Routing] 14:02:11.532211 fn:Router.push() file:///srv/app/src/router.py:88:9
        [Routing] opening /settings
    """
    prefix = _track_prefix(record)
    header = (
        f"{prefix}{record.timestamp.strftime('%H:%M:%S.%f')} "
        f"fn:{record.function_name} {record.link}"
    )
    body = "\n".join(f"{prefix}{line}" for line in record.message.split("\n"))
    return f"{header}\n{body}"


def compact_formatter(record: LogRecord, previous: Optional[LogRecord] = None) -> str:
    """Level code and relative path instead of the clock; notes the caller's caller."""
    header = f"{_track_prefix(record)}{record.level.code} {record.file_path_relative} fn:{record.function_name}"
    if previous is not None:
        header += f" <- {previous.function_name}"
    return f"{header} {record.link}\n{record.message}"
