"""records.py - The structured record handed to formatters."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .frames import Frame
from .severity import Severity

CUT_MARKER = "...(cut)"


@dataclass(frozen=True)
class LogRecord:
    """One log call, fully resolved.

    ``message`` is final: truncation and trimming happen before the record
    is built.
    """

    timestamp: datetime
    track: Optional[str]
    file_path_relative: str
    link: str
    function_name: str
    line: int
    column: int
    message: str
    level: Severity


def truncate(message: str, cut_after: Optional[int]) -> str:
    """Shorten ``message`` past ``cut_after`` characters and trim it.

    Example:
        >>> truncate("abcdef", 3)
        'abc...(cut)'
        >>> truncate("  abc  ", None)
        'abc'
    """
    if cut_after is not None and len(message) > cut_after:
        message = message[:cut_after] + CUT_MARKER
    return message.strip()


def relative_path(path: str, root: str) -> str:
    """Return the part of ``path`` after the first occurrence of ``root``.

    Paths that do not contain ``root`` come back unchanged.
    """
    if not root or root not in path:
        return path
    return path.split(root, 1)[1]


def build_record(
    frame: Frame,
    message: str,
    level: Severity,
    track: Optional[str] = None,
    path_root: str = "",
    timestamp: Optional[datetime] = None,
    function_name: Optional[str] = None,
) -> LogRecord:
    return LogRecord(
        timestamp=timestamp or datetime.now(),
        track=track,
        file_path_relative=relative_path(frame.file_path, path_root),
        link=frame.link,
        function_name=frame.function_name if function_name is None else function_name,
        line=frame.line,
        column=frame.column,
        message=message,
        level=level,
    )
