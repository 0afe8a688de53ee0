"""severity.py - Ordered log levels for wherelog.

Severity is compared by declaration order, not by how risky a message is:
``START`` sits between ``INFO`` and ``SUCCESS`` so that function-entry
lines survive an ``INFO`` threshold but are hidden by ``SUCCESS``.

Each level carries a fixed 3-character code used in headers and channel
names, and a color transform looked up from a fixed table.
"""

from enum import IntEnum
from typing import Callable, Dict, Union

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()


def _paint(color: str) -> Callable[[str], str]:
    def colorize(text: str) -> str:
        return f"{color}{text}{Style.RESET_ALL}"

    return colorize


def _identity(text: str) -> str:
    return text


class Severity(IntEnum):
    """Log levels in declaration order.

    The integer value is the rank, so ordinary comparisons
    (``Severity.ERROR >= Severity.INFO``) implement the filter rule.

    Example:
        >>> Severity.START > Severity.INFO
        True
        >>> Severity.START.code
        ' FN'
    """

    DEBUG = 0
    INFO = 1
    START = 2
    SUCCESS = 3
    WARNING = 4
    ERROR = 5
    OFF = 6

    @property
    def rank(self) -> int:
        return int(self)

    @property
    def code(self) -> str:
        """Fixed 3-character display code (empty for ``OFF``)."""
        return _CODES[self]

    def colorize(self, text: str) -> str:
        """Apply this level's color to ``text``. ``OFF`` leaves it untouched."""
        return _COLORS[self](text)

    @classmethod
    def coerce(cls, value: Union[str, int, "Severity"]) -> "Severity":
        """Parse a level from a name (``"warning"``), a code (``"WRN"``) or a rank.

        Raises:
            ValueError: If ``value`` does not name a level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as e:
                raise ValueError(f"Unknown log level: {value}") from e
        key = value.strip().upper()
        if key in cls.__members__:
            return cls[key]
        for level, code in _CODES.items():
            if code and code.strip() == key:
                return level
        raise ValueError(f"Unknown log level: {value}")

    def __str__(self) -> str:
        return self.code


_CODES: Dict[Severity, str] = {
    Severity.DEBUG: "DBG",
    Severity.INFO: "INF",
    Severity.START: " FN",
    Severity.SUCCESS: "SCC",
    Severity.WARNING: "WRN",
    Severity.ERROR: "ERR",
    Severity.OFF: "",
}

_COLORS: Dict[Severity, Callable[[str], str]] = {
    Severity.DEBUG: _paint(Fore.BLUE),
    Severity.INFO: _paint(Fore.CYAN),
    Severity.START: _paint(Fore.WHITE),
    Severity.SUCCESS: _paint(Fore.GREEN),
    Severity.WARNING: _paint(Fore.YELLOW),
    Severity.ERROR: _paint(Fore.RED),
    Severity.OFF: _identity,
}
