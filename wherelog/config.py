"""config.py - Immutable logger configuration.

A LoggerConfig is built once and only read afterwards. Sharing one config
between several loggers is how a process-wide default (say, a custom
formatter) is applied; each Logger can still override single fields:

    base = LoggerConfig(formatter=compact_formatter, level=Severity.INFO)
    routing = Logger(base, track="Routing")
    storage = Logger(base, track="Storage", level=Severity.WARNING)
"""

import os
import sys
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .formatting import Formatter, default_formatter
from .severity import Severity
from .sinks import Sink, StreamSink
from .stack import StackSource

LINK_WIDTH = 120

_TRUE = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LoggerConfig:
    """Everything the print pipeline reads.

    Attributes:
        level: Threshold; calls ranked below it are dropped.
        cut_after: Messages longer than this are cut, None disables.
        formatter: ``(record, previous) -> str`` used to render records.
        track: Label telling loggers apart, e.g. ``"Routing"``.
        force_debug_messages: Emit every call regardless of level and build.
        path_root: Paths are shown relative to the first occurrence of this.
        sink: Destination for rendered lines in debug builds.
        is_web_runtime: Running inside a browser (Pyodide).
        is_debug_build: Debug mode; release builds print only forced calls.
        link_width: Longest line that may still carry the link inline.
        stack_source: Override for the stack dump provider.
    """

    level: Severity = Severity.ERROR
    cut_after: Optional[int] = 800
    formatter: Formatter = default_formatter
    track: Optional[str] = None
    force_debug_messages: bool = False
    path_root: str = "src"
    sink: Sink = field(default_factory=StreamSink)
    is_web_runtime: bool = sys.platform == "emscripten"
    is_debug_build: bool = __debug__
    link_width: int = LINK_WIDTH
    stack_source: Optional[StackSource] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Severity.coerce(self.level))
        if self.cut_after is not None and self.cut_after < 0:
            raise ValueError(f"cut_after must be >= 0 or None, got {self.cut_after}")
        if self.link_width <= 0:
            raise ValueError(f"link_width must be > 0, got {self.link_width}")

    @classmethod
    def from_env(
        cls,
        prefix: str = "WHERELOG_",
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "LoggerConfig":
        """Build a config from ``<prefix>LEVEL``, ``CUT_AFTER``, ``TRACK``,
        ``FORCE_DEBUG`` and ``PATH_ROOT``; keyword overrides win.

        Raises:
            ValueError: On an unknown level or a non-numeric cutoff.
        """
        env = os.environ if environ is None else environ
        values = {}

        level = env.get(prefix + "LEVEL")
        if level:
            values["level"] = Severity.coerce(level)

        cut_after = env.get(prefix + "CUT_AFTER")
        if cut_after:
            if cut_after.strip().lower() == "none":
                values["cut_after"] = None
            else:
                try:
                    values["cut_after"] = int(cut_after)
                except ValueError as e:
                    raise ValueError(f"{prefix}CUT_AFTER must be an integer or 'none', got {cut_after!r}") from e

        track = env.get(prefix + "TRACK")
        if track:
            values["track"] = track

        force = env.get(prefix + "FORCE_DEBUG")
        if force:
            values["force_debug_messages"] = force.strip().lower() in _TRUE

        path_root = env.get(prefix + "PATH_ROOT")
        if path_root:
            values["path_root"] = path_root

        values.update(overrides)
        return cls(**values)
