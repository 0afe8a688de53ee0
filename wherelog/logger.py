"""logger.py - The print pipeline behind every level method.

Design contract:
    - A call that fails the level filter returns before the message is
      built or the stack is touched.
    - Otherwise the caller's location is resolved from the stack, the
      message is cut and trimmed, a LogRecord (plus one for the caller's
      caller) is built and rendered by the configured formatter.
    - In debug builds the rendered text is split into lines, each line is
      colorized and written to the sink; the line carrying the source link
      keeps the link inline only while the line stays short enough for a
      console to turn it into a clickable reference.
    - In release builds the rendered text goes straight to stdout.

Typical usage:
    from wherelog import Logger, Severity

    log = Logger(level=Severity.INFO, track="Checkout")

    def pay(order_id, amount):
        log.start(order_id, amount)             # " FN pay(42, 9.99)"
        log.info(lambda: f"charging {amount}")  # built only when emitted
        log.error("card declined")
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from .config import LoggerConfig
from .records import build_record, truncate
from .severity import Severity
from .stack import resolve_trace

Message = Union[str, Callable[[], object]]


def split_link_lines(text: str, link: str, width: int) -> List[Tuple[str, str]]:
    """Split rendered text into ``(text, link)`` display lines.

    ``link`` is non-empty only on the line that carries the source link.
    The rest of that line is right-stripped before measuring; when it
    would exceed ``width`` characters with the link attached, the link
    moves to a line of its own right after the text.

    Example:
        >>> split_link_lines("head file:///a.py:1:1\\nbody", "file:///a.py:1:1", 120)
        [('head', 'file:///a.py:1:1'), ('body', '')]
    """
    out: List[Tuple[str, str]] = []
    for line in text.split("\n"):
        if not link or link not in line:
            out.append((line, ""))
            continue
        rest = line.replace(link, "").rstrip()
        if len(rest) + len(link) > width:
            out.append((rest, ""))
            out.append(("", link))
        else:
            out.append((rest, link))
    return out


class Logger:
    """Console logger that tags every message with its call site.

    Args:
        config: Shared base configuration; defaults to ``LoggerConfig()``.
        **overrides: Fields replaced on top of ``config`` for this logger
            only (``level``, ``track``, ``formatter``, ``sink`` ...).

    Example:
        >>> log = Logger(level="debug", track="Demo")
        >>> log.debug(lambda: "hello")   # doctest: +SKIP
    """

    def __init__(self, config: Optional[LoggerConfig] = None, **overrides) -> None:
        config = config or LoggerConfig()
        self._config = replace(config, **overrides) if overrides else config

    @property
    def config(self) -> LoggerConfig:
        return self._config

    # ---------------------------------------------------------------------- #
    # Public interface
    # ---------------------------------------------------------------------- #

    def start(self, *args) -> None:
        """Log entry into the calling function with its arguments.

        Accepts the arguments either spread (``start(1, 2)``) or as one
        list (``start([1, 2])``). A single list or tuple argument is always
        spread: ``start((1, 2))`` logs ``fn(1, 2)``; wrap it to log the
        tuple itself (``start([(1, 2)])``).
        """
        if len(args) == 1 and isinstance(args[0], (list, tuple)):
            args = tuple(args[0])
        self._print(lambda: ", ".join(str(arg) for arg in args), Severity.START)

    def debug(self, message: Message) -> None:
        """The most granular messages, for digging into one feature."""
        self._print(message, Severity.DEBUG)

    def info(self, message: Message) -> None:
        """Information more general than debug."""
        self._print(message, Severity.INFO)

    def warning(self, message: Message) -> None:
        """Something a developer should look at."""
        self._print(message, Severity.WARNING)

    def success(self, message: Message) -> None:
        """An operation succeeded, e.g. data came back from a server."""
        self._print(message, Severity.SUCCESS)

    def error(self, message: Message) -> None:
        """An operation failed."""
        self._print(message, Severity.ERROR)

    def should_print(self, level: Severity) -> bool:
        """Level filter: forced, or a debug build at or above the threshold."""
        cfg = self._config
        return cfg.force_debug_messages or (cfg.is_debug_build and level >= cfg.level)

    # ---------------------------------------------------------------------- #
    # Private helpers
    # ---------------------------------------------------------------------- #

    def _print(self, message: Message, level: Severity) -> None:
        if not self.should_print(level):
            return
        cfg = self._config
        # resolve_trace must be called from here; the frame offset counts on it
        frame, previous_frame = resolve_trace(cfg.is_web_runtime, cfg.is_debug_build, cfg.stack_source)

        raw = message() if callable(message) else message
        if level is Severity.START:
            raw = f"{frame.function_name}({raw})"
        text = truncate(str(raw), cfg.cut_after)

        now = datetime.now()
        record = build_record(
            frame,
            text,
            level,
            track=cfg.track,
            path_root=cfg.path_root,
            timestamp=now,
            function_name=f"{frame.function_name}()",
        )
        previous = None
        if previous_frame is not None:
            previous = build_record(
                previous_frame,
                text,
                level,
                track=cfg.track,
                path_root=cfg.path_root,
                timestamp=now,
            )
        rendered = cfg.formatter(record, previous)

        if not cfg.is_debug_build:
            print(rendered)
            return

        for part, link in split_link_lines(rendered, record.link, cfg.link_width):
            if not link:
                line = level.colorize(part)
            elif part:
                line = f"{level.colorize(part)} {link}"
            else:
                line = link
            cfg.sink.write(line, level, now)
