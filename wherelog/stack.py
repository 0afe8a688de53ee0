"""stack.py - Capture the running stack and pick out the logger's caller.

The resolver works on a text dump (one frame per line, innermost first)
so that every runtime is handled the same way: the native source renders
the interpreter's own frames in the native dump shape, the browser source
reads the JavaScript engine's ``Error().stack``.

Where the caller sits in the dump is a fixed offset: the resolver, the
logger's print pipeline and the public level method always come first,
and browser builds add engine wrapper frames on top. The offsets below
hold only as long as that call chain stays exactly as it is.
"""

import inspect
import itertools
import logging
import os
import traceback
from pathlib import Path
from types import FrameType
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import quote

from .frames import SENTINEL_FRAME, Frame, parse_frame

_log = logging.getLogger(__name__)

StackSource = Callable[[], str]

# (is_web_runtime, is_debug_build) -> index of the logger's caller in the dump
FRAME_OFFSETS: Dict[Tuple[bool, bool], int] = {
    (False, True): 3,
    (False, False): 3,
    (True, True): 4,
    (True, False): 6,
}


def frame_offset(is_web_runtime: bool, is_debug_build: bool) -> int:
    return FRAME_OFFSETS[(bool(is_web_runtime), bool(is_debug_build))]


def _file_uri(filename: str) -> str:
    if os.path.isabs(filename):
        return Path(filename).as_uri()
    # names like "<doctest mod[0]>" must stay a single token
    return quote(filename)


def _column(frame: FrameType) -> int:
    if frame.f_lasti < 0:
        return 0
    # one co_positions() entry per 2-byte instruction
    entry = next(itertools.islice(frame.f_code.co_positions(), frame.f_lasti // 2, None), None)
    if entry is None or entry[2] is None:
        return 0
    return entry[2] + 1


def capture_native_stack() -> str:
    """Render the interpreter stack as a native dump.

    The first line is the frame that called this function, so when the
    resolver calls it the resolver itself is ``#0``.
    """
    caller = inspect.currentframe().f_back
    lines = []
    for index, (frame, lineno) in enumerate(traceback.walk_stack(caller)):
        code = frame.f_code
        location = f"{_file_uri(code.co_filename)}:{lineno or 0}:{_column(frame)}"
        lines.append(f"#{index:<6} {code.co_qualname} ({location})")
    return "\n".join(lines)


def capture_browser_stack() -> str:
    """Read the JavaScript stack when running under Pyodide."""
    from js import Error  # provided by the Pyodide runtime

    return str(Error.new().stack)


def default_stack_source(is_web_runtime: bool) -> StackSource:
    return capture_browser_stack if is_web_runtime else capture_native_stack


def resolve_trace(
    is_web_runtime: bool = False,
    is_debug_build: bool = True,
    stack_source: Optional[StackSource] = None,
) -> Tuple[Frame, Optional[Frame]]:
    """Return ``(caller, caller's caller)`` for the code that invoked the logger.

    Must be called directly from the logger's print pipeline; the offset
    table counts this function's frame.

    When the dump is shallower than the offset (a log call from the very
    top of the program, or an unexpected stack source) the caller degrades
    to ``SENTINEL_FRAME`` and there is no previous frame.
    """
    source = stack_source or default_stack_source(is_web_runtime)
    dump: List[str] = [line for line in source().splitlines() if line.strip()]
    offset = frame_offset(is_web_runtime, is_debug_build)

    if offset >= len(dump):
        _log.debug("stack dump has %d frames, caller expected at #%d", len(dump), offset)
        return SENTINEL_FRAME, None

    current = parse_frame(dump[offset], is_web_runtime, is_debug_build)
    previous = None
    if offset + 1 < len(dump):
        previous = parse_frame(dump[offset + 1], is_web_runtime, is_debug_build)
    return current, previous
