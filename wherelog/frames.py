"""frames.py - Turn one line of a stack dump into a structured call site.

A stack dump is plain text, one frame per line, innermost frame first. Its
exact shape depends on where the code runs, so every shape gets its own
parser strategy and the rest of the package only ever sees ``Frame``
values:

    native        ``#3      Worker.run (file:///srv/app/src/jobs/worker.py:42:9)``
    web debug     ``    at Worker.run (http://localhost:8000/app.js:42:9)``
    web release   ``run@http://localhost:8000/app.js:42:9``
                  ``    at http://localhost:8000/app.js:42:9``

A line that cannot be read (and the async suspension marker that some
runtimes print between awaited frames) becomes ``SENTINEL_FRAME``; parsing
never raises.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Tuple
from urllib.parse import unquote

ASYNC_SUSPENSION_MARKER = "<asynchronous suspension>"
ANONYMOUS = "anonymous"

# Tokens the runtimes use for closures without a name.
_CLOSURE_TOKENS = ("<anonymous closure>", "<anonymous, closure>", "<lambda>")
_WEB_ANONYMOUS_TOKEN = "<anonymous>"
_NOISE_TOKENS = ("", "new")


@dataclass(frozen=True)
class Frame:
    """One call-stack location.

    Attributes:
        file_path: Path of the source file (decoded, without URI scheme).
        link: The location token as printed in the dump, e.g.
            ``file:///srv/app/main.py:12:5``. Consoles render it as a link.
        function_name: Name of the function, closures folded into their owner.
        line: 1-based line number, 0 when unknown.
        column: 1-based column number, 0 when unknown.
    """

    file_path: str
    link: str
    function_name: str
    line: int = 0
    column: int = 0

    @property
    def is_sentinel(self) -> bool:
        return self == SENTINEL_FRAME


SENTINEL_FRAME = Frame(file_path="?", link="", function_name="?", line=0, column=0)


def _to_uint(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        return 0
    return value if value >= 0 else 0


def _split_location(location: str) -> Tuple[str, int, int]:
    """Split ``<where>:<line>:<column>`` from the right.

    Splitting from the right keeps drive letters and URL ports inside the
    ``<where>`` part.
    """
    where, line, column = location.rsplit(":", 2)
    return where, _to_uint(line), _to_uint(column)


def _strip_scheme(where: str) -> str:
    if where.startswith("file://"):
        where = where[len("file://"):]
    return unquote(where)


def _clean_function_name(token: str) -> str:
    name = token.replace(".<locals>", "")
    name = name.split("." + ANONYMOUS)[0]
    return name.split("(")[0] or ANONYMOUS


class FrameParser(ABC):
    """Strategy for one stack-dump shape.

    Subclasses implement ``read()`` and are free to raise ``ValueError`` or
    ``IndexError`` on anything they do not understand; ``parse()`` turns
    those into ``SENTINEL_FRAME``.
    """

    def parse(self, line: str) -> Frame:
        if line.strip() == ASYNC_SUSPENSION_MARKER:
            return SENTINEL_FRAME
        try:
            return self.read(self.tokenize(line))
        except (ValueError, IndexError):
            return SENTINEL_FRAME

    def tokenize(self, line: str) -> List[str]:
        for token in _CLOSURE_TOKENS:
            line = line.replace(token, ANONYMOUS)
        return [part for part in line.split() if part not in _NOISE_TOKENS]

    @abstractmethod
    def read(self, tokens: List[str]) -> Frame:
        """Build a Frame from the whitespace-separated tokens of one line."""


class NativeFrameParser(FrameParser):
    """``#<n> <function> (<file-uri>:<line>:<column>)``"""

    def read(self, tokens: List[str]) -> Frame:
        link = tokens[2].strip("()")
        where, line, column = _split_location(link)
        return Frame(
            file_path=_strip_scheme(where),
            link=link,
            function_name=_clean_function_name(tokens[1]),
            line=line,
            column=column,
        )


class _WebFrameParser(FrameParser):
    def tokenize(self, line: str) -> List[str]:
        line = line.replace(_WEB_ANONYMOUS_TOKEN, ANONYMOUS)
        tokens = super().tokenize(line)
        if tokens and tokens[0] == "at":
            tokens = tokens[1:]
        # awaited frames: "at async <function> (...)"
        if len(tokens) > 1 and tokens[0] == "async":
            tokens = tokens[1:]
        return tokens

    def _frame(self, function: str, link: str) -> Frame:
        where, line, column = _split_location(link)
        if not where:
            raise ValueError(f"no source in {link!r}")
        return Frame(
            file_path=_strip_scheme(where),
            link=link,
            function_name=_clean_function_name(function),
            line=line,
            column=column,
        )


class WebDebugFrameParser(_WebFrameParser):
    """``at <function> (<url>:<line>:<column>)``"""

    def read(self, tokens: List[str]) -> Frame:
        location = tokens[-1]
        if len(tokens) > 1:
            if not (location.startswith("(") and location.endswith(")")):
                raise ValueError(f"expected parenthesised location, got {location!r}")
            function = tokens[0]
        else:
            function = ANONYMOUS
        return self._frame(function, location.strip("()"))


class WebReleaseFrameParser(_WebFrameParser):
    """``<function>@<url>:<line>:<column>`` or ``at <url>:<line>:<column>``"""

    def read(self, tokens: List[str]) -> Frame:
        location = tokens[-1]
        if location.startswith("(") or location.endswith(")"):
            raise ValueError(f"unexpected parenthesised location {location!r}")
        function = ANONYMOUS
        if "@" in location:
            function, location = location.split("@", 1)
        elif len(tokens) > 1:
            function = tokens[-2]
        return self._frame(function or ANONYMOUS, location)


_PARSERS: Dict[Tuple[bool, bool], FrameParser] = {
    (False, True): NativeFrameParser(),
    (False, False): NativeFrameParser(),
    (True, True): WebDebugFrameParser(),
    (True, False): WebReleaseFrameParser(),
}


def parser_for(is_web_runtime: bool, is_debug_build: bool) -> FrameParser:
    """Return the parser strategy for the given runtime flags."""
    return _PARSERS[(bool(is_web_runtime), bool(is_debug_build))]


def parse_frame(line: str, is_web_runtime: bool = False, is_debug_build: bool = True) -> Frame:
    """Parse one stack-dump line; never raises.

    Example:
        >>> frame = parse_frame("#3      main (file:///srv/app/src/main.py:12:5)")
        >>> frame.file_path, frame.function_name, frame.line, frame.column
        ('/srv/app/src/main.py', 'main', 12, 5)
    """
    return parser_for(is_web_runtime, is_debug_build).parse(line)
