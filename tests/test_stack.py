"""test_stack.py - Unit tests for stack capture and the trace resolver.

Covers:
    - Offset table per runtime
    - resolve_trace() picks dump[offset] and dump[offset + 1]
    - No previous frame when the dump ends at the caller
    - A dump shallower than the offset degrades to SENTINEL_FRAME
    - capture_native_stack() renders real interpreter frames in native shape
"""

import logging
from pathlib import Path

import pytest

from wherelog.frames import SENTINEL_FRAME, parse_frame
from wherelog.stack import FRAME_OFFSETS, capture_native_stack, frame_offset, resolve_trace

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

NATIVE_DUMP = "\n".join(
    [
        "#0      resolve_trace (file:///srv/shop/.venv/wherelog/stack.py:90:5)",
        "#1      Logger._print (file:///srv/shop/.venv/wherelog/logger.py:132:9)",
        "#2      Logger.info (file:///srv/shop/.venv/wherelog/logger.py:104:9)",
        "#3      Checkout.pay (file:///srv/shop/src/checkout/pay.py:42:9)",
        "#4      main (file:///srv/shop/src/main.py:7:5)",
        "",
    ]
)

WEB_DEBUG_DUMP = "\n".join(
    [
        "Error",
        "    at resolve (http://localhost:8000/wherelog.js:1:1)",
        "    at print (http://localhost:8000/wherelog.js:2:1)",
        "    at info (http://localhost:8000/wherelog.js:3:1)",
        "    at Checkout.pay (http://localhost:8000/app.js:42:9)",
        "    at main (http://localhost:8000/app.js:7:5)",
    ]
)

WEB_RELEASE_DUMP = "\n".join(
    [
        "a@http://localhost:8000/main.js:1:1",
        "b@http://localhost:8000/main.js:1:2",
        "c@http://localhost:8000/main.js:1:3",
        "d@http://localhost:8000/main.js:1:4",
        "e@http://localhost:8000/main.js:1:5",
        "f@http://localhost:8000/main.js:1:6",
        "pay@http://localhost:8000/main.js:40:2",
        "main@http://localhost:8000/main.js:50:3",
    ]
)


def _source(dump):
    return lambda: dump


# ---------------------------------------------------------------------------
# Offsets
# ---------------------------------------------------------------------------


class TestFrameOffset:
    def test_offset_table(self):
        assert frame_offset(False, True) == 3
        assert frame_offset(False, False) == 3
        assert frame_offset(True, True) == 4
        assert frame_offset(True, False) == 6

    def test_every_flag_combination_is_covered(self):
        assert set(FRAME_OFFSETS) == {(False, True), (False, False), (True, True), (True, False)}


# ---------------------------------------------------------------------------
# resolve_trace()
# ---------------------------------------------------------------------------


class TestResolveTrace:
    def test_native_picks_caller_and_callers_caller(self):
        current, previous = resolve_trace(False, True, _source(NATIVE_DUMP))
        assert current.function_name == "Checkout.pay"
        assert current.file_path == "/srv/shop/src/checkout/pay.py"
        assert (current.line, current.column) == (42, 9)
        assert previous.function_name == "main"

    def test_web_debug_offset(self):
        current, previous = resolve_trace(True, True, _source(WEB_DEBUG_DUMP))
        assert current.function_name == "Checkout.pay"
        assert current.link == "http://localhost:8000/app.js:42:9"
        assert previous.function_name == "main"

    def test_web_release_offset(self):
        current, previous = resolve_trace(True, False, _source(WEB_RELEASE_DUMP))
        assert (current.function_name, current.line) == ("pay", 40)
        assert (previous.function_name, previous.line) == ("main", 50)

    def test_no_previous_frame_at_end_of_dump(self):
        dump = "\n".join(NATIVE_DUMP.splitlines()[:4])
        current, previous = resolve_trace(False, True, _source(dump))
        assert current.function_name == "Checkout.pay"
        assert previous is None

    def test_shallow_dump_degrades_to_sentinel(self, caplog):
        caplog.set_level(logging.DEBUG, logger="wherelog.stack")
        current, previous = resolve_trace(False, True, _source("#0      resolve_trace (file:///a.py:1:1)"))
        assert current is SENTINEL_FRAME
        assert previous is None
        assert "caller expected at #3" in caplog.text

    def test_unreadable_caller_line_degrades_to_sentinel(self):
        dump = NATIVE_DUMP.replace("#3      Checkout.pay (file:///srv/shop/src/checkout/pay.py:42:9)", "???")
        current, previous = resolve_trace(False, True, _source(dump))
        assert current is SENTINEL_FRAME
        assert previous.function_name == "main"

    def test_source_is_called_once_per_resolution(self):
        calls = []

        def source():
            calls.append(1)
            return NATIVE_DUMP

        resolve_trace(False, True, source)
        assert len(calls) == 1


# ---------------------------------------------------------------------------
# capture_native_stack()
# ---------------------------------------------------------------------------


class TestCaptureNativeStack:
    def test_first_line_is_the_caller(self):
        first = capture_native_stack().splitlines()[0]
        assert first.startswith("#0 ")
        frame = parse_frame(first)
        assert frame.function_name.endswith("test_first_line_is_the_caller")
        assert frame.file_path == str(Path(__file__).resolve()) or frame.file_path == __file__
        assert frame.line > 0
        assert frame.column > 0

    def test_link_points_at_this_file(self):
        frame = parse_frame(capture_native_stack().splitlines()[0])
        assert frame.link.startswith(Path(__file__).as_uri())

    def test_nested_function_keeps_owner_name(self):
        def outer():
            return capture_native_stack()

        frame = parse_frame(outer().splitlines()[0])
        assert frame.function_name.endswith("outer")

    def test_lambda_folds_into_enclosing_function(self):
        dump = (lambda: capture_native_stack())()
        frame = parse_frame(dump.splitlines()[0])
        assert frame.function_name.endswith("test_lambda_folds_into_enclosing_function")

    def test_frames_are_numbered_innermost_first(self):
        lines = capture_native_stack().splitlines()
        assert len(lines) > 1
        assert [line.split()[0] for line in lines[:3]] == ["#0", "#1", "#2"]

    def test_compiled_name_with_spaces_keeps_call_site(self):
        """Pseudo-filenames such as doctest names survive as one token."""
        namespace = {"capture": capture_native_stack}
        exec(compile("dump = capture()", "<doctest shop.pay[0]>", "exec"), namespace)
        first = namespace["dump"].splitlines()[0]
        frame = parse_frame(first)
        assert frame.file_path == "<doctest shop.pay[0]>"
        assert frame.function_name == "<module>"
        assert frame.line == 1
        assert " " not in first.split("(", 1)[1]
