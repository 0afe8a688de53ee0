"""examples/custom_sink_usage.py - Implement and plug in a custom sink.

Shows how to subclass Sink to send display lines somewhere other than
stdout: an in-memory collector (handy in tests) and the stdlib logging
channel that ships with wherelog.

Run:
    python examples/custom_sink_usage.py
"""

import logging
from datetime import datetime
from typing import List, Tuple

from wherelog import ChannelSink, Logger, Severity, Sink


# ---------------------------------------------------------------------------
# Custom Sink: In-Memory Collector
# ---------------------------------------------------------------------------


class MemorySink(Sink):
    """Keeps every emitted line in memory.

    Attributes:
        lines: ``(severity, line)`` pairs in emission order.
    """

    def __init__(self) -> None:
        self.lines: List[Tuple[Severity, str]] = []

    def write(self, line: str, severity: Severity, timestamp: datetime) -> None:
        self.lines.append((severity, line))


def checkout(log: Logger, cart: list) -> None:
    log.start(cart)
    if not cart:
        log.warning("empty cart")
        return
    log.success(lambda: f"{len(cart)} item(s) checked out")


if __name__ == "__main__":
    # --- Demo 1: MemorySink ---
    memory = MemorySink()
    log = Logger(level=Severity.DEBUG, track="Cart", sink=memory)
    checkout(log, ["book", "lamp"])
    checkout(log, [])
    print(f"Captured {len(memory.lines)} line(s):")
    for severity, line in memory.lines:
        print(f"  {severity.code} | {line}")

    print()

    # --- Demo 2: ChannelSink routed through the logging module ---
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(name)-12s %(message)s",
    )
    log = Logger(level=Severity.DEBUG, track="Cart", sink=ChannelSink("shop"))
    checkout(log, ["book"])
