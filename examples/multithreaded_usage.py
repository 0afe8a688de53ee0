"""examples/multithreaded_usage.py - Logging from several threads.

Every call resolves its own call site from the calling thread's stack and
builds its own records, so workers can share one Logger without locks.

Run:
    python examples/multithreaded_usage.py
"""

import threading
import time

from wherelog import Logger, Severity

log = Logger(level=Severity.DEBUG, track="Orders", path_root="examples")


def fetch_inventory(product_id: int) -> int:
    log.start(product_id)
    time.sleep(0.01)  # simulate DB latency
    stock = {1: 10, 2: 0, 3: 5}  # product 2 is out-of-stock
    return stock.get(product_id, 0)


def place_order(order_id: int, product_id: int, qty: int) -> None:
    log.start(order_id, product_id, qty)
    if fetch_inventory(product_id) < qty:
        log.error(lambda: f"order {order_id}: product {product_id} out of stock")
        return
    log.success(lambda: f"order {order_id} placed")


if __name__ == "__main__":
    workers = [
        threading.Thread(target=place_order, args=(order_id, product_id, 1), name=f"Worker-{order_id}")
        for order_id, product_id in ((101, 1), (102, 2), (103, 3))
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
