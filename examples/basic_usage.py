"""examples/basic_usage.py - wherelog in a small payment flow.

Shows the level methods, lazy messages, start() with arguments, message
cutting and the difference between the default and compact formatters.

Run:
    python examples/basic_usage.py
"""

from wherelog import Logger, LoggerConfig, Severity, compact_formatter

# ---------------------------------------------------------------------------
# One logger per subsystem, all sharing the same base settings
# ---------------------------------------------------------------------------
base = LoggerConfig(level=Severity.DEBUG, cut_after=60, path_root="examples")

payments = Logger(base, track="Payments")
audit = Logger(base, track="Audit", formatter=compact_formatter, level=Severity.SUCCESS)


def get_balance(user_id: int) -> int:
    payments.start(user_id)
    payments.debug(lambda: f"querying balance for user_id={user_id}")
    return 3_000


def pay(user_id: int, amount: int) -> None:
    payments.start(user_id, amount)
    balance = get_balance(user_id)
    if balance < amount:
        payments.error(lambda: f"insufficient funds: balance={balance} amount={amount}")
        audit.warning("declined payment")
        return
    payments.success(lambda: f"paid {amount}")
    audit.success(f"user {user_id} paid {amount}")


if __name__ == "__main__":
    pay(user_id=1, amount=500)
    pay(user_id=1, amount=5_000)
    payments.info(lambda: "this message is far too long to show in full " * 3)
