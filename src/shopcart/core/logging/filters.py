# src/shopcart/core/logging/filters.py
"""
Logging filters

Correlation id filter and helpers for logging.

Every checkout produces an order id, and the confirmation that follows it runs
on a detached asyncio task. To tie the log lines of that task back to the order
that spawned it, the checkout binds the order id to a context variable before
scheduling the task; asyncio copies the current context into each new task, so
anything the task logs carries the same `correlation_id`.

How it is intended to be used
------------------------------
1. Install the filter into the logging configuration (dictConfig):

     "filters": {"correlation_id": {"()": CorrelationIdFilter}},
     "handlers": {"console": {..., "filters": ["correlation_id"]}}

2. Bind an id around the unit of work:

     token = set_correlation_id(order_id)
     try:
         ...
     finally:
         reset_correlation_id(token)

3. Formatters can then reference `%(correlation_id)s` safely: records without
   an id get the sentinel "-".
"""

import logging
from logging import LogRecord
import contextvars

# Default is None to indicate "no correlation id set".
_correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def set_correlation_id(correlation_id: str | None) -> contextvars.Token:
    """
    Set the correlation id in the current context and return the token to allow reset.
    """
    return _correlation_id_ctx.set(correlation_id)


def reset_correlation_id(token: contextvars.Token) -> None:
    """
    Reset the contextvar to the value it had before set_correlation_id() returned `token`.
    """
    _correlation_id_ctx.reset(token)


def get_correlation_id() -> str | None:
    """
    Retrieve the current context's correlation id, or None if none has been set.
    """
    return _correlation_id_ctx.get()


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has a `correlation_id` attribute.

    Precedence:
      - an explicit `extra={"correlation_id": ...}` on the logging call;
      - otherwise the contextvar value;
      - otherwise the sentinel "-".

    Always returns True: the filter annotates, it never drops records.
    """

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = (
            getattr(record, "correlation_id", None) or get_correlation_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    """Mask record attributes whose names mark them as sensitive."""

    SENSITIVE = {
        "password",
        "secret",
        "token",
        "authorization",
        "card_number",
        "cvv",
        "payment_token",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
