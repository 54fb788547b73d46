"""
Order id generation.

Ids look like ``ORDER-1760745600123-k3x9q2a``: a prefix, the current time in
epoch milliseconds, and seven random lowercase base36 characters. The random
suffix keeps ids unique when several checkouts land in the same millisecond.
"""

import re
import secrets
import string
import time
from typing import Callable

_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 7

# Matches ids produced with any alphanumeric prefix.
ORDER_ID_PATTERN = re.compile(r"^[A-Za-z0-9]+-\d+-[a-z0-9]{7}$")

OrderIdFactory = Callable[[], str]


def generate_order_id(prefix: str = "ORDER") -> str:
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{millis}-{suffix}"


def make_order_id_factory(prefix: str) -> OrderIdFactory:
    """Bind `prefix` so the result can be injected where a zero-argument factory is expected."""

    def factory() -> str:
        return generate_order_id(prefix)

    return factory
