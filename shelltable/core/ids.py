"""
Table identity generation.

Identities are time-based with random low bits so that two tables created
in the same millisecond still get distinct ids.
"""

import secrets
import threading
import time
from typing import Set

_RANDOM_BITS = 16

_issued: Set[int] = set()
_issued_lock = threading.Lock()


def new_table_id() -> int:
    """
    Generate a process-unique 64-bit table identity.

    Layout: milliseconds since the epoch in the high bits, 16 random bits
    below. An id already handed out in this process is never returned again.

    Returns:
        Positive integer below 2**63
    """
    with _issued_lock:
        while True:
            millis = int(time.time() * 1000)
            candidate = (millis << _RANDOM_BITS) | secrets.randbits(_RANDOM_BITS)
            if candidate not in _issued:
                _issued.add(candidate)
                return candidate
