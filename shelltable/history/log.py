"""
Per-identity call log.

The log maps a table identity to its ordered, append-only sequence of
CallRecords. Each identity has its own lock; the registry lock is held only
while a new identity entry is created, so unrelated tables never contend.
"""

import logging
import threading
from typing import Dict, Iterable, List, Tuple

from .records import CallRecord

logger = logging.getLogger(__name__)


class CallLog:
    """
    Append-only call history keyed by table identity.

    Guarantees:
    - Append-only per identity (no updates, no pruning)
    - Records of one identity keep their append order across threads
    - Unknown identities read as an empty history
    """

    def __init__(self) -> None:
        self._calls: Dict[int, List[CallRecord]] = {}
        self._locks: Dict[int, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, identity: int) -> threading.Lock:
        lock = self._locks.get(identity)
        if lock is None:
            with self._registry_lock:
                lock = self._locks.get(identity)
                if lock is None:
                    lock = threading.Lock()
                    self._calls[identity] = []
                    self._locks[identity] = lock
        return lock

    def record(self, identity: int, call: CallRecord) -> None:
        """Append one call to the identity's history. Never fails."""
        with self._lock_for(identity):
            calls = self._calls.setdefault(identity, [])
            calls.append(call)
            seq = len(calls)
        logger.debug(
            "Recorded %s.%s (succeeded=%s) as step %d",
            call.component,
            call.operation,
            call.succeeded,
            seq,
            extra={"trace_id": str(identity)},
        )

    def extend(self, identity: int, calls: Iterable[CallRecord]) -> None:
        """Append several calls atomically, in order (used to seed derived tables)."""
        batch = list(calls)
        with self._lock_for(identity):
            self._calls.setdefault(identity, []).extend(batch)

    def history_of(self, identity: int) -> Tuple[CallRecord, ...]:
        """
        Full ordered history for an identity.

        Returns:
            Tuple snapshot of the records; empty for an unknown identity
        """
        lock = self._locks.get(identity)
        if lock is None:
            return ()
        with lock:
            return tuple(self._calls.get(identity, ()))

    def clear(self, identity: int) -> None:
        """Drop an identity's history entirely. Intended for tests."""
        with self._registry_lock:
            lock = self._locks.pop(identity, None)
            if lock is None:
                return
            with lock:
                self._calls.pop(identity, None)

    def identities(self) -> List[int]:
        with self._registry_lock:
            return sorted(self._locks)

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)


_shared_log = CallLog()


def shared_call_log() -> CallLog:
    """Process-wide call log used by tables created without an explicit log."""
    return _shared_log
