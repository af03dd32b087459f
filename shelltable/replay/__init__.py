"""
Replay system for table reconstruction.

Replay re-applies a prefix of an identity's call log to a fresh table.
Same log prefix -> same table, every time.
"""

from .registry import OperationRegistry
from .handlers import default_registry, register_handlers
from .runner import ReplayResult, replay, replay_all, rollback

__all__ = [
    "OperationRegistry",
    "default_registry",
    "register_handlers",
    "ReplayResult",
    "replay",
    "replay_all",
    "rollback",
]
