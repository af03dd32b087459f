"""
Call history for tables.

This module provides:
- CallRecord: One logged invocation of a tracked operation
- CallLog: Append-only, per-identity ordered log
- shared_call_log: The process-wide log
- dump_history / load_history: Canonical JSON form of a history
"""

from .records import CallRecord
from .log import CallLog, shared_call_log
from .serialize import dump_history, load_history, record_from_dict, record_to_dict

__all__ = [
    "CallRecord",
    "CallLog",
    "shared_call_log",
    "dump_history",
    "load_history",
    "record_from_dict",
    "record_to_dict",
]
