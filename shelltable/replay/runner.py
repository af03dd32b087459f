"""
Replay runner: reconstruct a table from its call log.

Replay starts from a fresh empty table and re-applies the first `step`
recorded calls in log order. Calls recorded as failed are skipped (they
did not change state when they ran). The result carries the original
identity.
"""

import logging
from dataclasses import dataclass

from ..core.errors import InvalidStep, NothingToRollBack
from ..core.table import Table
from ..history.log import CallLog
from .registry import OperationRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of a replay.

    Fields:
        table: Reconstructed table, tagged with the replayed identity
        step: Number of history entries consumed
        applied: Number of calls actually re-applied (failed calls are skipped)
    """
    table: Table
    step: int
    applied: int


def replay(log: CallLog, registry: OperationRegistry, identity: int, step: int) -> ReplayResult:
    """
    Rebuild the state of `identity` after its first `step` calls.

    Raises:
        InvalidStep: If step is not within 0..len(history)
        UnregisteredOperation: If a call has no handler
    """
    history = log.history_of(identity)
    if isinstance(step, bool) or not isinstance(step, int) or not 0 <= step <= len(history):
        raise InvalidStep(f"Step {step!r} is outside 0..{len(history)} for table {identity}")

    table = Table(identity=identity, log=log)
    applied = 0
    for seq, call in enumerate(history[:step], start=1):
        if not call.succeeded:
            logger.debug("Skipping failed call %s.%s at step %d", call.component, call.operation, seq,
                         extra={"trace_id": str(identity)})
            continue
        table = registry.apply(table, call)
        applied += 1

    table._retag(identity)
    table._position = step if step < len(history) else None
    logger.debug("Replayed %d of %d calls", step, len(history), extra={"trace_id": str(identity)})
    return ReplayResult(table=table, step=step, applied=applied)


def replay_all(log: CallLog, registry: OperationRegistry, identity: int) -> ReplayResult:
    return replay(log, registry, identity, len(log.history_of(identity)))


def rollback(log: CallLog, registry: OperationRegistry, identity: int) -> ReplayResult:
    """
    State of `identity` without its most recent call.

    The history is not modified, so calling this repeatedly yields the same
    state each time.

    Raises:
        NothingToRollBack: If the identity has no recorded calls
    """
    length = len(log.history_of(identity))
    if length == 0:
        raise NothingToRollBack(f"Table {identity} has no calls to roll back")
    return replay(log, registry, identity, length - 1)
