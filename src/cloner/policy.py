from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List

from src.cluster.client import ClusterError

from .errors import ReplicationAborted
from .metadata import ObjectIdentity

if TYPE_CHECKING:  # pragma: no cover
    from .run import CloneRun

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    CONTINUE = "continue"
    ROLLBACK = "rollback"
    EXIT = "exit"


@dataclass
class RollbackReport:
    deleted: List[ObjectIdentity] = field(default_factory=list)
    failed: List[ObjectIdentity] = field(default_factory=list)


@dataclass(frozen=True)
class FailurePolicy:
    """Decides what happens after a failed sink create.

    continue_on_error is checked before rollback, so a run configured with
    both flags logs and continues.
    """

    continue_on_error: bool = False
    rollback: bool = False

    def decide(self) -> Decision:
        if self.continue_on_error:
            return Decision.CONTINUE
        if self.rollback:
            return Decision.ROLLBACK
        return Decision.EXIT

    def handle_failure(self, run: "CloneRun", message: str) -> Decision:
        logger.error(message)
        run.failures.append(message)

        decision = self.decide()
        if decision is Decision.CONTINUE:
            return decision
        if decision is Decision.ROLLBACK:
            report = rollback(run)
            raise ReplicationAborted(
                f"{message} (rolled back {len(report.deleted)} object(s), "
                f"{len(report.failed)} delete failure(s))",
                rolled_back=True,
            )
        raise ReplicationAborted(message)


def rollback(run: "CloneRun") -> RollbackReport:
    """Delete every ledger entry from the sink, controllers first.

    Delete failures are logged and the sweep carries on. The ledger is empty
    afterwards.
    """

    logger.info("Performing rollback")
    report = RollbackReport()
    ledger = run.ledger

    for identity in ledger.replication_controllers:
        try:
            run.sink.delete_replication_controller(identity.namespace, identity.name)
        except ClusterError as exc:
            logger.error("Failed to roll back RC %s/%s: %s", identity.namespace, identity.name, exc)
            report.failed.append(identity)
            continue
        logger.info("Rolled back RC: %s/%s", identity.namespace, identity.name)
        report.deleted.append(identity)

    for identity in ledger.services:
        try:
            run.sink.delete_service(identity.namespace, identity.name)
        except ClusterError as exc:
            logger.error("Failed to roll back Service %s/%s: %s", identity.namespace, identity.name, exc)
            report.failed.append(identity)
            continue
        logger.info("Rolled back Service: %s/%s", identity.namespace, identity.name)
        report.deleted.append(identity)

    ledger.clear()
    return report


__all__ = ["Decision", "FailurePolicy", "RollbackReport", "rollback"]
