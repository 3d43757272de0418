from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from src.cluster.client import ClusterHandle

from .ledger import ReplicationLedger
from .policy import FailurePolicy


@dataclass
class CloneRun:
    """State owned by a single clone run and passed to every step."""

    source: ClusterHandle
    sink: ClusterHandle
    policy: FailurePolicy = field(default_factory=FailurePolicy)
    ledger: ReplicationLedger = field(default_factory=ReplicationLedger)
    namespaces: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)


__all__ = ["CloneRun"]
