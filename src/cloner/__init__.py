"""Replicate services and replication controllers between clusters."""

from .config import CloneSettings
from .driver import run_clone
from .errors import CloneError, ListingError, ReplicationAborted
from .ledger import ReplicationLedger
from .metadata import ObjectIdentity, project_metadata
from .policy import Decision, FailurePolicy
from .run import CloneRun

__all__ = [
    "CloneError",
    "CloneRun",
    "CloneSettings",
    "Decision",
    "FailurePolicy",
    "ListingError",
    "ObjectIdentity",
    "ReplicationAborted",
    "ReplicationLedger",
    "project_metadata",
    "run_clone",
]
