from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .metadata import ObjectIdentity


@dataclass
class ReplicationLedger:
    """Ordered record of every sink object created by the current run."""

    services: List[ObjectIdentity] = field(default_factory=list)
    replication_controllers: List[ObjectIdentity] = field(default_factory=list)

    def record_service(self, identity: ObjectIdentity) -> None:
        self.services.append(identity)

    def record_replication_controller(self, identity: ObjectIdentity) -> None:
        self.replication_controllers.append(identity)

    def clear(self) -> None:
        self.services.clear()
        self.replication_controllers.clear()

    def __len__(self) -> int:
        return len(self.services) + len(self.replication_controllers)


__all__ = ["ReplicationLedger"]
