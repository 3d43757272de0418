from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass
class ObjectIdentity:
    name: str
    namespace: str
    deletion_grace_period_seconds: Optional[int] = None
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)

    def to_metadata(self) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {"name": self.name, "namespace": self.namespace}
        if self.deletion_grace_period_seconds is not None:
            metadata["deletionGracePeriodSeconds"] = self.deletion_grace_period_seconds
        if self.labels:
            metadata["labels"] = dict(self.labels)
        if self.annotations:
            metadata["annotations"] = dict(self.annotations)
        return metadata


def project_metadata(metadata: Optional[Mapping[str, Any]]) -> ObjectIdentity:
    """Build a sink-safe identity from source object metadata.

    Only name, namespace, deletion grace period, labels and annotations are
    carried over; cluster-assigned fields such as resourceVersion, uid and
    creationTimestamp are never read.
    """

    metadata = metadata or {}
    return ObjectIdentity(
        name=str(metadata.get("name") or ""),
        namespace=str(metadata.get("namespace") or ""),
        deletion_grace_period_seconds=metadata.get("deletionGracePeriodSeconds"),
        labels=dict(metadata.get("labels") or {}),
        annotations=dict(metadata.get("annotations") or {}),
    )


__all__ = ["ObjectIdentity", "project_metadata"]
