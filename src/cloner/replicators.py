from __future__ import annotations

import logging
from typing import Any, Dict

from src.cluster.client import ClusterError

from .metadata import ObjectIdentity, project_metadata
from .run import CloneRun

logger = logging.getLogger(__name__)


def build_sink_object(kind: str, source: Dict[str, Any]) -> Dict[str, Any]:
    """Projected metadata plus the untouched source spec."""

    return {
        "apiVersion": "v1",
        "kind": kind,
        "metadata": project_metadata(source.get("metadata")).to_metadata(),
        "spec": source.get("spec") or {},
    }


def replicate_service(run: CloneRun, service: Dict[str, Any]) -> bool:
    sink_object = build_sink_object("Service", service)
    identity = project_metadata(service.get("metadata"))
    try:
        run.sink.create_service(identity.namespace, sink_object)
    except ClusterError as exc:
        run.policy.handle_failure(
            run, f"Failure to create service {_describe(identity)}. Error: {exc}"
        )
        return False
    run.ledger.record_service(identity)
    logger.debug("Created service %s", _describe(identity))
    return True


def replicate_replication_controller(run: CloneRun, rc: Dict[str, Any]) -> bool:
    sink_object = build_sink_object("ReplicationController", rc)
    identity = project_metadata(rc.get("metadata"))
    try:
        run.sink.create_replication_controller(identity.namespace, sink_object)
    except ClusterError as exc:
        run.policy.handle_failure(
            run, f"Failure to create RC {_describe(identity)}. Error: {exc}"
        )
        return False
    run.ledger.record_replication_controller(identity)
    logger.debug("Created RC %s", _describe(identity))
    return True


def _describe(identity: ObjectIdentity) -> str:
    return f"{identity.namespace}/{identity.name}"


__all__ = [
    "build_sink_object",
    "replicate_replication_controller",
    "replicate_service",
]
