from __future__ import annotations

import logging

from src.cluster.client import EVERYTHING, ClusterError

from .errors import ListingError
from .replicators import replicate_replication_controller, replicate_service
from .run import CloneRun

logger = logging.getLogger(__name__)

# Every namespace carries this service implicitly; the sink has its own.
BUILTIN_SERVICE_NAME = "kubernetes"


def clone_namespace(run: CloneRun, namespace: str) -> None:
    """Replicate all services, then all replication controllers, of one namespace."""

    logger.info("Cloning Namespace: %s", namespace)
    run.namespaces.append(namespace)

    try:
        services = run.source.list_services(namespace, EVERYTHING)
    except ClusterError as exc:
        raise ListingError(f"Could not get all services in {namespace}. {exc}") from exc

    for service in services:
        name = (service.get("metadata") or {}).get("name")
        if name == BUILTIN_SERVICE_NAME:
            logger.info("Skipping built-in service: %s/%s", namespace, name)
            run.skipped.append(f"{namespace}/{name}")
            continue
        logger.info("Cloning Service: %s", name)
        replicate_service(run, service)

    try:
        controllers = run.source.list_replication_controllers(namespace, EVERYTHING)
    except ClusterError as exc:
        raise ListingError(f"Could not get all RCs in {namespace}. {exc}") from exc

    for rc in controllers:
        logger.info("Cloning RC: %s", (rc.get("metadata") or {}).get("name"))
        replicate_replication_controller(run, rc)


__all__ = ["BUILTIN_SERVICE_NAME", "clone_namespace"]
