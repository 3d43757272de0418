from __future__ import annotations

import logging
from typing import Callable, Optional

from src.cluster.client import EVERYTHING, ClusterClient, ClusterError, ClusterHandle

from .config import CloneSettings
from .errors import ListingError
from .orchestrator import clone_namespace
from .policy import FailurePolicy
from .run import CloneRun

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, CloneSettings], ClusterHandle]


def default_client_factory(endpoint: str, settings: CloneSettings) -> ClusterHandle:
    return ClusterClient.from_url(
        endpoint,
        token_env=settings.token_env,
        verify_tls=settings.verify_tls,
        timeout_seconds=settings.timeout_seconds,
        retries=settings.retries,
    )


def run_clone(
    settings: CloneSettings,
    client_factory: ClientFactory = default_client_factory,
) -> Optional[CloneRun]:
    """Clone one namespace, or every namespace plus the extra ones.

    Returns None without cloning anything when either cluster handle cannot
    be built. ListingError and ReplicationAborted propagate to the caller.
    """

    try:
        source = client_factory(settings.source, settings)
    except (ValueError, ClusterError) as exc:
        logger.debug("Unable to set up source client: %s", exc)
        return None
    try:
        sink = client_factory(settings.sink, settings)
    except (ValueError, ClusterError) as exc:
        logger.debug("Unable to set up sink client: %s", exc)
        _close(source)
        return None

    run = CloneRun(
        source=source,
        sink=sink,
        policy=FailurePolicy(
            continue_on_error=settings.continue_on_error,
            rollback=settings.rollback,
        ),
    )
    try:
        _clone_all(run, settings)
    finally:
        _close(source)
        _close(sink)

    logger.info("Cloned")
    return run


def _clone_all(run: CloneRun, settings: CloneSettings) -> None:
    if settings.namespace:
        clone_namespace(run, settings.namespace)
        return

    try:
        namespaces = run.source.list_namespaces(EVERYTHING, EVERYTHING)
    except ClusterError as exc:
        raise ListingError(f"Unable to list all namespaces. {exc}") from exc

    for item in namespaces:
        clone_namespace(run, (item.get("metadata") or {}).get("name", ""))

    for namespace in settings.extra_namespaces:
        clone_namespace(run, namespace)


def _close(handle: ClusterHandle) -> None:
    close = getattr(handle, "close", None)
    if callable(close):
        close()


__all__ = ["ClientFactory", "default_client_factory", "run_clone"]
