from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import ConfigError, load_settings
from .driver import default_client_factory, run_clone
from .errors import CloneError

app = typer.Typer(help="Clone services and replication controllers from a source cluster to a sink cluster.")

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@app.command()
def clone(
    source: Optional[str] = typer.Option(
        None,
        "--source",
        envvar="KUBE_CLONER_SOURCE",
        help="Source cluster API URL.",
    ),
    sink: Optional[str] = typer.Option(
        None,
        "--sink",
        envvar="KUBE_CLONER_SINK",
        help="Sink cluster API URL.",
    ),
    namespace: Optional[str] = typer.Option(
        None,
        "--namespace",
        "-n",
        envvar="KUBE_CLONER_NAMESPACE",
        help="Namespace to clone from. If blank all namespaces.",
    ),
    continue_on_error: Optional[bool] = typer.Option(
        None,
        "--continue-on-error/--no-continue-on-error",
        "--continue_on_error",
        envvar="KUBE_CLONER_CONTINUE_ON_ERROR",
        help="Keep cloning after a failed create. Takes precedence over --rollback.",
    ),
    rollback: Optional[bool] = typer.Option(
        None,
        "--rollback/--no-rollback",
        envvar="KUBE_CLONER_ROLLBACK",
        help="Delete everything created in the sink on the first failed create.",
    ),
    extra_namespaces: Optional[List[str]] = typer.Option(
        None,
        "--extra-namespace",
        help="Namespace cloned after the general listing in all-namespaces mode (default: kube-system).",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="KUBE_CLONER_CONFIG",
        help="YAML settings file. Command-line values win over file values.",
    ),
    token_env: Optional[str] = typer.Option(
        None,
        "--token-env",
        help="Environment variable holding a bearer token for both clusters.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure-skip-tls-verify",
        help="Do not verify cluster TLS certificates.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Per-request timeout in seconds (default: 30).",
    ),
    retries: Optional[int] = typer.Option(
        None,
        "--retries",
        min=0,
        help="Retries for list calls (default: 0).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    _configure_logging(verbose)

    try:
        settings = load_settings(config).merged(
            {
                "source": source,
                "sink": sink,
                "namespace": namespace,
                "continue_on_error": continue_on_error,
                "rollback": rollback,
                "extra_namespaces": list(extra_namespaces) if extra_namespaces else None,
                "token_env": token_env,
                "verify_tls": False if insecure else None,
                "timeout_seconds": timeout,
                "retries": retries,
            }
        )
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    try:
        run = run_clone(settings, client_factory=default_client_factory)
    except CloneError as exc:
        logger.critical("%s", exc)
        logger.critical("Exiting")
        raise typer.Exit(code=1) from exc

    if run is None:
        return

    typer.echo(
        f"Cloned {len(run.ledger.services)} service(s) and "
        f"{len(run.ledger.replication_controllers)} replication controller(s) "
        f"from {len(run.namespaces)} namespace pass(es); "
        f"{len(run.failures)} failure(s), {len(run.skipped)} skipped."
    )


if __name__ == "__main__":  # pragma: no cover
    app()
