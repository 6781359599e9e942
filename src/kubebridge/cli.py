"""Typer CLI for kubebridge."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from kubebridge import __version__

app = typer.Typer(
    name="kubebridge",
    help="Choose a Kubernetes pod or service to redirect to your machine.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"kubebridge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show kubebridge version and exit.",
        ),
    ] = False,
) -> None:
    """Redirect a Kubernetes workload to your local machine."""


def configure_logging(verbose: bool) -> None:
    """Send kubebridge logs to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def connect(
    service: Annotated[
        str | None,
        typer.Option("--service", "-s", help="Service to redirect (skips the service picker)."),
    ] = None,
    pod: Annotated[
        str | None,
        typer.Option("--pod", "-p", help="Pod to redirect."),
    ] = None,
    namespace: Annotated[
        str | None,
        typer.Option("--namespace", "-n", help="Namespace of the pod or service."),
    ] = None,
    context: Annotated[
        str | None,
        typer.Option("--context", help="Kubeconfig context to use."),
    ] = None,
    workspace: Annotated[
        Path | None,
        typer.Option("--workspace", help="Directory holding .vscode/launch.json."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the connection descriptor to this file."),
    ] = None,
    reason: Annotated[
        str,
        typer.Option("--reason", help="Why the wizard was started (for logs)."),
    ] = "cli",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs."),
    ] = False,
) -> None:
    """Pick the workload to redirect and print its connection descriptor."""
    from kubebridge.config import BridgeConfig
    from kubebridge.exceptions import KubeBridgeError
    from kubebridge.models import ResourceType
    from kubebridge.terminal import TerminalSurface
    from kubebridge.wizard import ConnectWizard

    if service and pod:
        typer.echo("Error: --service and --pod cannot be used together.", err=True)
        raise typer.Exit(2)

    configure_logging(verbose)

    config = BridgeConfig.from_env().with_overrides(context=context, workspace=workspace)
    wizard = ConnectWizard(TerminalSurface(), config=config)

    target_type = ResourceType.POD if pod else ResourceType.SERVICE
    try:
        descriptor = wizard.run(reason, pod or service, namespace, target_type)
    except KubeBridgeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    if descriptor is None:
        raise typer.Exit(1)

    payload = json.dumps(descriptor.to_dict(), indent=2)
    if output:
        output.write_text(payload + "\n")
        typer.echo(f"Wrote connection descriptor to {output}", err=True)
    else:
        typer.echo(payload)
