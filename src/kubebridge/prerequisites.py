"""Environment checks run before the connect wizard starts."""

from __future__ import annotations

import platform
import sys
from collections.abc import Callable

import typer

from kubebridge import PRODUCT_NAME

SUPPORTED_PLATFORMS = ("linux", "darwin", "win32")
SUPPORTED_MACHINES = ("x86_64", "amd64", "arm64", "aarch64")


def validate_prerequisites(
    system: str | None = None,
    machine: str | None = None,
) -> Callable[[], None] | None:
    """Check that kubebridge can run on this machine.

    Args:
        system: Platform identifier (defaults to sys.platform).
        machine: CPU architecture (defaults to platform.machine()).

    Returns:
        A callback that tells the user what is wrong, or None if all
        prerequisites are met.
    """
    system = system or sys.platform
    machine = (machine or platform.machine()).lower()

    if not system.startswith(SUPPORTED_PLATFORMS):
        message = f"{PRODUCT_NAME} is not supported on {system}."
    elif machine not in SUPPORTED_MACHINES:
        message = f"{PRODUCT_NAME} is not supported on {machine} processors."
    else:
        return None

    def alert() -> None:
        typer.echo(f"Error: {message}", err=True)

    return alert
