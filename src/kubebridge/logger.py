"""Telemetry-style logging for the connect wizard."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any


class TelemetryEvent(str, Enum):
    """Names of the events emitted by kubebridge."""

    CONNECT_WIZARD_START = "Connect-WizardStart"
    CONNECT_WIZARD_STOP = "Connect-WizardStop"
    CONNECT_WIZARD_ERROR = "Connect-WizardError"
    CONNECT_WIZARD_ABORT = "Connect-WizardAbort"
    CONNECT_SERVICE_LIST = "Connect-ServiceList"
    KUBECTL_GET_POD_NAME_ERROR = "KubectlClient-GetPodNameError"
    KUBECTL_GET_NAMESPACE_ERROR = "KubectlClient-GetNamespaceError"
    KUBECTL_GET_POD_NAMES_ERROR = "KubectlClient-GetPodNamesError"
    KUBECTL_GET_CONTAINER_NAMES_ERROR = "KubectlClient-GetContainerNamesError"
    CREDENTIALS_REFRESH_ERROR = "Credentials-RefreshError"


def _format(properties: dict[str, Any] | None) -> str:
    if not properties:
        return ""
    pairs = " ".join(f"{k}={v}" for k, v in properties.items() if v is not None)
    return f" {pairs}" if pairs else ""


class Logger:
    """Event logger on top of the standard logging module.

    Events are written at DEBUG (trace) or ERROR level with their properties
    appended to the message and attached as ``record.properties``.
    """

    def __init__(self, name: str = "kubebridge") -> None:
        self._logger = logging.getLogger(name)

    def trace(
        self,
        event: TelemetryEvent,
        properties: dict[str, Any] | None = None,
    ) -> None:
        """Record a telemetry event."""
        self._logger.debug(
            "%s%s",
            event.value,
            _format(properties),
            extra={"event": event.value, "properties": properties or {}},
        )

    def warning(self, message: str, error: BaseException | None = None) -> None:
        """Record a recoverable problem."""
        if error is not None:
            self._logger.warning("%s: %s", message, error)
        else:
            self._logger.warning("%s", message)

    def error(
        self,
        event: TelemetryEvent,
        error: BaseException,
        properties: dict[str, Any] | None = None,
    ) -> None:
        """Record a failure event together with the error that caused it."""
        self._logger.error(
            "%s: %s%s",
            event.value,
            error,
            _format(properties),
            extra={"event": event.value, "properties": properties or {}},
        )
