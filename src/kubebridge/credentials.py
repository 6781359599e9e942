"""Kubeconfig credential refresh."""

from __future__ import annotations

from kubebridge.clients.bridge import BridgeClient
from kubebridge.exceptions import BridgeError
from kubebridge.logger import Logger, TelemetryEvent


def refresh_credentials(
    kubeconfig_path: str,
    namespace: str,
    bridge: BridgeClient,
    logger: Logger,
) -> bool:
    """Refresh the credentials of the current kubeconfig context.

    Args:
        kubeconfig_path: Kubeconfig file to refresh.
        namespace: Namespace of the current context.
        bridge: Bridge client used to perform the refresh.
        logger: Logger receiving the failure event.

    Returns:
        True if the credentials are usable, False if the user has to fix
        their kubeconfig first.
    """
    try:
        bridge.refresh_credentials(kubeconfig_path, namespace)
    except BridgeError as e:
        logger.error(TelemetryEvent.CREDENTIALS_REFRESH_ERROR, e, {"namespace": namespace})
        return False
    return True
