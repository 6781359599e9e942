"""Locate the command line tools the wizard depends on."""

from __future__ import annotations

import logging
import shutil

from kubebridge.clients.bridge import BridgeClient
from kubebridge.clients.kubectl import KubectlClient
from kubebridge.config import BridgeConfig

logger = logging.getLogger("kubebridge.binaries")


class BinariesUtility:
    """Hands out kubectl and bridge clients once their executables are found.

    Clients are cached, so repeated lookups during one run return the same
    instance.
    """

    def __init__(self, config: BridgeConfig | None = None) -> None:
        self._config = config or BridgeConfig()
        self._kubectl: KubectlClient | None = None
        self._bridge: BridgeClient | None = None

    def try_get_kubectl(self) -> KubectlClient | None:
        """Return a kubectl client, or None if kubectl is not installed."""
        if self._kubectl is None:
            if shutil.which(self._config.kubectl) is None:
                logger.warning("kubectl executable '%s' not found", self._config.kubectl)
                return None
            self._kubectl = KubectlClient(self._config)
        return self._kubectl

    def try_get_bridge(self) -> BridgeClient | None:
        """Return a bridge client, or None if the bridge CLI is not installed."""
        if self._bridge is None:
            if shutil.which(self._config.bridge) is None:
                logger.warning("bridge executable '%s' not found", self._config.bridge)
                return None
            self._bridge = BridgeClient(self._config)
        return self._bridge
