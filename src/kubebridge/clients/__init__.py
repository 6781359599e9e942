"""Clients for the kubectl and bridge command line tools."""

from kubebridge.clients.binaries import BinariesUtility
from kubebridge.clients.bridge import BridgeClient
from kubebridge.clients.kubectl import KubectlClient

__all__ = [
    "BinariesUtility",
    "BridgeClient",
    "KubectlClient",
]
