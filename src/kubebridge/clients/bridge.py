"""Client for the bridge CLI that performs the actual traffic redirection."""

from __future__ import annotations

import subprocess

from kubebridge.config import BridgeConfig
from kubebridge.exceptions import BridgeError, BridgeNotInstalledError


class BridgeClient:
    """Wrapper around the bridge CLI.

    The connect wizard only needs the client to exist and to refresh
    cluster credentials before listing resources.
    """

    def __init__(self, config: BridgeConfig | None = None) -> None:
        self._config = config or BridgeConfig()

    def run(self, *args: str, timeout: int | None = None) -> subprocess.CompletedProcess[str]:
        """Run a bridge command.

        Args:
            *args: Command arguments (without the executable).
            timeout: Timeout in seconds. None uses the configured timeout,
                     0 disables the timeout.

        Returns:
            CompletedProcess result.

        Raises:
            BridgeNotInstalledError: If the bridge CLI is not installed.
            BridgeError: If the command fails or times out.
        """
        cmd = [self._config.bridge, *args]

        if timeout is None:
            timeout = self._config.timeout
        timeout_value: float | None = timeout if timeout > 0 else None

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout_value,
            )
        except subprocess.TimeoutExpired:
            raise BridgeError(
                f"{self._config.bridge} timed out after {timeout_value}s"
            ) from None
        except FileNotFoundError as e:
            raise BridgeNotInstalledError(
                f"{self._config.bridge} not found. Install the bridge CLI or set "
                "KUBEBRIDGE_BRIDGE to its location."
            ) from e

        if result.returncode != 0:
            raise BridgeError(f"{self._config.bridge} command failed: {result.stderr.strip()}")

        return result

    def refresh_credentials(self, kubeconfig_path: str, namespace: str) -> None:
        """Refresh the cluster credentials stored in a kubeconfig.

        Raises:
            BridgeError: If the refresh failed.
        """
        self.run(
            "refresh-credentials",
            "--kubeconfig", kubeconfig_path,
            "--namespace", namespace,
        )
