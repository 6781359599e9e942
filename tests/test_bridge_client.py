"""Tests for the bridge client, binary lookup and credential refresh."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from kubebridge.clients.binaries import BinariesUtility
from kubebridge.clients.bridge import BridgeClient
from kubebridge.clients.kubectl import KubectlClient
from kubebridge.config import BridgeConfig
from kubebridge.credentials import refresh_credentials
from kubebridge.exceptions import BridgeError, BridgeNotInstalledError
from kubebridge.logger import TelemetryEvent


class TestBridgeClient:
    """Tests for BridgeClient."""

    @patch("subprocess.run")
    def test_refresh_credentials_command(self, mock_run: MagicMock) -> None:
        """refresh_credentials calls the bridge CLI."""
        mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")

        BridgeClient().refresh_credentials("/tmp/kubeconfig", "dev")

        args = mock_run.call_args[0][0]
        assert args == [
            "dsc", "refresh-credentials", "--kubeconfig", "/tmp/kubeconfig", "--namespace", "dev",
        ]

    @patch("subprocess.run")
    def test_not_installed(self, mock_run: MagicMock) -> None:
        """A missing executable raises BridgeNotInstalledError."""
        mock_run.side_effect = FileNotFoundError()

        with pytest.raises(BridgeNotInstalledError):
            BridgeClient().run("version")

    @patch("subprocess.run")
    def test_failure(self, mock_run: MagicMock) -> None:
        """A failing command raises BridgeError."""
        mock_run.return_value = MagicMock(returncode=2, stdout="", stderr="token expired")

        with pytest.raises(BridgeError, match="token expired"):
            BridgeClient().run("refresh-credentials")

    @patch("subprocess.run")
    def test_timeout(self, mock_run: MagicMock) -> None:
        """A hanging command raises BridgeError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="dsc", timeout=30)

        with pytest.raises(BridgeError, match="timed out"):
            BridgeClient().run("version")


class TestBinariesUtility:
    """Tests for BinariesUtility."""

    @patch("kubebridge.clients.binaries.shutil.which")
    def test_returns_cached_clients(self, mock_which: MagicMock) -> None:
        """Clients are created once and reused."""
        mock_which.return_value = "/usr/bin/tool"
        binaries = BinariesUtility()

        kubectl = binaries.try_get_kubectl()
        bridge = binaries.try_get_bridge()

        assert isinstance(kubectl, KubectlClient)
        assert isinstance(bridge, BridgeClient)
        assert binaries.try_get_kubectl() is kubectl
        assert binaries.try_get_bridge() is bridge

    @patch("kubebridge.clients.binaries.shutil.which")
    def test_missing_executables(self, mock_which: MagicMock) -> None:
        """Missing executables give None."""
        mock_which.return_value = None
        binaries = BinariesUtility(BridgeConfig(kubectl="kubectl-x", bridge="dsc-x"))

        assert binaries.try_get_kubectl() is None
        assert binaries.try_get_bridge() is None
        looked_up = [c[0][0] for c in mock_which.call_args_list]
        assert looked_up == ["kubectl-x", "dsc-x"]


class TestRefreshCredentials:
    """Tests for refresh_credentials."""

    def test_success(self) -> None:
        """A successful refresh returns True."""
        bridge = MagicMock()
        logger = MagicMock()

        assert refresh_credentials("/tmp/kubeconfig", "dev", bridge, logger) is True
        bridge.refresh_credentials.assert_called_once_with("/tmp/kubeconfig", "dev")
        logger.error.assert_not_called()

    def test_failure_is_logged(self) -> None:
        """A failed refresh returns False and logs the error."""
        bridge = MagicMock()
        bridge.refresh_credentials.side_effect = BridgeError("token expired")
        logger = MagicMock()

        assert refresh_credentials("/tmp/kubeconfig", "dev", bridge, logger) is False
        event = logger.error.call_args[0][0]
        assert event is TelemetryEvent.CREDENTIALS_REFRESH_ERROR
