"""Tests for BridgeConfig."""

from __future__ import annotations

import os
from pathlib import Path

from kubebridge.config import DEFAULT_TIMEOUT, BridgeConfig


class TestBridgeConfig:
    """Tests for BridgeConfig dataclass."""

    def test_default_values(self) -> None:
        """BridgeConfig has sensible defaults."""
        config = BridgeConfig()

        assert config.kubectl == "kubectl"
        assert config.bridge == "dsc"
        assert config.context is None
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.excluded_services == ("routingmanager-service",)
        assert config.workspace == Path.cwd()

    def test_from_env(self) -> None:
        """Environment variables override the defaults."""
        config = BridgeConfig.from_env(
            {
                "KUBEBRIDGE_KUBECTL": "/opt/bin/kubectl",
                "KUBEBRIDGE_BRIDGE": "/opt/bin/dsc",
                "KUBEBRIDGE_CONTEXT": "staging",
                "KUBEBRIDGE_TIMEOUT": "60",
                "KUBECONFIG": "/tmp/kubeconfig",
            }
        )

        assert config.kubectl == "/opt/bin/kubectl"
        assert config.bridge == "/opt/bin/dsc"
        assert config.context == "staging"
        assert config.timeout == 60
        assert config.kubeconfig == "/tmp/kubeconfig"

    def test_from_env_ignores_invalid_timeout(self) -> None:
        """A malformed timeout falls back to the default."""
        assert BridgeConfig.from_env({"KUBEBRIDGE_TIMEOUT": "soon"}).timeout == DEFAULT_TIMEOUT
        assert BridgeConfig.from_env({"KUBEBRIDGE_TIMEOUT": "-5"}).timeout == DEFAULT_TIMEOUT

    def test_from_env_allows_disabling_timeout(self) -> None:
        """A zero timeout is kept."""
        assert BridgeConfig.from_env({"KUBEBRIDGE_TIMEOUT": "0"}).timeout == 0

    def test_with_overrides_skips_none(self) -> None:
        """None overrides keep the existing value."""
        config = BridgeConfig(context="dev")

        updated = config.with_overrides(context=None, workspace=Path("/work"))

        assert updated.context == "dev"
        assert updated.workspace == Path("/work")
        assert config.workspace != Path("/work")


class TestResolveKubeconfig:
    """Tests for BridgeConfig.resolve_kubeconfig."""

    def test_default_location(self) -> None:
        """Without KUBECONFIG the home directory file is used."""
        assert BridgeConfig().resolve_kubeconfig() == str(Path.home() / ".kube" / "config")

    def test_first_entry_of_list(self) -> None:
        """Only the first entry of a KUBECONFIG list is used."""
        config = BridgeConfig(kubeconfig=os.pathsep.join(["/a/config", "/b/config"]))

        assert config.resolve_kubeconfig() == "/a/config"
