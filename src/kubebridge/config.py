"""Configuration for kubebridge."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

DEFAULT_TIMEOUT = 30
ISOLATION_HELP_URL = "https://aka.ms/bridge-to-k8s-isolation"


@dataclass
class BridgeConfig:
    """Configuration for the connect wizard and its clients.

    Attributes:
        kubectl: kubectl executable name or path.
        bridge: Bridge CLI executable name or path.
        context: Kubeconfig context to use (None for current context).
        kubeconfig: Kubeconfig file (None for $KUBECONFIG or ~/.kube/config).
        timeout: Timeout in seconds for CLI calls (0 disables it).
        workspace: Directory holding the local launch configurations.
        excluded_services: Infrastructure services never offered to the user.
        isolation_help_url: Page opened by the "Learn More" isolation choice.
    """

    kubectl: str = "kubectl"
    bridge: str = "dsc"
    context: str | None = None
    kubeconfig: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    workspace: Path = field(default_factory=Path.cwd)
    excluded_services: tuple[str, ...] = ("routingmanager-service",)
    isolation_help_url: str = ISOLATION_HELP_URL

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> BridgeConfig:
        """Build a configuration from KUBEBRIDGE_* environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ).

        Returns:
            BridgeConfig with environment overrides applied.
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get("KUBEBRIDGE_KUBECTL"):
            config.kubectl = env["KUBEBRIDGE_KUBECTL"]
        if env.get("KUBEBRIDGE_BRIDGE"):
            config.bridge = env["KUBEBRIDGE_BRIDGE"]
        if env.get("KUBEBRIDGE_CONTEXT"):
            config.context = env["KUBEBRIDGE_CONTEXT"]
        if env.get("KUBECONFIG"):
            config.kubeconfig = env["KUBECONFIG"]

        raw_timeout = env.get("KUBEBRIDGE_TIMEOUT")
        if raw_timeout:
            try:
                timeout = int(raw_timeout)
            except ValueError:
                timeout = DEFAULT_TIMEOUT
            config.timeout = timeout if timeout >= 0 else DEFAULT_TIMEOUT

        return config

    def with_overrides(self, **overrides: object) -> BridgeConfig:
        """Return a copy with the non-None overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def resolve_kubeconfig(self) -> str:
        """Return the kubeconfig path kubectl will read."""
        if self.kubeconfig:
            # KUBECONFIG may hold a list; kubectl writes to the first entry
            return self.kubeconfig.split(os.pathsep)[0]
        return str(Path.home() / ".kube" / "config")
