"""kubectl client used to inspect the target cluster."""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Any

from kubebridge.config import BridgeConfig
from kubebridge.exceptions import (
    KubectlError,
    KubectlNotInstalledError,
    KubectlTimeoutError,
)
from kubebridge.models import ClusterContext, KubernetesService

logger = logging.getLogger("kubebridge.kubectl")


class KubectlClient:
    """Thin wrapper around the kubectl CLI.

    All calls go through run(), which applies the configured context and
    timeout and turns process failures into KubectlError subclasses.
    """

    def __init__(self, config: BridgeConfig | None = None) -> None:
        """Initialize the client.

        Args:
            config: kubebridge configuration. Defaults to BridgeConfig().
        """
        self._config = config or BridgeConfig()

    def run(
        self,
        *args: str,
        check: bool = True,
        timeout: int | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run a kubectl command.

        Args:
            *args: Command arguments (without 'kubectl').
            check: Raise on non-zero exit (default True).
            timeout: Timeout in seconds. None uses the configured timeout,
                     0 disables the timeout.

        Returns:
            CompletedProcess result.

        Raises:
            KubectlNotInstalledError: If kubectl is not installed.
            KubectlTimeoutError: If the command times out.
            KubectlError: If the command fails and check=True.
        """
        cmd = [self._config.kubectl]

        if self._config.context:
            cmd.extend(["--context", self._config.context])

        cmd.extend(args)

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
            cmd_str = " ".join(cmd)
            raise KubectlTimeoutError(
                f"kubectl command timed out after {timeout_value}s: {cmd_str}\n"
                "Check your cluster connectivity and try: kubectl cluster-info"
            ) from None
        except FileNotFoundError as e:
            raise KubectlNotInstalledError(
                f"{self._config.kubectl} not found. Install kubectl or set "
                "KUBEBRIDGE_KUBECTL to its location."
            ) from e

        if check and result.returncode != 0:
            raise KubectlError(f"kubectl command failed: {result.stderr.strip()}")

        return result

    def _get_json(self, *args: str) -> dict[str, Any]:
        result = self.run(*args, "-o", "json")
        try:
            return json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            raise KubectlError(f"Unexpected kubectl output: {e}") from e

    def get_current_context(self) -> ClusterContext:
        """Get the cluster and namespace of the current kubeconfig context.

        Returns:
            ClusterContext for the active context. The namespace defaults
            to "default" when the context does not set one.
        """
        data = self._get_json("config", "view", "--minify")
        contexts = data.get("contexts") or [{}]
        entry = contexts[0]
        context = entry.get("context") or {}

        return ClusterContext(
            kubeconfig_path=self._config.resolve_kubeconfig(),
            cluster=context.get("cluster", ""),
            namespace=context.get("namespace") or "default",
            name=data.get("current-context") or entry.get("name"),
        )

    def get_namespaces(self, kubeconfig_path: str) -> list[str]:
        """List namespace names visible with the given kubeconfig.

        Raises:
            KubectlError: If the namespaces cannot be listed.
        """
        data = self._get_json("--kubeconfig", kubeconfig_path, "get", "namespaces")
        return [item["metadata"]["name"] for item in data.get("items", [])]

    def get_services(self, namespace: str) -> list[KubernetesService]:
        """List the services in a namespace.

        Raises:
            KubectlError: If the services cannot be listed.
        """
        data = self._get_json("get", "services", "-n", namespace)
        services = []
        for item in data.get("items", []):
            services.append(
                KubernetesService(
                    name=item["metadata"]["name"],
                    namespace=item["metadata"].get("namespace", namespace),
                )
            )
        return services

    def get_pod_names(self, service_name: str, namespace: str) -> list[str] | None:
        """Get the names of the pods backing a service.

        Args:
            service_name: Name of the service.
            namespace: Namespace of the service.

        Returns:
            Pod names (possibly empty), or None if the lookup failed.
        """
        try:
            service = self._get_json("get", "service", service_name, "-n", namespace)
            selector = (service.get("spec") or {}).get("selector") or {}
            if not selector:
                return []

            labels = ",".join(f"{k}={v}" for k, v in sorted(selector.items()))
            result = self.run(
                "get", "pods", "-n", namespace, "-l", labels,
                "-o", "jsonpath={.items[*].metadata.name}",
            )
        except KubectlError as e:
            logger.warning("Failed to get pods for service %s: %s", service_name, e)
            return None

        return result.stdout.split()

    def get_container_names(self, name: str, namespace: str) -> list[str] | None:
        """Get the container names of a pod.

        Args:
            name: Pod name.
            namespace: Namespace of the pod.

        Returns:
            Container names, or None if the lookup failed.
        """
        try:
            result = self.run(
                "get", "pod", name, "-n", namespace,
                "-o", "jsonpath={.spec.containers[*].name}",
            )
        except KubectlError as e:
            logger.warning("Failed to get containers for pod %s: %s", name, e)
            return None

        return result.stdout.split()
