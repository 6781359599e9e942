"""Data model for the connect wizard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from kubebridge.exceptions import IncompleteRequestError, UnknownResourceTypeError


class _Unset:
    """Marker for a field that has not been decided yet."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


class ResourceType(str, Enum):
    """Kind of workload being redirected."""

    POD = "pod"
    SERVICE = "service"

    @classmethod
    def parse(cls, value: ResourceType | str) -> ResourceType:
        """Convert a user supplied value to a ResourceType.

        Args:
            value: A ResourceType or its string value (case-insensitive).

        Returns:
            The matching ResourceType.

        Raises:
            UnknownResourceTypeError: If the value names no known type.
        """
        if isinstance(value, ResourceType):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnknownResourceTypeError(f"Unexpected resource type {value}") from None


@dataclass(frozen=True)
class ClusterContext:
    """Snapshot of the active kubeconfig context.

    Attributes:
        kubeconfig_path: Path of the kubeconfig file in use.
        cluster: Cluster name of the current context.
        namespace: Namespace of the current context.
        name: Name of the current context.
    """

    kubeconfig_path: str
    cluster: str
    namespace: str
    name: str | None = None


@dataclass(frozen=True)
class KubernetesService:
    """A service as listed by kubectl."""

    name: str
    namespace: str


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Immutable description of the workload to redirect.

    ``isolate_as`` is ``None`` when the user explicitly declined isolation
    and ``UNSET`` when isolation does not apply (pod targets).
    """

    resource_name: str
    resource_type: ResourceType
    target_cluster: str
    target_namespace: str
    ports: tuple[int, ...]
    container_name: str | None = None
    launch_configuration_name: str | None = None
    isolate_as: Any = UNSET

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the debug session launcher.

        Optional fields are omitted when unset. An explicit ``isolateAs: null``
        is kept so the launcher can tell "declined" from "not applicable".
        """
        data: dict[str, Any] = {
            "resourceName": self.resource_name,
            "resourceType": self.resource_type.value,
            "targetCluster": self.target_cluster,
            "targetNamespace": self.target_namespace,
            "ports": list(self.ports),
        }
        if self.container_name is not None:
            data["containerName"] = self.container_name
        if self.launch_configuration_name is not None:
            data["launchConfigurationName"] = self.launch_configuration_name
        if self.isolate_as is not UNSET:
            data["isolateAs"] = self.isolate_as
        return data


@dataclass
class ConnectionRequest:
    """Partially built connection descriptor.

    Filled in step by step by the connect flow and promoted with build()
    once the terminal step is reached.
    """

    resource_name: str | None = None
    resource_type: ResourceType | None = None
    target_cluster: str | None = None
    target_namespace: str | None = None
    container_name: str | None = None
    ports: list[int] | None = None
    launch_configuration_name: str | None = None
    isolate_as: Any = UNSET

    def build(self) -> ConnectionDescriptor:
        """Promote the request to an immutable descriptor.

        Raises:
            IncompleteRequestError: If a required field is still missing.
        """
        required = {
            "resource_name": self.resource_name,
            "resource_type": self.resource_type,
            "target_cluster": self.target_cluster,
            "target_namespace": self.target_namespace,
            "ports": self.ports,
        }
        missing = [name for name, value in required.items() if value is None]
        if missing:
            raise IncompleteRequestError(
                f"Connection request is missing: {', '.join(missing)}"
            )

        return ConnectionDescriptor(
            resource_name=self.resource_name,
            resource_type=self.resource_type,
            target_cluster=self.target_cluster,
            target_namespace=self.target_namespace,
            ports=tuple(self.ports),
            container_name=self.container_name,
            launch_configuration_name=self.launch_configuration_name,
            isolate_as=self.isolate_as,
        )

    def diagnostics(self) -> dict[str, str | None]:
        """Return the partial contents for error reports."""
        return {
            "resourceName": self.resource_name,
            "ports": ",".join(str(p) for p in self.ports) if self.ports is not None else None,
            "launchConfigurationName": self.launch_configuration_name,
            "isolateAs": None if self.isolate_as is UNSET else self.isolate_as,
            "targetCluster": self.target_cluster,
            "targetNamespace": self.target_namespace,
            "containerName": self.container_name,
        }

    def summary(self) -> dict[str, str | None]:
        """Return which fields are set, for the wizard stop event."""

        def is_set(value: Any) -> str:
            return str(bool(value)).lower()

        return {
            "isResourceNameSet": is_set(self.resource_name),
            "ports": ",".join(str(p) for p in self.ports) if self.ports is not None else None,
            "launchConfigurationName": self.launch_configuration_name,
            "isIsolateAsSet": is_set(self.isolate_as),
            "isTargetClusterSet": is_set(self.target_cluster),
            "isTargetNamespaceSet": is_set(self.target_namespace),
            "isContainerNameSet": is_set(self.container_name),
        }
