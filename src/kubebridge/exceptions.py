"""Exceptions raised by kubebridge."""

from __future__ import annotations


class KubeBridgeError(Exception):
    """Base exception for kubebridge errors."""

    pass


class KubectlError(KubeBridgeError):
    """A kubectl command failed."""

    pass


class KubectlNotInstalledError(KubectlError):
    """The kubectl CLI is not installed."""

    pass


class KubectlTimeoutError(KubectlError):
    """The kubectl CLI command timed out."""

    pass


class BridgeError(KubeBridgeError):
    """A bridge CLI command failed."""

    pass


class BridgeNotInstalledError(BridgeError):
    """The bridge CLI is not installed."""

    pass


class ConnectError(KubeBridgeError):
    """The connect wizard cannot continue with the current target."""

    pass


class NamespaceMismatchError(ConnectError):
    """The target namespace differs from the current context namespace."""

    pass


class NamespaceNotFoundError(ConnectError):
    """The target namespace does not exist in the current cluster."""

    pass


class NoServicesFoundError(ConnectError):
    """No user-facing services exist in the namespace."""

    pass


class MissingTargetError(ConnectError):
    """A required target resource name was not provided."""

    pass


class UnknownResourceTypeError(ConnectError):
    """The resource type is neither pod nor service."""

    pass


class IncompleteRequestError(ConnectError):
    """A connection request was promoted before its required fields were set."""

    pass
