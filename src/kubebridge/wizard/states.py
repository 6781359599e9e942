"""States of the connect flow and the outcomes of advancing them.

Each state carries only what its step needs. Everything the user has
chosen so far lives in the flow's ConnectionRequest.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from kubebridge.models import ConnectionDescriptor
from kubebridge.wizard.prompts import PromptRequest, StepDescriptor


@dataclass(frozen=True)
class Prevalidate:
    target_name: str | None = None
    target_namespace: str | None = None
    announced: bool = False


@dataclass(frozen=True)
class PickService:
    target_name: str | None = None


@dataclass(frozen=True)
class HandlePod:
    target_name: str


@dataclass(frozen=True)
class ResolveContainers:
    pod_name: str | None


@dataclass(frozen=True)
class PickContainer:
    containers: tuple[str, ...]


@dataclass(frozen=True)
class CollectPort:
    pass


@dataclass(frozen=True)
class SelectLaunchConfiguration:
    pass


@dataclass(frozen=True)
class SelectIsolation:
    routing_token: str


State = (
    Prevalidate
    | PickService
    | HandlePod
    | ResolveContainers
    | PickContainer
    | CollectPort
    | SelectLaunchConfiguration
    | SelectIsolation
)


class AbortReason(str, Enum):
    """Why a run ended without a result, short of an error."""

    CANCELLED = "cancelled"
    CREDENTIALS = "credentials"
    NEW_LAUNCH_CONFIGURATION = "new-launch-configuration"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class Continue:
    """Advance to ``state`` without user interaction."""

    state: State


@dataclass(frozen=True)
class Notify:
    """Show ``descriptor`` as a placeholder, then advance to ``state``."""

    descriptor: StepDescriptor
    state: State


@dataclass(frozen=True)
class Prompt:
    """Suspend until the host answers ``request``, then resume ``state``."""

    request: PromptRequest
    state: State


@dataclass(frozen=True)
class Abort:
    reason: AbortReason


@dataclass(frozen=True)
class Fatal:
    error: Exception


@dataclass(frozen=True)
class Complete:
    descriptor: ConnectionDescriptor


Outcome = Continue | Notify | Prompt | Abort | Fatal | Complete
