"""Entry point of the connect wizard."""

from __future__ import annotations

from collections.abc import Callable

from kubebridge import PRODUCT_NAME
from kubebridge.clients.binaries import BinariesUtility
from kubebridge.config import BridgeConfig
from kubebridge.launch_config import ensure_launch_file, get_available_configurations
from kubebridge.logger import Logger, TelemetryEvent
from kubebridge.models import ConnectionDescriptor, ResourceType
from kubebridge.prerequisites import validate_prerequisites
from kubebridge.routing import generate_routing_header, get_username
from kubebridge.wizard.flow import ConnectFlow
from kubebridge.wizard.prompts import ChoicePrompt, InteractionSurface, WizardHooks
from kubebridge.wizard.states import (
    Abort,
    AbortReason,
    Complete,
    Continue,
    Fatal,
    Notify,
    Outcome,
    Prompt,
)


class ConnectWizard:
    """Runs the connect flow against an interaction surface.

    The wizard owns the failure boundary of a run: any error raised by a
    step is logged with the partial request, reported once to the user, and
    turned into a None result.
    """

    def __init__(
        self,
        surface: InteractionSurface,
        config: BridgeConfig | None = None,
        binaries: BinariesUtility | None = None,
        logger: Logger | None = None,
        hooks: WizardHooks | None = None,
        check_prerequisites: Callable[[], Callable[[], None] | None] = validate_prerequisites,
    ) -> None:
        self._surface = surface
        self._config = config or BridgeConfig()
        self._binaries = binaries or BinariesUtility(self._config)
        self._logger = logger or Logger("kubebridge.wizard")
        self._hooks = hooks or self._default_hooks()
        self._check_prerequisites = check_prerequisites

    def run(
        self,
        reason: str,
        target_name: str | None = None,
        target_namespace: str | None = None,
        target_type: ResourceType | str = ResourceType.SERVICE,
    ) -> ConnectionDescriptor | None:
        """Ask the user which workload to redirect.

        Args:
            reason: What started the wizard, for telemetry.
            target_name: Pod or service chosen up front, if any.
            target_namespace: Namespace of target_name.
            target_type: Whether the target is a pod or a service.

        Returns:
            The connection descriptor, or None if the run was cancelled,
            could not start, or failed.
        """
        alert = self._check_prerequisites()
        if alert is not None:
            alert()
            return None

        type_name = str(getattr(target_type, "value", target_type))
        self._logger.trace(
            TelemetryEvent.CONNECT_WIZARD_START,
            {"wizardReason": reason, "type": type_name},
        )

        kubectl = self._binaries.try_get_kubectl()
        bridge = self._binaries.try_get_bridge()
        if kubectl is None or bridge is None:
            return None

        flow: ConnectFlow | None = None
        descriptor: ConnectionDescriptor | None = None
        try:
            context = kubectl.get_current_context()
            resource_type = ResourceType.parse(target_type)
            flow = ConnectFlow(
                resource_type,
                context,
                kubectl,
                bridge,
                self._binaries,
                self._logger,
                config=self._config,
                hooks=self._hooks,
            )
            descriptor = self._drive(flow, flow.start(target_name, target_namespace))
        except Exception as e:
            properties: dict[str, str | None] = {"wizardReason": reason, "type": type_name}
            if flow is not None:
                properties.update(flow.request.diagnostics())
                properties["isCreatingNewLaunchConfiguration"] = str(
                    flow.creating_new_launch_configuration
                ).lower()
            self._logger.error(TelemetryEvent.CONNECT_WIZARD_ERROR, e, properties)
            self._surface.show_error(f"Failed to configure {PRODUCT_NAME}: {e}")
        finally:
            self._surface.hide_placeholder()
            properties = {"wizardReason": reason, "type": type_name}
            if flow is not None:
                properties["isWizardComplete"] = str(flow.complete).lower()
                properties.update(flow.request.summary())
                properties["isCreatingNewLaunchConfiguration"] = str(
                    flow.creating_new_launch_configuration
                ).lower()
            self._logger.trace(TelemetryEvent.CONNECT_WIZARD_STOP, properties)

        if flow is None or not flow.complete:
            return None
        return descriptor

    def _drive(self, flow: ConnectFlow, outcome: Outcome) -> ConnectionDescriptor | None:
        """Feed outcomes back into the flow until it reaches a terminal one."""
        while True:
            if isinstance(outcome, Continue):
                outcome = flow.advance(outcome.state)
            elif isinstance(outcome, Notify):
                self._surface.show_placeholder(outcome.descriptor)
                outcome = flow.advance(outcome.state)
            elif isinstance(outcome, Prompt):
                self._surface.hide_placeholder()
                if isinstance(outcome.request, ChoicePrompt):
                    response: object = self._surface.show_choice(outcome.request)
                else:
                    response = self._surface.show_text_input(outcome.request)
                if response is None:
                    return self._abort(AbortReason.CANCELLED)
                outcome = flow.advance(outcome.state, response)
            elif isinstance(outcome, Abort):
                return self._abort(outcome.reason)
            elif isinstance(outcome, Fatal):
                raise outcome.error
            elif isinstance(outcome, Complete):
                return outcome.descriptor
            else:
                raise TypeError(f"Unexpected outcome {outcome!r}")

    def _abort(self, reason: AbortReason) -> None:
        self._surface.hide_placeholder()
        self._logger.trace(TelemetryEvent.CONNECT_WIZARD_ABORT, {"reason": reason.value})
        if reason is AbortReason.CREDENTIALS:
            self._surface.show_info(
                "Unable to refresh the credentials of the current context. "
                "Check your kubeconfig and try again."
            )
        return None

    def _default_hooks(self) -> WizardHooks:
        return WizardHooks(
            launch_configurations=lambda: get_available_configurations(self._config.workspace),
            create_launch_configuration=self._create_launch_configuration,
            routing_token=lambda: generate_routing_header(get_username()),
            open_url=self._surface.launch,
        )

    def _create_launch_configuration(self) -> None:
        self._surface.show_info(
            f"Create your new launch configuration, and restart the configuration of "
            f"{PRODUCT_NAME}."
        )
        launch_file = ensure_launch_file(self._config.workspace)
        self._surface.launch(str(launch_file))
