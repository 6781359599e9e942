"""Step logic of the connect wizard.

ConnectFlow is driven one state at a time: advance(state, response)
performs the discovery the step needs, records the user's answer in the
shared ConnectionRequest, and returns the outcome telling the host what
to do next. It never talks to a terminal or editor itself, which keeps
it testable with plain fakes.
"""

from __future__ import annotations

from dataclasses import replace

from kubebridge import PRODUCT_NAME
from kubebridge.clients.binaries import BinariesUtility
from kubebridge.clients.bridge import BridgeClient
from kubebridge.clients.kubectl import KubectlClient
from kubebridge.config import BridgeConfig
from kubebridge.credentials import refresh_credentials
from kubebridge.exceptions import (
    ConnectError,
    KubectlError,
    MissingTargetError,
    NamespaceMismatchError,
    NamespaceNotFoundError,
    NoServicesFoundError,
)
from kubebridge.logger import Logger, TelemetryEvent
from kubebridge.models import ClusterContext, ConnectionRequest, ResourceType
from kubebridge.wizard.prompts import (
    Choice,
    ChoiceAction,
    ChoicePrompt,
    StepDescriptor,
    TextPrompt,
    WizardHooks,
)
from kubebridge.wizard.states import (
    Abort,
    AbortReason,
    CollectPort,
    Complete,
    Continue,
    Fatal,
    HandlePod,
    Notify,
    Outcome,
    PickContainer,
    PickService,
    Prevalidate,
    Prompt,
    ResolveContainers,
    SelectIsolation,
    SelectLaunchConfiguration,
    State,
)
from kubebridge.wizard.validation import validate_port

SERVICE_STEPS = 4
POD_STEPS = 3  # no isolation step for pods

PORT_PROMPT = "Enter your local port such as 80, or 0 if traffic redirection is not needed"


def normalize_pod_name(pod_name: str) -> str:
    """Strip the per-pod suffix so the name survives pod restarts.

    "myapp-7d9f8c6b5-abcde" becomes "myapp-7d9f8c6b5"; a name without
    hyphens is returned unchanged.
    """
    segments = pod_name.split("-")
    if len(segments) > 1:
        return "-".join(segments[:-1])
    return pod_name


class ConnectFlow:
    """State machine choosing the workload to redirect.

    One instance serves a single run. The request it fills in is owned by
    the flow and only promoted to a ConnectionDescriptor by the terminal
    step.
    """

    def __init__(
        self,
        resource_type: ResourceType,
        context: ClusterContext,
        kubectl: KubectlClient,
        bridge: BridgeClient,
        binaries: BinariesUtility,
        logger: Logger,
        config: BridgeConfig | None = None,
        hooks: WizardHooks | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.request = ConnectionRequest()
        self.total_steps = SERVICE_STEPS
        self.complete = False
        self.creating_new_launch_configuration = False

        self._context = context
        self._kubectl = kubectl
        self._bridge = bridge
        self._binaries = binaries
        self._logger = logger
        self._config = config or BridgeConfig()
        self._hooks = hooks or WizardHooks()
        self._handlers = {
            Prevalidate: self.prevalidate,
            PickService: self.pick_service,
            HandlePod: self.handle_pod,
            ResolveContainers: self.resolve_containers,
            PickContainer: self.pick_container,
            CollectPort: self.collect_port,
            SelectLaunchConfiguration: self.select_launch_config,
            SelectIsolation: self.select_isolation,
        }

    def start(self, target_name: str | None, target_namespace: str | None) -> Outcome:
        """Return the first outcome of a run."""
        if self.resource_type is ResourceType.POD:
            if target_name is None:
                # Pods cannot be picked interactively
                return Fatal(
                    MissingTargetError("Target resource name cannot be unset for resource type pod")
                )
            self.total_steps = POD_STEPS

        return Continue(Prevalidate(target_name, target_namespace))

    def advance(self, state: State, response: object = None) -> Outcome:
        """Run the step for ``state``.

        Args:
            state: State returned by the previous outcome.
            response: The host's answer when ``state`` came from a Prompt.

        Returns:
            The next outcome.
        """
        return self._handlers[type(state)](state, response)

    # Steps

    def prevalidate(self, state: Prevalidate, response: object = None) -> Outcome:
        """Check that an explicit target belongs to the current context."""
        kind = self.resource_type.value
        if not state.announced:
            if state.target_name is not None:
                placeholder = f"Redirecting {kind} '{state.target_name}' to your machine..."
            else:
                placeholder = f"Choose a {kind} to redirect to your machine"
            return Notify(self._descriptor(1, placeholder), replace(state, announced=True))

        ctx = self._context
        if not refresh_credentials(ctx.kubeconfig_path, ctx.namespace, self._bridge, self._logger):
            return Abort(AbortReason.CREDENTIALS)

        if state.target_name is not None and state.target_namespace is not None:
            if ctx.namespace and ctx.namespace != state.target_namespace:
                return Fatal(
                    NamespaceMismatchError(
                        f"The {kind} '{state.target_name}' belongs to the namespace "
                        f"'{state.target_namespace}', but the current context targets namespace "
                        f"'{ctx.namespace}'. Please update your kubeconfig to target the "
                        "correct context."
                    )
                )

            namespaces: list[str] | None = None
            try:
                namespaces = self._kubectl.get_namespaces(ctx.kubeconfig_path)
            except KubectlError as e:
                self._logger.warning("Failed to list namespaces", e)

            if namespaces is not None and state.target_namespace not in namespaces:
                return Fatal(
                    NamespaceNotFoundError(
                        f"Failed to find the namespace '{state.target_namespace}' "
                        f"in cluster '{ctx.cluster}'"
                    )
                )

        if self.resource_type is ResourceType.POD:
            return Continue(HandlePod(state.target_name))
        return Continue(PickService(target_name=state.target_name))

    def pick_service(self, state: PickService, response: object = None) -> Outcome:
        """List the services of the namespace and let the user pick one."""
        if isinstance(response, Choice):
            return self._select_service(response.label)

        kubectl = self._binaries.try_get_kubectl()
        if kubectl is None:
            return Abort(AbortReason.UNAVAILABLE)
        self._kubectl = kubectl

        ctx = self._context
        self.request.target_cluster = ctx.cluster
        self.request.target_namespace = ctx.namespace
        self.request.resource_type = ResourceType.SERVICE

        services = [
            s.name
            for s in kubectl.get_services(ctx.namespace)
            if s.name not in self._config.excluded_services
        ]
        self._logger.trace(TelemetryEvent.CONNECT_SERVICE_LIST, {"count": str(len(services))})
        if not services:
            return Fatal(
                NoServicesFoundError(
                    f'Failed to find any services running in the namespace "{ctx.namespace}" '
                    f'of cluster "{ctx.cluster}"'
                )
            )

        names = tuple(sorted(services))
        if state.target_name in names:
            return self._select_service(state.target_name)

        choices = tuple(Choice(label=name) for name in names)
        descriptor = self._descriptor(1, "Choose a service to redirect to your machine", choices)
        return Prompt(ChoicePrompt(descriptor), state)

    def _select_service(self, name: str) -> Outcome:
        self.request.resource_name = name
        pod_names = self._kubectl.get_pod_names(name, self.request.target_namespace)
        if pod_names is None:
            self._logger.error(
                TelemetryEvent.KUBECTL_GET_POD_NAMES_ERROR,
                ConnectError(f"Failed to get the pods of service '{name}'"),
            )
        if not pod_names:
            self.request.container_name = None
            return Continue(CollectPort())

        # Services backed by several pods are assumed to run the same
        # containers in every pod. The bridge CLI picks the first pod it is
        # given, so the same one is inspected here even though the order
        # kubectl returns is not guaranteed.
        return Continue(ResolveContainers(pod_names[0]))

    def handle_pod(self, state: HandlePod, response: object = None) -> Outcome:
        """Record an explicitly targeted pod."""
        self.request.resource_name = normalize_pod_name(state.target_name)
        self.request.resource_type = ResourceType.POD
        self.request.target_cluster = self._context.cluster
        self.request.target_namespace = self._context.namespace
        return Continue(ResolveContainers(state.target_name))

    def resolve_containers(self, state: ResolveContainers, response: object = None) -> Outcome:
        """Decide whether the user must choose a container."""
        self.request.container_name = None
        next_state = CollectPort()

        if not state.pod_name:
            self._logger.error(
                TelemetryEvent.KUBECTL_GET_POD_NAME_ERROR, ConnectError("Pod name is not set")
            )
            return Continue(next_state)

        namespace = self.request.target_namespace
        if not namespace:
            self._logger.error(
                TelemetryEvent.KUBECTL_GET_NAMESPACE_ERROR, ConnectError("Namespace is not set")
            )
            return Continue(next_state)

        containers = self._kubectl.get_container_names(state.pod_name, namespace)
        if containers is None:
            self._logger.error(
                TelemetryEvent.KUBECTL_GET_CONTAINER_NAMES_ERROR,
                ConnectError(f"Failed to get the containers of pod '{state.pod_name}'"),
            )
            return Continue(next_state)

        if len(containers) > 1:
            return Continue(PickContainer(tuple(sorted(containers))))

        if containers:
            self.request.container_name = containers[0]
        return Continue(next_state)

    def pick_container(self, state: PickContainer, response: object = None) -> Outcome:
        if isinstance(response, Choice):
            self.request.container_name = response.label
            return Continue(CollectPort())

        choices = tuple(Choice(label=name) for name in state.containers)
        descriptor = self._descriptor(1, "Choose a container to redirect to your machine", choices)
        return Prompt(ChoicePrompt(descriptor), state)

    def collect_port(self, state: CollectPort, response: object = None) -> Outcome:
        """Ask for the local port that receives the redirected traffic."""
        if response is None:
            return Prompt(self._port_prompt(), state)

        value = str(response)
        message = validate_port(value)
        if message is not None:
            return Prompt(self._port_prompt(value, message), state)

        self.request.ports = [int(value)]
        return Continue(SelectLaunchConfiguration())

    def _port_prompt(self, value: str = "", message: str | None = None) -> TextPrompt:
        return TextPrompt(
            descriptor=self._descriptor(2, PORT_PROMPT),
            prompt=PORT_PROMPT,
            validate=validate_port,
            value=value,
            validation_message=message,
        )

    def select_launch_config(
        self, state: SelectLaunchConfiguration, response: object = None
    ) -> Outcome:
        """Let the user choose how their code runs locally."""
        if not isinstance(response, Choice):
            choices = tuple(
                Choice(
                    label=config["name"],
                    detail="Choose this launch configuration if it is the one you use "
                    "to run your code locally",
                )
                for config in self._hooks.launch_configurations()
            ) + (
                Choice(
                    label="Create a new launch configuration",
                    detail=f"{PRODUCT_NAME} requires a valid launch configuration "
                    "to run your code locally",
                    action=ChoiceAction.CREATE_LAUNCH_CONFIGURATION,
                ),
                Choice(
                    label=f"Configure {PRODUCT_NAME} without a launch configuration",
                    detail=f"{PRODUCT_NAME} will connect to your cluster, but you will "
                    "need to run your code manually",
                    action=ChoiceAction.NO_LAUNCH_CONFIGURATION,
                ),
            )
            descriptor = self._descriptor(
                3, "Choose the launch configuration to use to run your component locally", choices
            )
            return Prompt(ChoicePrompt(descriptor), state)

        if response.action is ChoiceAction.CREATE_LAUNCH_CONFIGURATION:
            self.creating_new_launch_configuration = True
            self._hooks.create_launch_configuration()
            return Abort(AbortReason.NEW_LAUNCH_CONFIGURATION)

        if response.action is ChoiceAction.NO_LAUNCH_CONFIGURATION:
            self.request.launch_configuration_name = None
        else:
            self.request.launch_configuration_name = response.label

        return Continue(SelectIsolation(self._hooks.routing_token()))

    def select_isolation(self, state: SelectIsolation, response: object = None) -> Outcome:
        """Ask whether only the developer's own requests are redirected."""
        if self.resource_type is ResourceType.POD:
            # Isolation is not supported for a single pod
            return self._complete()

        if isinstance(response, Choice) and response.action is not ChoiceAction.LEARN_MORE:
            if response.action is ChoiceAction.ISOLATE:
                self.request.isolate_as = state.routing_token
            else:
                self.request.isolate_as = None
            return self._complete()

        if isinstance(response, Choice):
            self._hooks.open_url(self._config.isolation_help_url)

        choices = (
            Choice(
                label="No",
                detail="Redirect all incoming requests to your machine, including those "
                "from other developers.",
                action=ChoiceAction.NO_ISOLATION,
            ),
            Choice(
                label="Yes",
                detail=f'Only redirect requests from the "{state.routing_token}" subdomain '
                "(requires header propagation).",
                action=ChoiceAction.ISOLATE,
            ),
            Choice(label="Learn More", action=ChoiceAction.LEARN_MORE),
        )
        descriptor = self._descriptor(
            4,
            f'Isolate your local version of "{self.request.resource_name}" from other developers?',
            choices,
        )
        return Prompt(ChoicePrompt(descriptor), state)

    def _complete(self) -> Outcome:
        descriptor = self.request.build()
        self.complete = True
        return Complete(descriptor)

    # Presentation

    def title(self) -> str:
        """Title listing the resource and ports chosen so far."""
        title = "Connect to Kubernetes"
        if not self.request.resource_name:
            return title

        title += f" {self.resource_type.value}: {self.request.resource_name}"
        if self.request.ports:
            title += ":" + ",".join(str(p) for p in self.request.ports)
        return title

    def _descriptor(
        self,
        step: int,
        placeholder: str,
        choices: tuple[Choice, ...] = (),
    ) -> StepDescriptor:
        return StepDescriptor(
            title=self.title(),
            step=step,
            total_steps=self.total_steps,
            placeholder=placeholder,
            choices=choices,
        )
