"""Connect wizard: choose the workload to redirect to the local machine."""

from kubebridge.wizard.flow import ConnectFlow, normalize_pod_name
from kubebridge.wizard.orchestrator import ConnectWizard
from kubebridge.wizard.prompts import (
    Choice,
    ChoiceAction,
    ChoicePrompt,
    InteractionSurface,
    StepDescriptor,
    TextPrompt,
    WizardHooks,
)
from kubebridge.wizard.validation import validate_port

__all__ = [
    "Choice",
    "ChoiceAction",
    "ChoicePrompt",
    "ConnectFlow",
    "ConnectWizard",
    "InteractionSurface",
    "StepDescriptor",
    "TextPrompt",
    "WizardHooks",
    "normalize_pod_name",
    "validate_port",
]
