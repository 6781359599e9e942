"""Prompt requests exchanged between the connect flow and its host."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ChoiceAction(str, Enum):
    """What picking a choice means, independent of its label."""

    ITEM = "item"
    CREATE_LAUNCH_CONFIGURATION = "create-launch-configuration"
    NO_LAUNCH_CONFIGURATION = "no-launch-configuration"
    ISOLATE = "isolate"
    NO_ISOLATION = "no-isolation"
    LEARN_MORE = "learn-more"


@dataclass(frozen=True)
class Choice:
    """One entry of a choice prompt."""

    label: str
    detail: str | None = None
    action: ChoiceAction = ChoiceAction.ITEM


@dataclass(frozen=True)
class StepDescriptor:
    """Presentation data for one wizard step.

    Attributes:
        title: Title summarizing what has been chosen so far.
        step: 1-based index of the step.
        total_steps: Number of steps on the current path.
        placeholder: Hint shown above the choices or input.
        choices: Choices to pick from (empty for text input).
        active_index: Index of the pre-highlighted choice.
    """

    title: str
    step: int
    total_steps: int
    placeholder: str
    choices: tuple[Choice, ...] = ()
    active_index: int = 0


@dataclass(frozen=True)
class ChoicePrompt:
    """Ask the user to pick one of descriptor.choices."""

    descriptor: StepDescriptor


@dataclass(frozen=True)
class TextPrompt:
    """Ask the user for free text.

    ``validate`` returns an error message for invalid input, or None.
    ``validation_message`` is set when the previous answer was rejected.
    """

    descriptor: StepDescriptor
    prompt: str
    validate: Callable[[str], str | None]
    value: str = ""
    validation_message: str | None = None


PromptRequest = ChoicePrompt | TextPrompt


class InteractionSurface(Protocol):
    """Host interface that renders prompts for the connect wizard.

    Returning None from show_choice or show_text_input means the user
    cancelled; the wizard then ends without a result.
    """

    def show_choice(self, prompt: ChoicePrompt) -> Choice | None:
        ...

    def show_text_input(self, prompt: TextPrompt) -> str | None:
        ...

    def show_placeholder(self, descriptor: StepDescriptor) -> None:
        ...

    def hide_placeholder(self) -> None:
        ...

    def show_info(self, message: str) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...

    def launch(self, target: str) -> None:
        """Open a URL or file with the default application."""
        ...


@dataclass
class WizardHooks:
    """Side effects and local lookups the connect flow relies on.

    Attributes:
        launch_configurations: Returns the launch configurations to offer.
        create_launch_configuration: Starts creation of a new configuration.
        routing_token: Returns the isolation subdomain of the local user.
        open_url: Opens a documentation page.
    """

    launch_configurations: Callable[[], list[dict]] = list
    create_launch_configuration: Callable[[], None] = lambda: None
    routing_token: Callable[[], str] = lambda: ""
    open_url: Callable[[str], None] = lambda url: None
