"""Terminal rendering of the connect wizard prompts."""

from __future__ import annotations

import typer

from kubebridge.wizard.prompts import Choice, ChoicePrompt, StepDescriptor, TextPrompt


class TerminalSurface:
    """Renders wizard prompts on stderr so stdout stays free for the result."""

    def _header(self, descriptor: StepDescriptor) -> None:
        typer.secho(
            f"[{descriptor.step}/{descriptor.total_steps}] {descriptor.title}",
            bold=True,
            err=True,
        )
        typer.echo(descriptor.placeholder, err=True)

    def show_choice(self, prompt: ChoicePrompt) -> Choice | None:
        descriptor = prompt.descriptor
        choices = descriptor.choices
        self._header(descriptor)
        for index, choice in enumerate(choices, start=1):
            typer.echo(f"  {index}) {choice.label}", err=True)
            if choice.detail:
                typer.secho(f"     {choice.detail}", dim=True, err=True)

        while True:
            try:
                raw = typer.prompt(
                    "Select",
                    default=str(descriptor.active_index + 1),
                    err=True,
                )
            except typer.Abort:
                return None

            try:
                index = int(raw)
            except ValueError:
                index = 0
            if 1 <= index <= len(choices):
                return choices[index - 1]
            typer.echo(f"Enter a number between 1 and {len(choices)}", err=True)

    def show_text_input(self, prompt: TextPrompt) -> str | None:
        self._header(prompt.descriptor)
        if prompt.validation_message:
            typer.secho(prompt.validation_message, fg=typer.colors.RED, err=True)

        while True:
            try:
                value = typer.prompt(
                    "Value",
                    default=prompt.value,
                    show_default=bool(prompt.value),
                    err=True,
                )
            except typer.Abort:
                return None

            message = prompt.validate(value)
            if message is None:
                return value
            typer.secho(message, fg=typer.colors.RED, err=True)

    def show_placeholder(self, descriptor: StepDescriptor) -> None:
        typer.secho(
            f"[{descriptor.step}/{descriptor.total_steps}] {descriptor.placeholder}",
            dim=True,
            err=True,
        )

    def hide_placeholder(self) -> None:
        # Lines already written to the terminal stay visible
        pass

    def show_info(self, message: str) -> None:
        typer.echo(message, err=True)

    def show_error(self, message: str) -> None:
        typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)

    def launch(self, target: str) -> None:
        typer.launch(target)
