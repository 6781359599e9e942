"""Tests for port validation."""

from __future__ import annotations

import pytest

from kubebridge.wizard.validation import (
    PORT_RANGE_MESSAGE,
    PORT_REQUIRED_MESSAGE,
    validate_port,
)


@pytest.mark.parametrize("value", ["0", "80", "8080", "65535", "+80", " 80 "])
def test_accepts_ports_in_range(value: str):
    """Ports from 0 to 65535 are valid."""
    assert validate_port(value) is None


@pytest.mark.parametrize("value", ["", None])
def test_empty_value_is_required(value: str | None):
    """An empty answer asks for a value."""
    assert validate_port(value) == PORT_REQUIRED_MESSAGE


@pytest.mark.parametrize("value", ["65536", "-1", "abc", "80.5", "1e3", "8_080", "\u0668\u0660", " "])
def test_rejects_invalid_ports(value: str):
    """Non-integers and out of range values get the range message."""
    assert validate_port(value) == PORT_RANGE_MESSAGE


def test_messages():
    """Messages tell the user how to skip redirection."""
    assert "enter 0" in PORT_REQUIRED_MESSAGE
    assert PORT_RANGE_MESSAGE == "Port must be a number between 0 and 65535"


def test_only_ascii_digits_are_ports():
    """Values int() would read but a user would not type as a port are rejected."""
    assert validate_port("8_080") == PORT_RANGE_MESSAGE
    assert validate_port("٨٠") == PORT_RANGE_MESSAGE
