"""Input validation for the connect wizard."""

from __future__ import annotations

import re

MAX_PORT = 65535

PORT_REQUIRED_MESSAGE = "A value is required (enter 0 if traffic redirection is not needed)"
PORT_RANGE_MESSAGE = f"Port must be a number between 0 and {MAX_PORT}"

# int() alone would also take "8_080" and non-ASCII digits
_PORT_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def validate_port(value: str | None) -> str | None:
    """Validate a local port typed by the user.

    Port 0 is valid and means traffic is not redirected. Surrounding
    whitespace and a leading sign are tolerated.

    Returns:
        An error message, or None if the value is a valid port.
    """
    if value is None or len(value) == 0:
        return PORT_REQUIRED_MESSAGE

    value = value.strip()
    if not _PORT_PATTERN.fullmatch(value):
        return PORT_RANGE_MESSAGE

    port = int(value)
    if port < 0 or port > MAX_PORT:
        return PORT_RANGE_MESSAGE

    return None
