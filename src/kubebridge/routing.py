"""Per-developer routing token used for isolated redirection."""

from __future__ import annotations

import getpass
import hashlib
import platform


def get_username() -> str:
    """Return the local user name, or an empty string if unknown."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def generate_routing_header(username: str, hostname: str | None = None) -> str:
    """Generate the routing subdomain for a developer.

    The value is stable for a given user on a given machine, so isolated
    sessions keep the same subdomain across runs.

    Args:
        username: Local user name.
        hostname: Machine name (defaults to platform.node()).

    Returns:
        Token in format "{user}-{hash}", lowercase alphanumeric.
    """
    hostname = platform.node() if hostname is None else hostname

    sanitized = "".join(c for c in username.lower() if c.isascii() and c.isalnum())
    sanitized = sanitized[:8] or "user"

    digest = hashlib.sha256(f"{username}@{hostname}".encode()).hexdigest()[:4]
    return f"{sanitized}-{digest}"
