"""Discovery of the local launch configurations offered by the wizard."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger("kubebridge.launch_config")

# Configurations produced by kubebridge itself, or by the tools it replaces
CONNECT_PREFIXES = ("kubebridge", "bridge-to-kubernetes")
LEGACY_DEV_SPACES_MARKER = "(AZDS)"

EMPTY_LAUNCH_FILE = {"version": "0.2.0", "configurations": []}


def detect_launch_config(workspace: Path) -> Path | None:
    """Return the workspace .vscode/launch.json, or None if it does not exist."""
    launch_file = workspace / ".vscode" / "launch.json"
    return launch_file if launch_file.is_file() else None


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments and trailing commas from JSON text.

    String literals are copied untouched, so URLs survive.
    """
    out: list[str] = []
    i = 0
    in_string = False
    while i < len(text):
        c = text[i]
        if in_string:
            out.append(c)
            if c == "\\" and i + 1 < len(text):
                out.append(text[i + 1])
                i += 1
            elif c == '"':
                in_string = False
        elif c == '"':
            in_string = True
            out.append(c)
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = len(text) if end == -1 else end
            continue
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = len(text) if end == -1 else end + 2
            continue
        elif c in "]}":
            # Drop a trailing comma before the closing bracket
            j = len(out) - 1
            while j >= 0 and out[j].isspace():
                j -= 1
            if j >= 0 and out[j] == ",":
                del out[j]
            out.append(c)
        else:
            out.append(c)
        i += 1
    return "".join(out)


def load_launch_configurations(workspace: Path) -> list[dict[str, Any]]:
    """Read all launch configurations defined in the workspace.

    Returns:
        Configuration objects, empty if there is no readable launch file.
    """
    launch_file = detect_launch_config(workspace)
    if launch_file is None:
        return []

    try:
        data = json.loads(strip_json_comments(launch_file.read_text(encoding="utf-8")))
    # ValueError covers both JSONDecodeError and UnicodeDecodeError
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable launch file %s: %s", launch_file, e)
        return []

    configurations = data.get("configurations", []) if isinstance(data, dict) else []
    return [c for c in configurations if isinstance(c, dict) and c.get("name")]


def is_connect_configuration(config_type: str | None) -> bool:
    return bool(config_type) and config_type.startswith(CONNECT_PREFIXES)


def is_legacy_dev_spaces_configuration(name: str | None) -> bool:
    return bool(name) and LEGACY_DEV_SPACES_MARKER in name


def is_connect_task(task: str | None) -> bool:
    return bool(task) and task.startswith(CONNECT_PREFIXES)


def get_available_configurations(workspace: Path) -> list[dict[str, Any]]:
    """Return the launch configurations the user may pick from.

    Configurations generated by a previous connect run, legacy Dev Spaces
    configurations and configurations chained to a connect task are left
    out.
    """
    return [
        config
        for config in load_launch_configurations(workspace)
        if not is_connect_configuration(config.get("type"))
        and not is_legacy_dev_spaces_configuration(config.get("name"))
        and not is_connect_task(config.get("preLaunchTask"))
    ]


def ensure_launch_file(workspace: Path) -> Path:
    """Return the launch file, creating an empty one if none exists."""
    launch_file = detect_launch_config(workspace)
    if launch_file is not None:
        return launch_file

    launch_file = workspace / ".vscode" / "launch.json"
    launch_file.parent.mkdir(parents=True, exist_ok=True)
    launch_file.write_text(json.dumps(EMPTY_LAUNCH_FILE, indent=4) + "\n")
    return launch_file
