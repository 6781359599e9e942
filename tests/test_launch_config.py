"""Tests for launch configuration discovery."""

from __future__ import annotations

import json
from pathlib import Path

from kubebridge.launch_config import (
    detect_launch_config,
    ensure_launch_file,
    get_available_configurations,
    is_connect_configuration,
    is_connect_task,
    is_legacy_dev_spaces_configuration,
    load_launch_configurations,
    strip_json_comments,
)


def _write_launch(workspace: Path, content: str) -> Path:
    vscode = workspace / ".vscode"
    vscode.mkdir()
    launch_file = vscode / "launch.json"
    launch_file.write_text(content)
    return launch_file


class TestDetectLaunchConfig:
    """Tests for launch file detection."""

    def test_finds_vscode_launch(self, tmp_path: Path):
        """detect_launch_config finds .vscode/launch.json."""
        launch_file = _write_launch(tmp_path, "{}")

        assert detect_launch_config(tmp_path) == launch_file

    def test_ignores_root_launch_file(self, tmp_path: Path):
        """Only .vscode/launch.json is considered."""
        (tmp_path / "launch.json").write_text("{}")

        assert detect_launch_config(tmp_path) is None

    def test_returns_none_when_missing(self, tmp_path: Path):
        """detect_launch_config returns None without a launch file."""
        assert detect_launch_config(tmp_path) is None


class TestStripJsonComments:
    """Tests for strip_json_comments."""

    def test_removes_comments(self):
        """Line and block comments are removed."""
        text = '{\n  // line\n  "a": 1, /* block */ "b": 2\n}'

        assert json.loads(strip_json_comments(text)) == {"a": 1, "b": 2}

    def test_keeps_strings(self):
        """Comment markers inside strings are preserved."""
        text = '{"url": "http://example.com/*x*/", "q": "say \\"hi\\" // ok"}'

        data = json.loads(strip_json_comments(text))

        assert data["url"] == "http://example.com/*x*/"
        assert data["q"] == 'say "hi" // ok'

    def test_removes_trailing_commas(self):
        """Trailing commas are tolerated."""
        text = '{"configurations": [{"name": "a",},],}'

        assert json.loads(strip_json_comments(text)) == {"configurations": [{"name": "a"}]}


class TestLoadLaunchConfigurations:
    """Tests for reading launch configurations."""

    def test_reads_named_configurations(self, tmp_path: Path):
        """Entries without a name are skipped."""
        _write_launch(
            tmp_path,
            """{
                // Use IntelliSense to learn about possible attributes.
                "version": "0.2.0",
                "configurations": [
                    {"name": "Run web", "type": "python"},
                    {"type": "node"},
                ]
            }""",
        )

        configs = load_launch_configurations(tmp_path)

        assert configs == [{"name": "Run web", "type": "python"}]

    def test_invalid_file_is_ignored(self, tmp_path: Path):
        """A broken launch file yields no configurations."""
        _write_launch(tmp_path, "{not json")

        assert load_launch_configurations(tmp_path) == []

    def test_undecodable_file_is_ignored(self, tmp_path: Path):
        """A launch file that is not UTF-8 yields no configurations."""
        launch_file = _write_launch(tmp_path, "")
        launch_file.write_bytes(b"\xff\xfe{}")

        assert load_launch_configurations(tmp_path) == []
        assert get_available_configurations(tmp_path) == []

    def test_no_file(self, tmp_path: Path):
        """No launch file yields no configurations."""
        assert load_launch_configurations(tmp_path) == []


class TestFilters:
    """Tests for filtering generated configurations."""

    def test_predicates(self):
        """Connect products and legacy variants are recognized."""
        assert is_connect_configuration("kubebridge.connect")
        assert is_connect_configuration("bridge-to-kubernetes.configuration")
        assert not is_connect_configuration("python")
        assert not is_connect_configuration(None)
        assert is_legacy_dev_spaces_configuration(".NET Core Launch (AZDS)")
        assert not is_legacy_dev_spaces_configuration("Run web")
        assert is_connect_task("bridge-to-kubernetes.resource")
        assert not is_connect_task("build")
        assert not is_connect_task(None)

    def test_get_available_configurations(self, tmp_path: Path):
        """Only user configurations are offered."""
        _write_launch(
            tmp_path,
            json.dumps(
                {
                    "configurations": [
                        {"name": "Run web", "type": "python"},
                        {"name": "Web with Kubernetes", "type": "kubebridge.connect"},
                        {"name": "Launch (AZDS)", "type": "coreclr"},
                        {
                            "name": "Chained",
                            "type": "node",
                            "preLaunchTask": "bridge-to-kubernetes.resource",
                        },
                        {"name": "Tests", "type": "node", "preLaunchTask": "build"},
                    ]
                }
            ),
        )

        names = [c["name"] for c in get_available_configurations(tmp_path)]

        assert names == ["Run web", "Tests"]


class TestEnsureLaunchFile:
    """Tests for ensure_launch_file."""

    def test_creates_empty_file(self, tmp_path: Path):
        """A missing launch file is created with no configurations."""
        launch_file = ensure_launch_file(tmp_path)

        assert launch_file == tmp_path / ".vscode" / "launch.json"
        assert json.loads(launch_file.read_text()) == {"version": "0.2.0", "configurations": []}

    def test_keeps_existing_file(self, tmp_path: Path):
        """An existing launch file is left untouched."""
        launch_file = _write_launch(tmp_path, '{"configurations": []} // mine')

        assert ensure_launch_file(tmp_path) == launch_file
        assert launch_file.read_text() == '{"configurations": []} // mine'
