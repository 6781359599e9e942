"""Shared fixtures for kubebridge tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest


@pytest.fixture
def credentials_ok():
    """Make credential refresh succeed without calling the bridge CLI."""
    with patch("kubebridge.wizard.flow.refresh_credentials", return_value=True) as mock_refresh:
        yield mock_refresh
