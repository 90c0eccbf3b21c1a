"""Test configuration ensuring local package import when editable install not active."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from jeera.transport import JiraTransport  # noqa: E402
from tests.unit.base import make_config, mock_http  # noqa: E402

JIRA_ENV_VARS = (
    "JIRA_BASE_URL",
    "JIRA_USERNAME",
    "JIRA_PAT",
    "JIRA_API_TOKEN",
    "JIRA_USE_PAT",
    "JIRA_ACCEPTANCE_CRITERIA_FIELD",
    "JIRA_STORY_POINTS_FIELD",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every JIRA_* variable; values set during the test are rolled back."""
    for name in JIRA_ENV_VARS:
        # setenv first so monkeypatch records the original state for undo
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def http():
    return mock_http()


@pytest.fixture
def transport(config, http):
    return JiraTransport(config, session=http)
