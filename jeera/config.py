"""Configuration for the Jira connection, resolved from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILES = (".env", ".env.local")

# Tokens longer than this are treated as Personal Access Tokens
PAT_LENGTH_THRESHOLD = 50

CONFIG_HELP = """\
Please create a .env file or set environment variables:
  JIRA_BASE_URL - Your JIRA instance URL (e.g., https://yourcompany.atlassian.net)
  JIRA_USERNAME - Your JIRA username/email (e.g., your.email@company.com)
  JIRA_PAT - Your JIRA Personal Access Token (recommended)
    OR
  JIRA_API_TOKEN - Your JIRA API token (legacy)

Optional custom field slots of your deployment:
  JIRA_ACCEPTANCE_CRITERIA_FIELD - e.g. customfield_11028
  JIRA_STORY_POINTS_FIELD - e.g. customfield_10002

Option 1 - Create .env file:
  cp .env.example .env
  # Edit .env file with your actual values

Option 2 - Use environment variables:
  export JIRA_BASE_URL=https://yourcompany.atlassian.net
  export JIRA_USERNAME=your.email@company.com
  export JIRA_PAT=your-personal-access-token
"""


class AuthMode(str, Enum):
    BASIC = "basic"
    BEARER = "bearer"


def load_env_files(directory: str | Path | None = None) -> Optional[Path]:
    """Load the first dotenv file found in ``directory`` (default: cwd).

    Variables already present in the process environment win.
    """
    base = Path(directory) if directory is not None else Path.cwd()
    for name in ENV_FILES:
        path = base / name
        if path.is_file():
            load_dotenv(path, override=False)
            logger.info(f"Loaded configuration from: {path}")
            return path
    logger.info("No .env file found, using environment variables only")
    return None


def resolve_credential() -> str:
    return os.getenv("JIRA_PAT") or os.getenv("JIRA_API_TOKEN", "")


def resolve_auth_mode(credential: str) -> AuthMode:
    """Pick Bearer for PATs, Basic for classic API tokens."""
    if os.getenv("JIRA_PAT"):
        return AuthMode.BEARER
    if os.getenv("JIRA_USE_PAT", "false") == "true":
        return AuthMode.BEARER
    if len(credential) > PAT_LENGTH_THRESHOLD:
        return AuthMode.BEARER
    return AuthMode.BASIC


@dataclass(frozen=True)
class JiraConfig:
    """Settings required to connect to Jira."""

    base_url: str
    username: str
    credential: str
    auth_mode: AuthMode = AuthMode.BASIC

    # Deployment specific custom field keys (e.g. "customfield_10002")
    acceptance_criteria_field: Optional[str] = None
    story_points_field: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", (self.base_url or "").rstrip("/"))

    @classmethod
    def from_env(cls, load_files: bool = True, directory: str | Path | None = None) -> "JiraConfig":
        """Create configuration from environment variables."""
        if load_files:
            load_env_files(directory)

        credential = resolve_credential()
        return cls(
            base_url=os.getenv("JIRA_BASE_URL", ""),
            username=os.getenv("JIRA_USERNAME", ""),
            credential=credential,
            auth_mode=resolve_auth_mode(credential),
            acceptance_criteria_field=os.getenv("JIRA_ACCEPTANCE_CRITERIA_FIELD") or None,
            story_points_field=os.getenv("JIRA_STORY_POINTS_FIELD") or None,
        )

    def validate(self) -> List[str]:
        """Return the names of required options that are missing."""
        missing = []
        if not self.base_url:
            missing.append("JIRA_BASE_URL")
        if not self.username:
            missing.append("JIRA_USERNAME")
        if not self.credential:
            missing.append("JIRA_PAT/JIRA_API_TOKEN")
        return missing

    def is_valid(self) -> bool:
        return not self.validate()

    @property
    def uses_pat(self) -> bool:
        return self.auth_mode is AuthMode.BEARER
