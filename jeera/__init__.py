"""jeera - interactive command-line assistant for Jira.

- jeera.config: connection settings resolved from the environment / .env
- jeera.transport: authenticated JSON requests
- jeera.model: issue, transition, comment, board and sprint models
- jeera.session: the verbs exposed to the CLI
"""

__version__ = "2.0.0"

from .config import AuthMode, JiraConfig
from .session import Session

__all__ = [
    "AuthMode",
    "JiraConfig",
    "Session",
]
