"""Issue create/read/update operations and the partial-update field projection"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from pydantic import ValidationError

from .config import JiraConfig
from .exceptions import ConfigError, MalformedResponseError
from .model import CreateResult, Issue, IssueFields
from .transport import JiraTransport, check_status, decode_json

logger = logging.getLogger(__name__)

ISSUE_PATH = "/rest/api/2/issue"


def issue_path(id_or_key: str, suffix: str = "") -> str:
    return f"{ISSUE_PATH}/{quote(id_or_key, safe='')}{suffix}"


def _ref(ref: Any, *attrs: str) -> Dict[str, str]:
    """Keep only the non-empty identifying attributes of a reference."""
    if ref is None:
        return {}
    return {attr: getattr(ref, attr) for attr in attrs if getattr(ref, attr)}


def project_fields(fields: IssueFields, config: JiraConfig) -> Dict[str, Any]:
    """Build the ``fields`` object holding only what the caller set.

    ``status`` and ``assignee`` are never written: status changes go through
    transitions and assignees through their own endpoint.
    """
    projected: Dict[str, Any] = {}

    for name, ref, attrs in (
        ("project", fields.project, ("key", "id")),
        ("issuetype", fields.issue_type, ("id", "name")),
    ):
        payload = _ref(ref, *attrs)
        if payload:
            projected[name] = payload

    if fields.summary:
        projected["summary"] = fields.summary
    if fields.description:
        projected["description"] = fields.description

    priority = _ref(fields.priority, "id", "name")
    if priority:
        projected["priority"] = priority

    if fields.acceptance_criteria:
        if not config.acceptance_criteria_field:
            raise ConfigError(
                "acceptance criteria given but JIRA_ACCEPTANCE_CRITERIA_FIELD is not configured",
                missing=["JIRA_ACCEPTANCE_CRITERIA_FIELD"],
            )
        projected[config.acceptance_criteria_field] = fields.acceptance_criteria

    if fields.story_points is not None:
        if not config.story_points_field:
            raise ConfigError(
                "story points given but JIRA_STORY_POINTS_FIELD is not configured",
                missing=["JIRA_STORY_POINTS_FIELD"],
            )
        points = fields.story_points
        projected[config.story_points_field] = int(points) if points.is_integer() else points

    return projected


class IssueOperations:
    """Create, read and update single issues."""

    def __init__(self, transport: JiraTransport) -> None:
        self.transport = transport

    @property
    def config(self) -> JiraConfig:
        return self.transport.config

    def create(self, issue: Issue) -> CreateResult:
        payload = {"fields": project_fields(issue.fields, self.config)}
        response = self.transport.request("POST", ISSUE_PATH, payload)
        check_status(response, 201, "create issue")

        data = decode_json(response, "create issue")
        try:
            result = CreateResult.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(f"unexpected create issue response: {e}", body=response.text) from e
        logger.info(f"Created issue {result.key} ({result.id})")
        return result

    def get(self, id_or_key: str) -> Issue:
        response = self.transport.request("GET", issue_path(id_or_key))
        check_status(response, 200, "get issue", not_found=f"issue {id_or_key}")

        data = decode_json(response, "get issue")
        if not isinstance(data, dict):
            raise MalformedResponseError("issue response is not an object", body=response.text)
        try:
            return Issue.from_api(data, self.config)
        except ValidationError as e:
            raise MalformedResponseError(f"unexpected issue payload for {id_or_key}: {e}", body=response.text) from e

    def update(self, id_or_key: str, fields: IssueFields) -> bool:
        """PUT only the explicitly set fields.

        Returns ``False`` without touching the server when nothing is set.
        """
        return self.put_fields(id_or_key, project_fields(fields, self.config))

    def put_fields(self, id_or_key: str, projected: Dict[str, Any]) -> bool:
        """PUT an already projected ``fields`` object; an empty one is skipped."""
        if not projected:
            logger.info(f"No field changes for {id_or_key}; skipping update")
            return False

        response = self.transport.request("PUT", issue_path(id_or_key), {"fields": projected})
        check_status(response, 204, "update issue")
        return True

    def update_assignee(self, id_or_key: str, login: Optional[str]) -> None:
        """Assign the issue to ``login``; ``None`` unassigns it."""
        response = self.transport.request("PUT", issue_path(id_or_key, "/assignee"), {"name": login})
        check_status(response, 204, "update assignee")
