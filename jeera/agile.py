"""Agile board/sprint queries and the "my issues in the active sprint" search"""

from __future__ import annotations

import logging
from typing import Any, Dict, List
from urllib.parse import quote

import requests
from pydantic import ValidationError

from .exceptions import MalformedResponseError, NotFoundError
from .model import Board, Issue, Sprint
from .transport import JiraTransport, check_status, decode_json

logger = logging.getLogger(__name__)

AGILE_BOARD_PATH = "/rest/agile/1.0/board"
SEARCH_PATH = "/rest/api/2/search"


def build_my_issues_jql(project_key: str, sprint_name: str, assignee_login: str) -> str:
    # The sprint is matched by its (quoted) name, which the server accepts as well as the id
    return f'project = {project_key} AND sprint = "{sprint_name}" AND assignee in ({assignee_login})'


def encode_query_value(value: str) -> str:
    """Percent-encode a query string value (spaces as %20, quotes as %22)."""
    return quote(value, safe="")


def _values(response: requests.Response, operation: str) -> List[Dict[str, Any]]:
    data = decode_json(response, operation)
    values = data.get("values") if isinstance(data, dict) else None
    if not isinstance(values, list):
        raise MalformedResponseError(f"{operation} response has no 'values' list", body=response.text)
    return values


class AgileQueries:
    """Board, project and sprint lookups used to build the sprint report."""

    def __init__(self, transport: JiraTransport) -> None:
        self.transport = transport

    def resolve_board_by_name(self, name: str) -> Board:
        """Return the first board called ``name`` (names are case sensitive)."""
        response = self.transport.request("GET", f"{AGILE_BOARD_PATH}?name={encode_query_value(name)}")
        check_status(response, 200, "get board ID")

        values = _values(response, "get board ID")
        if not values:
            raise NotFoundError(
                "board",
                f"no board found with name {name}\n"
                "Board names are case sensitive. Please check your board name",
            )
        try:
            return Board.model_validate(values[0])
        except ValidationError as e:
            raise MalformedResponseError(f"unexpected board entry: {e}", body=response.text) from e

    def project_keys(self, board_id: int) -> List[str]:
        """Keys of the projects attached to the board, in server order."""
        response = self.transport.request("GET", f"{AGILE_BOARD_PATH}/{int(board_id)}/project")
        check_status(response, 200, "get project key")

        values = _values(response, "get project key")
        if not values:
            raise NotFoundError("project", f"no project found for board ID {board_id}")

        keys = []
        for value in values:
            key = value.get("key") if isinstance(value, dict) else None
            if not isinstance(key, str):
                raise MalformedResponseError(f"project entry without key: {value!r}", body=response.text)
            keys.append(key)
        return keys

    def active_sprint(self, board_id: int) -> Sprint:
        response = self.transport.request("GET", f"{AGILE_BOARD_PATH}/{int(board_id)}/sprint?state=active")
        check_status(response, 200, "get active sprint")

        values = _values(response, "get active sprint")
        if not values:
            raise NotFoundError("active sprint", f"no active sprints found for board ID {board_id}")
        try:
            return Sprint.model_validate({**values[0], "state": "active"})
        except ValidationError as e:
            raise MalformedResponseError(f"unexpected sprint entry: {e}", body=response.text) from e

    def my_issues_in_sprint(self, project_key: str, sprint_name: str, assignee_login: str) -> List[Issue]:
        """First page of the assignee's issues in the sprint; no pagination."""
        jql = build_my_issues_jql(project_key, sprint_name, assignee_login)
        encoded = encode_query_value(jql)
        logger.debug(f"JQL Query: {jql}")
        logger.debug(f"Encoded JQL: {encoded}")

        response = self.transport.request("GET", f"{SEARCH_PATH}?jql={encoded}")
        check_status(response, 200, "get issues in sprint")

        data = decode_json(response, "get issues in sprint")
        raw_issues = data.get("issues") if isinstance(data, dict) else None
        if not isinstance(raw_issues, list):
            raise MalformedResponseError("search response has no 'issues' list", body=response.text)

        total = data.get("total")
        if isinstance(total, int) and total > len(raw_issues):
            logger.warning(f"Search returned {len(raw_issues)} of {total} issues; only the first page is shown")

        config = self.transport.config
        try:
            return [Issue.from_api(raw, config) for raw in raw_issues]
        except (ValidationError, AttributeError) as e:
            raise MalformedResponseError(f"unexpected issue in search results: {e}", body=response.text) from e
