"""Session façade composing the Jira operations for the CLI"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests
from pydantic import ValidationError

from .agile import AgileQueries
from .comments import CommentReader
from .config import JiraConfig
from .exceptions import MalformedResponseError, NotFoundError
from .issues import IssueOperations, project_fields
from .model import (
    Board,
    Comment,
    CreateResult,
    Issue,
    IssueFields,
    Sprint,
    SprintReport,
    Transition,
    UpdateResult,
    User,
)
from .transport import JiraTransport, check_status, decode_json
from .workflow import WorkflowOperations

logger = logging.getLogger(__name__)

MYSELF_PATH = "/rest/api/2/myself"


class Session:
    """Owns the transport for its lifetime and exposes the verbs the CLI uses.

    ``login`` starts as the configured username and is replaced by the
    server-reported login name after the first successful :meth:`who_am_i`;
    JQL and assignee updates need that login, not the e-mail address.
    """

    def __init__(
        self,
        config: JiraConfig,
        debug: bool = False,
        http_session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.debug = debug
        self.transport = JiraTransport(config, debug=debug, session=http_session)
        self.issues = IssueOperations(self.transport)
        self.workflow = WorkflowOperations(self.transport)
        self.agile = AgileQueries(self.transport)
        self.comments = CommentReader(self.transport)
        self.login = config.username
        self.user: Optional[User] = None

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    def who_am_i(self) -> User:
        response = self.transport.request("GET", MYSELF_PATH)
        check_status(response, 200, "get current user")
        try:
            user = User.model_validate(decode_json(response, "get current user"))
        except ValidationError as e:
            raise MalformedResponseError(f"unexpected user payload: {e}", body=response.text) from e

        if self.user is None:
            if user.name != self.login:
                logger.info(f"Using server login '{user.name}' instead of '{self.login}'")
            self.login = user.name
            self.user = user
        return user

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------
    def create_issue(self, issue: Issue) -> CreateResult:
        return self.issues.create(issue)

    def get_issue(self, id_or_key: str) -> Issue:
        return self.issues.get(id_or_key)

    def update_issue(
        self,
        id_or_key: str,
        fields: Optional[IssueFields] = None,
        assignee: Optional[str] = None,
    ) -> UpdateResult:
        """Apply an assignee change and a field update as two separate requests.

        The fields are projected before anything is sent, so a configuration
        error leaves the issue untouched.
        """
        projected = project_fields(fields, self.config) if fields is not None else {}

        assignee_updated = False
        if assignee:
            self.issues.update_assignee(id_or_key, assignee)
            assignee_updated = True

        fields_updated = self.issues.put_fields(id_or_key, projected)

        return UpdateResult(fields_updated=fields_updated, assignee_updated=assignee_updated)

    def update_assignee(self, id_or_key: str, login: Optional[str]) -> None:
        self.issues.update_assignee(id_or_key, login)

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------
    def list_transitions(self, id_or_key: str) -> List[Transition]:
        return self.workflow.list_transitions(id_or_key)

    def do_transition(self, id_or_key: str, transition_id: str) -> None:
        self.workflow.do_transition(id_or_key, transition_id)

    def transition_issue(self, id_or_key: str, transition_id: str) -> Transition:
        """Re-query the available transitions, then execute ``transition_id``."""
        available = self.workflow.list_transitions(id_or_key)
        selected = next((t for t in available if t.id == transition_id), None)
        if selected is None:
            names = ", ".join(f"{t.name} ({t.id})" for t in available) or "none"
            raise NotFoundError(
                "transition",
                f"transition {transition_id} is not available for {id_or_key}; available: {names}",
            )
        self.workflow.do_transition(id_or_key, selected.id)
        return selected

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def list_comments(self, id_or_key: str) -> List[Comment]:
        return self.comments.list_comments(id_or_key)

    # ------------------------------------------------------------------
    # Agile
    # ------------------------------------------------------------------
    def resolve_board(self, name: str) -> Board:
        return self.agile.resolve_board_by_name(name)

    def project_keys(self, board_id: int) -> List[str]:
        return self.agile.project_keys(board_id)

    def active_sprint(self, board_id: int) -> Sprint:
        return self.agile.active_sprint(board_id)

    def my_issues_in_sprint(self, project_key: str, sprint_name: str) -> List[Issue]:
        return self.agile.my_issues_in_sprint(project_key, sprint_name, self.login)

    def my_sprint_report(self, board_id: Optional[int] = None, board_name: Optional[str] = None) -> SprintReport:
        """Collect the operator's issues in the board's active sprint.

        The board is looked up by name only when no id is given. The first
        project key of the board scopes the search.
        """
        if board_id is not None:
            board = Board(id=board_id, name=board_name or "")
        elif board_name:
            board = self.agile.resolve_board_by_name(board_name)
        else:
            raise ValueError("board_id or board_name is required")

        keys = self.agile.project_keys(board.id)
        sprint = self.agile.active_sprint(board.id)
        issues = self.agile.my_issues_in_sprint(keys[0], sprint.name, self.login)
        return SprintReport(board=board, project_keys=keys, sprint=sprint, issues=issues)
