"""Jira domain models used by the client and the CLI."""

from .jira_models import (
    Assignee,
    Board,
    Comment,
    CreateResult,
    Issue,
    IssueFields,
    IssueTypeRef,
    PriorityRef,
    ProjectRef,
    Sprint,
    SprintReport,
    StatusRef,
    Transition,
    UpdateResult,
    User,
)

__all__ = [
    "Assignee",
    "Board",
    "Comment",
    "CreateResult",
    "Issue",
    "IssueFields",
    "IssueTypeRef",
    "PriorityRef",
    "ProjectRef",
    "Sprint",
    "SprintReport",
    "StatusRef",
    "Transition",
    "UpdateResult",
    "User",
]
