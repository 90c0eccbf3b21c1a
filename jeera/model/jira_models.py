"""Pydantic models for the Jira entities the client reads and writes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import JiraConfig


class JiraModel(BaseModel):
    """Immutable value object; unknown server fields are dropped."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class User(JiraModel):
    """Jira user information."""

    name: str
    display_name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = Field(None, alias="emailAddress")


class IssueTypeRef(JiraModel):
    id: Optional[str] = None
    name: Optional[str] = None


class ProjectRef(JiraModel):
    key: Optional[str] = None
    id: Optional[str] = None


class PriorityRef(JiraModel):
    id: Optional[str] = None
    name: Optional[str] = None


class StatusRef(JiraModel):
    id: Optional[str] = None
    name: Optional[str] = None


class Assignee(JiraModel):
    name: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")


class IssueFields(JiraModel):
    """Issue fields the client understands.

    ``story_points`` is tri-state: ``None`` means "leave untouched", while
    ``0.0`` is a real value that gets written.
    """

    summary: Optional[str] = None
    description: Optional[str] = None
    issue_type: Optional[IssueTypeRef] = Field(None, alias="issuetype")
    project: Optional[ProjectRef] = None
    priority: Optional[PriorityRef] = None
    status: Optional[StatusRef] = None
    assignee: Optional[Assignee] = None
    acceptance_criteria: Optional[str] = None
    story_points: Optional[float] = Field(None, ge=0)

    @field_validator("description", "acceptance_criteria", mode="before")
    @classmethod
    def _text_only(cls, value: Any) -> Any:
        # Rich-text (ADF) bodies are not rendered by this client
        if value is not None and not isinstance(value, str):
            return None
        return value

    @classmethod
    def from_api(cls, raw: Dict[str, Any], config: JiraConfig) -> "IssueFields":
        """Decode a server ``fields`` object using the deployment's custom field keys."""
        data = dict(raw)
        data["acceptance_criteria"] = (
            raw.get(config.acceptance_criteria_field) if config.acceptance_criteria_field else None
        )
        data["story_points"] = raw.get(config.story_points_field) if config.story_points_field else None
        return cls.model_validate(data)


class Issue(JiraModel):
    """Jira issue; ``id`` and ``key`` are assigned by the server."""

    id: Optional[str] = None
    key: Optional[str] = None
    fields: IssueFields = Field(default_factory=IssueFields)

    @classmethod
    def from_api(cls, raw: Dict[str, Any], config: JiraConfig) -> "Issue":
        return cls(
            id=raw.get("id"),
            key=raw.get("key"),
            fields=IssueFields.from_api(raw.get("fields") or {}, config),
        )


class CreateResult(JiraModel):
    id: str
    key: str
    self: Optional[str] = None


class Transition(JiraModel):
    """An edge of the workflow graph available from the issue's current status."""

    id: str
    name: str


class Comment(JiraModel):
    id: str
    body: str
    author_display_name: Optional[str] = None
    created: Optional[str] = None
    last_updated: Optional[str] = None
    timezone: Optional[str] = None


class Board(JiraModel):
    # Agile board ids are integers, unlike most Jira ids
    id: int
    name: str


class Sprint(JiraModel):
    id: int
    name: str
    state: str = "active"


class SprintReport(JiraModel):
    """The operator's issues in the active sprint of a board."""

    board: Board
    project_keys: List[str]
    sprint: Sprint
    issues: List[Issue] = Field(default_factory=list)

    @property
    def project_key(self) -> str:
        return self.project_keys[0]

    @property
    def total_story_points(self) -> float:
        return sum(issue.fields.story_points or 0.0 for issue in self.issues)


@dataclass(frozen=True)
class UpdateResult:
    """Which of the two independent update requests were sent."""

    fields_updated: bool = False
    assignee_updated: bool = False

    @property
    def noop(self) -> bool:
        return not (self.fields_updated or self.assignee_updated)
