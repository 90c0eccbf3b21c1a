"""Tests for the Jira Pydantic models."""

import pytest
from pydantic import ValidationError

from jeera.model import Board, Issue, IssueFields, Sprint, SprintReport, Transition
from tests.unit.base import make_config

SAMPLE_ISSUE = {
    "id": "10001",
    "key": "ENG-42",
    "self": "https://jira.example.com/rest/api/2/issue/10001",
    "expand": "renderedFields,names",
    "fields": {
        "summary": "Fix crash",
        "description": "Crash on startup",
        "issuetype": {"id": "3", "name": "Task", "subtask": False, "iconUrl": "https://..."},
        "project": {"id": "10000", "key": "ENG", "name": "Engineering"},
        "priority": {"id": "2", "name": "High"},
        "status": {"id": "10001", "name": "In Progress", "statusCategory": {"key": "indeterminate"}},
        "assignee": {"name": "aliceL", "displayName": "Alice L", "active": True},
        "customfield_11028": "Given a crash, when fixed, then no crash",
        "customfield_10002": 5.0,
        "customfield_99999": {"value": "ignored"},
    },
}


def test_issue_from_api_uses_configured_custom_fields():
    issue = Issue.from_api(SAMPLE_ISSUE, make_config())

    assert issue.id == "10001"
    assert issue.key == "ENG-42"
    fields = issue.fields
    assert fields.summary == "Fix crash"
    assert fields.issue_type.name == "Task"
    assert fields.project.key == "ENG"
    assert fields.priority.name == "High"
    assert fields.status.name == "In Progress"
    assert fields.assignee.name == "aliceL"
    assert fields.assignee.display_name == "Alice L"
    assert fields.acceptance_criteria == "Given a crash, when fixed, then no crash"
    assert fields.story_points == 5.0


def test_unconfigured_custom_fields_stay_unset():
    config = make_config(acceptance_criteria_field=None, story_points_field=None)

    fields = IssueFields.from_api(SAMPLE_ISSUE["fields"], config)

    assert fields.acceptance_criteria is None
    assert fields.story_points is None


def test_story_points_zero_is_not_unset():
    raw = dict(SAMPLE_ISSUE["fields"], customfield_10002=0)

    fields = IssueFields.from_api(raw, make_config())

    assert fields.story_points == 0
    assert fields.story_points is not None


def test_null_custom_fields_and_description():
    raw = dict(SAMPLE_ISSUE["fields"], description=None, customfield_10002=None, assignee=None)

    fields = IssueFields.from_api(raw, make_config())

    assert fields.description is None
    assert fields.story_points is None
    assert fields.assignee is None


def test_negative_story_points_rejected():
    with pytest.raises(ValidationError):
        IssueFields(story_points=-1)


def test_models_are_immutable():
    transition = Transition(id="31", name="Start")

    with pytest.raises(ValidationError):
        transition.name = "Stop"


def test_issue_type_accepts_python_and_wire_names():
    assert IssueFields(issue_type={"name": "Bug"}).issue_type.name == "Bug"
    assert IssueFields.model_validate({"issuetype": {"id": "1"}}).issue_type.id == "1"


def test_sprint_report_total_counts_unset_points_as_zero():
    config = make_config()
    issues = [
        Issue.from_api({"id": "1", "key": "ENG-1", "fields": {"customfield_10002": 3}}, config),
        Issue.from_api({"id": "2", "key": "ENG-2", "fields": {"customfield_10002": 2.5}}, config),
        Issue.from_api({"id": "3", "key": "ENG-3", "fields": {}}, config),
    ]

    report = SprintReport(
        board=Board(id=14190, name="Core"),
        project_keys=["ENG", "OPS"],
        sprint=Sprint(id=7, name="Sprint 7"),
        issues=issues,
    )

    assert report.total_story_points == 5.5
    assert report.project_key == "ENG"
    assert report.sprint.state == "active"
