"""Tests for transition discovery and execution."""

import pytest

from jeera.exceptions import BadRequestError, MalformedResponseError, RemoteError
from jeera.model import Transition
from jeera.workflow import WorkflowOperations
from tests.unit.base import make_response, sent_request


def test_list_transitions_ignores_extra_fields(transport, http):
    http.request.side_effect = [
        make_response(200, {"transitions": [{"id": "31", "name": "Start", "to": {"id": "10000"}, "fields": {}}]})
    ]

    transitions = WorkflowOperations(transport).list_transitions("ENG-42")

    assert transitions == [Transition(id="31", name="Start")]
    method, url, _, _, _ = sent_request(http)
    assert method == "GET"
    assert url == "https://jira.example.com/rest/api/2/issue/ENG-42/transitions"


def test_empty_transition_list_is_not_an_error(transport, http):
    http.request.side_effect = [make_response(200, {"expand": "transitions", "transitions": []})]

    assert WorkflowOperations(transport).list_transitions("ENG-42") == []


def test_transitions_missing_list_is_malformed(transport, http):
    http.request.side_effect = [make_response(200, {"expand": "transitions"})]

    with pytest.raises(MalformedResponseError):
        WorkflowOperations(transport).list_transitions("ENG-42")


def test_transition_entry_without_name_is_malformed(transport, http):
    http.request.side_effect = [make_response(200, {"transitions": [{"id": "31"}]})]

    with pytest.raises(MalformedResponseError):
        WorkflowOperations(transport).list_transitions("ENG-42")


def test_list_transitions_unexpected_status(transport, http):
    http.request.side_effect = [make_response(401, text="Unauthorized")]

    with pytest.raises(RemoteError) as err:
        WorkflowOperations(transport).list_transitions("ENG-42")
    assert err.value.status_code == 401


def test_do_transition(transport, http):
    http.request.side_effect = [make_response(204)]

    WorkflowOperations(transport).do_transition("ENG-42", "31")

    method, url, body, _, _ = sent_request(http)
    assert method == "POST"
    assert url == "https://jira.example.com/rest/api/2/issue/ENG-42/transitions"
    assert body == {"transition": {"id": "31"}}


def test_rejected_transition_is_remote(transport, http):
    http.request.side_effect = [make_response(400, text='{"errorMessages":["Resolution is required"]}')]

    with pytest.raises(RemoteError) as err:
        WorkflowOperations(transport).do_transition("ENG-42", "41")
    assert isinstance(err.value, BadRequestError)
    assert "Resolution is required" in err.value.body
