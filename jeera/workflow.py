"""Workflow transitions: discovery and execution"""

from __future__ import annotations

import logging
from typing import List

from .exceptions import MalformedResponseError
from .issues import issue_path
from .model import Transition
from .transport import JiraTransport, check_status, decode_json

logger = logging.getLogger(__name__)


class WorkflowOperations:
    """Transitions are discovered per issue; the graph is never cached."""

    def __init__(self, transport: JiraTransport) -> None:
        self.transport = transport

    def list_transitions(self, id_or_key: str) -> List[Transition]:
        """Transitions available from the issue's current status (may be empty)."""
        response = self.transport.request("GET", issue_path(id_or_key, "/transitions"))
        check_status(response, 200, "get transitions")

        data = decode_json(response, "get transitions")
        raw = data.get("transitions") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            raise MalformedResponseError("transitions response has no 'transitions' list", body=response.text)

        transitions = []
        for entry in raw:
            # Entries carry target status, screen fields etc.; only id and name matter here
            if not isinstance(entry, dict) or not isinstance(entry.get("id"), str) or not isinstance(entry.get("name"), str):
                raise MalformedResponseError(f"transition entry without id/name: {entry!r}", body=response.text)
            transitions.append(Transition(id=entry["id"], name=entry["name"]))

        logger.debug(f"{id_or_key}: {len(transitions)} transition(s) available")
        return transitions

    def do_transition(self, id_or_key: str, transition_id: str) -> None:
        payload = {"transition": {"id": transition_id}}
        response = self.transport.request("POST", issue_path(id_or_key, "/transitions"), payload)
        check_status(response, 204, "do transition")
