import json
import sys
import unittest
from pathlib import Path
from typing import Any, Optional
from unittest.mock import Mock

import requests

# Add project root for `import jeera` when the package is not installed
_project_root = Path(__file__).parent.parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from jeera.config import AuthMode, JiraConfig

BASE_URL = "https://jira.example.com"
STORY_POINTS_FIELD = "customfield_10002"
ACCEPTANCE_CRITERIA_FIELD = "customfield_11028"


def make_config(**overrides) -> JiraConfig:
    values = dict(
        base_url=BASE_URL,
        username="alice",
        credential="tok123",
        auth_mode=AuthMode.BASIC,
        acceptance_criteria_field=ACCEPTANCE_CRITERIA_FIELD,
        story_points_field=STORY_POINTS_FIELD,
    )
    values.update(overrides)
    return JiraConfig(**values)


def make_response(status_code: int, payload: Any = None, text: Optional[str] = None) -> requests.Response:
    """Build a real requests.Response carrying ``payload`` as JSON (or raw ``text``)."""
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    # iter_content then replays _content instead of reading a raw socket
    response._content_consumed = True
    response.encoding = "utf-8"
    return response


def mock_http(*responses: requests.Response) -> Mock:
    """A requests.Session stand-in answering with ``responses`` in order."""
    http = Mock(spec=requests.Session)
    if responses:
        http.request.side_effect = list(responses)
    return http


def sent_request(http: Mock, index: int = -1):
    """Return (method, url, json_body, headers, timeout) of a recorded request."""
    call = http.request.call_args_list[index]
    method, url = call.args
    data = call.kwargs.get("data")
    body = json.loads(data) if data is not None else None
    return method, url, body, call.kwargs["headers"], call.kwargs["timeout"]


class BaseTestCase(unittest.TestCase):
    """Base class for CLI unit tests"""

    def setUp(self):
        """Common setup for all tests"""
        self.config = make_config()
        self.mock_session = self.setup_mock_session()

    def setup_mock_session(self):
        """Setup a mock Session whose who_am_i succeeds"""
        from jeera.model import User

        mock_session = Mock()
        mock_session.who_am_i.return_value = User(name="aliceL", displayName="Alice L")
        return mock_session
