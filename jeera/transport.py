"""Authenticated JSON transport for the Jira REST API"""

from __future__ import annotations

import base64
import json
import logging
import time
from typing import Any, Dict, Optional

import requests

from .config import AuthMode, JiraConfig
from .exceptions import (
    BadRequestError,
    DecodeError,
    EncodeError,
    NetworkError,
    NotFoundError,
    RemoteError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
READ_CHUNK_SIZE = 1024


class JiraTransport:
    """Builds authenticated requests against ``config.base_url``.

    Status codes are not interpreted here; each operation knows which
    success code it expects (see :func:`check_status`).
    """

    def __init__(
        self,
        config: JiraConfig,
        debug: bool = False,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.config = config
        self.debug = debug
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()

    def authorization(self) -> str:
        if self.config.auth_mode is AuthMode.BEARER:
            return f"Bearer {self.config.credential}"
        raw = f"{self.config.username}:{self.config.credential}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    def headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": self.authorization(),
        }

    def request(self, method: str, path: str, body: Any = None) -> requests.Response:
        """Send ``method`` to ``base_url + path``; ``path`` must already be URL-escaped."""
        data = None
        if body is not None:
            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise EncodeError(f"failed to marshal request body: {e}") from e

        url = f"{self.config.base_url}{path}"
        if self.debug:
            logger.debug(f"{method} {url} body={data}")

        deadline = time.monotonic() + self.timeout
        try:
            response = self._session.request(
                method,
                url,
                data=data,
                headers=self.headers(),
                timeout=self.timeout,
                stream=True,
            )
            response._content = self._read_body(response, deadline, method, url)
        except requests.Timeout as e:
            raise NetworkError(f"{method} {url} timed out after {self.timeout:.0f}s") from e
        except requests.RequestException as e:
            raise NetworkError(f"failed to make request {method} {url}: {e}") from e

        if self.debug:
            logger.debug(f"{method} {url} -> {response.status_code}: {response.text}")
        return response

    def _read_body(self, response: requests.Response, deadline: float, method: str, url: str) -> bytes:
        """Read the whole body; the deadline covers the exchange, not each read."""
        chunks = []
        self._check_deadline(response, deadline, method, url)
        for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
            self._check_deadline(response, deadline, method, url)
            chunks.append(chunk)
        return b"".join(chunks)

    def _check_deadline(self, response: requests.Response, deadline: float, method: str, url: str) -> None:
        if time.monotonic() > deadline:
            response.close()
            raise NetworkError(f"{method} {url} timed out after {self.timeout:.0f}s")

    def close(self) -> None:
        self._session.close()


def check_status(
    response: requests.Response,
    expected: int,
    operation: str,
    not_found: Optional[str] = None,
) -> None:
    """Raise the error matching ``response`` unless it carries ``expected``."""
    status = response.status_code
    if status == expected:
        return
    body = response.text
    if status == 400:
        raise BadRequestError(operation, status, body)
    if status == 404 and not_found:
        raise NotFoundError(not_found, f"{not_found} not found", body=body)
    raise RemoteError(operation, status, body)


def decode_json(response: requests.Response, operation: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"failed to decode {operation} response: {e}", body=response.text) from e
