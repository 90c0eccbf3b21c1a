"""Logging utilities for consistent logging across modules."""

import logging
import sys

from ..exceptions import DecodeError, NotFoundError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: bool = False) -> None:
    """Setup logging configuration.

    Everything goes to stderr; stdout is reserved for command output.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # urllib3 connection chatter drowns out our own request traces
    logging.getLogger("urllib3").setLevel(logging.INFO if debug else logging.WARNING)


def describe_error(operation: str, error: Exception) -> str:
    """Description of a failed operation, including the server body when known."""
    message = f"{operation}: {error}"
    # RemoteError already embeds the server body in its message
    if isinstance(error, (DecodeError, NotFoundError)) and error.body:
        message += f"\n{error.body}"
    return message

