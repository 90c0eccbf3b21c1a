"""Common utilities and shared functionality."""

from .logging_utils import (
    describe_error,
    setup_logging,
)

__all__ = [
    "describe_error",
    "setup_logging",
]
