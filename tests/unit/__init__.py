"""
Unit tests for the jeera CLI.

- base.py: shared config/response helpers and the BaseTestCase
- test_cli.py: command line flags and interactive prompts
"""

from .base import BaseTestCase

__all__ = [
    'BaseTestCase',
]
