"""Exception classes raised by the Jira interaction layer."""

from typing import List, Optional


class JeeraError(Exception):
    """Base exception for all jeera errors"""
    pass


class ConfigError(JeeraError):
    """Raised when the configuration is incomplete or cannot serve a request"""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        self.missing = list(missing or [])
        super().__init__(message)


class NetworkError(JeeraError):
    """Raised on transport failures: DNS, TLS, refused connections, timeouts"""
    pass


class EncodeError(JeeraError):
    """Raised when a request body cannot be serialized to JSON"""
    pass


class DecodeError(JeeraError):
    """Raised when a response body cannot be parsed"""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)


class MalformedResponseError(DecodeError):
    """Raised when a success response lacks the fields we rely on"""
    pass


class RemoteError(JeeraError):
    """Raised when the server answers with an unexpected status code"""

    def __init__(self, operation: str, status_code: int, body: str = ""):
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(f"failed to {operation}: status {status_code}, body: {body}")


class BadRequestError(RemoteError):
    """Raised when the server rejects a request with 400"""
    pass


class NotFoundError(JeeraError):
    """Raised when a lookup yields nothing where at least one result is required"""

    def __init__(self, resource: str, message: Optional[str] = None, body: str = ""):
        self.resource = resource
        self.body = body
        super().__init__(message or f"{resource} not found")
