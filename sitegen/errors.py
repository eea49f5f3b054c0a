# sitegen/errors.py
from typing import Optional


class RelayError(Exception):
    """Base class for every error raised by the relay."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RelayError):
    """A required request field is missing or empty."""


class BackendError(RelayError):
    """The inference backend was unreachable or answered with something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(RelayError):
    """No JSON object could be recovered from the model output."""

    def __init__(self, message: str, fragment: Optional[str] = None):
        super().__init__(message)
        # The offending substring, kept whole for diagnostics.
        self.fragment = fragment


class ShapeError(RelayError):
    """Parsed JSON is not a complete code bundle."""


class RelayRequestError(RelayError):
    """The relay answered a client request with a non-success status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code
