"""Errors raised by the GTmetrix client."""

from gtmetrix_client.models.reference import TestReference


class GTmetrixError(Exception):
    """Base class for all GTmetrix client errors."""


class TransportError(GTmetrixError):
    """Raised when a request cannot be sent or its response cannot be read."""


class RemoteError(GTmetrixError):
    """Raised when the GTmetrix API reports a business-level error.

    The partially decoded reference is kept so callers can still inspect
    fields such as the remaining credits.
    """

    def __init__(self, message: str, reference: TestReference | None = None):
        super().__init__(message)
        self.reference = reference


class DecodeError(GTmetrixError):
    """Raised in strict mode when a response body cannot be decoded."""


class WaitTimeoutError(GTmetrixError, TimeoutError):
    """Raised when a test does not reach a terminal state in time."""
