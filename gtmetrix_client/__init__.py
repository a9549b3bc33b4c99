"""Client for the GTmetrix website performance testing API."""

from gtmetrix_client.config import GTmetrixConfig
from gtmetrix_client.errors import (
    DecodeError,
    GTmetrixError,
    RemoteError,
    TransportError,
    WaitTimeoutError,
)
from gtmetrix_client.models.reference import TestReference
from gtmetrix_client.models.snapshot import ResultSnapshot, TestMetrics, TestResources
from gtmetrix_client.session import TestSession

__all__ = [
    "DecodeError",
    "GTmetrixConfig",
    "GTmetrixError",
    "RemoteError",
    "ResultSnapshot",
    "TestMetrics",
    "TestReference",
    "TestResources",
    "TestSession",
    "TransportError",
    "WaitTimeoutError",
]
