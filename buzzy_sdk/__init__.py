"""Buzzy SDK for Python.

Async client for the Buzzy REST API. Every outbound call can be paced
through one shared dispatcher: one request in flight, 150ms between starts.

Public API:
    BuzzyClient - User-facing client
    ThrottledDispatcher - Shared admission queue and pacing
    Credential - Auth token and user id returned by login
    error_response - Error envelope helper
"""

from buzzy_sdk._internal.envelope import FailurePolicy, ResultShape
from buzzy_sdk._internal.log import enable_debug_logging
from buzzy_sdk._internal.throttle import ThrottledDispatcher
from buzzy_sdk._version import __version__
from buzzy_sdk.client import BuzzyClient, get_buzzy_client
from buzzy_sdk.exceptions import (
    BuzzyAPIError,
    BuzzyConfigError,
    BuzzyError,
    BuzzyValidationError,
)
from buzzy_sdk.models import Credential
from buzzy_sdk.responses import error_response

__all__ = [
    "__version__",
    "BuzzyClient",
    "get_buzzy_client",
    "ThrottledDispatcher",
    "Credential",
    "FailurePolicy",
    "ResultShape",
    "BuzzyError",
    "BuzzyAPIError",
    "BuzzyConfigError",
    "BuzzyValidationError",
    "enable_debug_logging",
    "error_response",
]
