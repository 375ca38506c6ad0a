"""
Error taxonomy for the Sales Call Insights backend.

Every failure a handler can report maps onto one of these classes. Handlers
catch them at their outermost boundary and turn them into a JSON body of the
form {"error": ..., "details": ...}; ``status_code`` carries the HTTP status
each kind is reported with.

    CallInsightsError
    ├── ConfigurationError      language model credential absent
    ├── UpstreamError           model unreachable or non-2xx reply
    ├── FormatError             reply is not extractable / valid JSON
    ├── StorageError            read or write against the store failed
    │   └── RecordNotFoundError call record id does not exist
    ├── InsufficientDataError   comparison requested with an empty cohort
    └── InvalidRequestError     malformed request body or upload
"""

from typing import Optional


class CallInsightsError(Exception):
    """Base class for all handled service errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CallInsightsError):
    """A required setting (the model credential) is missing."""


class UpstreamError(CallInsightsError):
    """The language model could not be reached or answered with an error status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class FormatError(CallInsightsError):
    """The language model reply did not contain a usable JSON object."""


class StorageError(CallInsightsError):
    """A database read or write failed."""


class RecordNotFoundError(StorageError):
    """The referenced call record does not exist."""

    status_code = 404


class InsufficientDataError(CallInsightsError):
    """A cohort has no analyzed calls, so no comparison can be made."""

    status_code = 400


class InvalidRequestError(CallInsightsError):
    """The request body or upload was malformed."""

    status_code = 400


__all__ = [
    'CallInsightsError',
    'ConfigurationError',
    'UpstreamError',
    'FormatError',
    'StorageError',
    'RecordNotFoundError',
    'InsufficientDataError',
    'InvalidRequestError',
]
