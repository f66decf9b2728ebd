"""Custom exceptions for the iCal ingestion pipeline.

Every terminal failure for a single feed is one of these.  The fleet
orchestrator catches them per property; the single-property action
converts them into a failure result.

Exception hierarchy::

    IcalSyncError                     (base for all pipeline errors)
    +-- FetchError                    (network / non-2xx HTTP)
    +-- InvalidFeedContentError       (body is not iCalendar data)
    +-- ModelUnavailableError         (Gemini call itself failed)
    +-- MalformedModelResponseError   (reply is not parseable JSON)
    +-- HardExtractionError           (model reported a real failure)
        +-- UnexpectedResponseFormatError
"""

from __future__ import annotations


class IcalSyncError(Exception):
    """Base exception for all iCal ingestion failures."""


class FetchError(IcalSyncError):
    """Raised when the feed cannot be retrieved.

    Covers both non-2xx HTTP responses and network/DNS failures.  For the
    latter the original ``requests`` exception is chained as ``__cause__``.

    Attributes:
        status_code: HTTP status code, or ``None`` for network failures.
        status_text: HTTP reason phrase, or ``None`` for network failures.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_text: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text


class InvalidFeedContentError(IcalSyncError):
    """Raised when the fetched body does not look like iCalendar data.

    No model call is made once this is raised.

    Attributes:
        preview: First 200 characters of the body with newlines escaped.
    """

    def __init__(self, message: str, preview: str = "") -> None:
        super().__init__(message)
        self.preview = preview


class ModelUnavailableError(IcalSyncError):
    """Raised when the Gemini API call fails (quota, network, auth)."""


class MalformedModelResponseError(IcalSyncError):
    """Raised when the model reply is not well-formed structured data.

    Attributes:
        raw_response: The raw model output that failed to parse.
    """

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


class HardExtractionError(IcalSyncError):
    """Raised for a reconciled hard error.

    The message is the model's (or validator's) error text, verbatim.
    """


class UnexpectedResponseFormatError(HardExtractionError):
    """Raised when the model claimed events but none passed validation."""
