"""Failures of the external answer service.

The set is closed: every failure of ``AnswerProvider.ask`` is one of these.
"""

from bfhl.exceptions import BfhlError


class AnswerServiceError(BfhlError):
    """Base exception for answer service failures."""
    pass


class AnswerServiceRejectedError(AnswerServiceError):
    """Raised when the answer service returns an error response.

    Attributes:
        status_code_upstream: HTTP status code from the service.
    """

    status_code = 502

    def __init__(self, status_code_upstream: int):
        super().__init__(message="AI service error", code="UPSTREAM_REJECTED")
        self.status_code_upstream = status_code_upstream


class AnswerServiceTimeoutError(AnswerServiceError):
    """Raised when the answer service doesn't respond in time.

    Attributes:
        timeout_seconds: Timeout duration that was exceeded.
    """

    status_code = 504

    def __init__(self, timeout_seconds: float):
        super().__init__(message="AI service timeout", code="UPSTREAM_TIMEOUT")
        self.timeout_seconds = timeout_seconds


class AnswerServiceUnavailableError(AnswerServiceError):
    """Raised when the answer service is unreachable.

    Attributes:
        reason: Description of the connection failure (logged, never returned).
    """

    status_code = 503

    def __init__(self, reason: str = "Connection failed"):
        super().__init__(message="AI service unavailable", code="UPSTREAM_UNAVAILABLE")
        self.reason = reason


class AnswerServiceInvalidResponseError(AnswerServiceError):
    """Raised when a successful reply carries no answer text."""

    status_code = 500

    def __init__(self):
        super().__init__(message="AI service returned invalid response", code="UPSTREAM_INVALID")
