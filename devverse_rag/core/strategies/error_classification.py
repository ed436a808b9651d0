"""Classify upstream failures as quota, retryable or fatal.

The substring patterns below track the wording of the embedding provider's
SDK errors and may need adjusting when the provider changes its messages.
"""

from enum import Enum
from typing import Optional

from ..exceptions import QuotaExceededError, RetryableTransientError

QUOTA_PATTERNS = ("quota", "billing")
RETRYABLE_PATTERNS = ("too many requests", "rate limit", "temporarily")


class ErrorKind(Enum):
    """How a failed call should be handled."""
    QUOTA = "quota"
    RETRYABLE = "retryable"
    FATAL = "fatal"


def classify_error(status: Optional[int], message: str) -> ErrorKind:
    """Classify a failure from its HTTP status and message text.

    Quota wording always wins. A known status decides on its own
    (429 and 5xx retry); without one, rate-limit wording retries.

    Args:
        status: HTTP status code, if the error carried one.
        message: Error message text.

    Returns:
        Error kind.
    """
    text = (message or "").lower()

    if any(p in text for p in QUOTA_PATTERNS):
        return ErrorKind.QUOTA

    if status is not None:
        if status == 429 or status >= 500:
            return ErrorKind.RETRYABLE
        return ErrorKind.FATAL

    if any(p in text for p in RETRYABLE_PATTERNS):
        return ErrorKind.RETRYABLE

    return ErrorKind.FATAL


def _extract_status(exc: BaseException) -> Optional[int]:
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def classify_exception(exc: BaseException) -> ErrorKind:
    """Classify an exception raised by an SDK or HTTP client."""
    if isinstance(exc, QuotaExceededError):
        return ErrorKind.QUOTA
    if isinstance(exc, RetryableTransientError):
        return ErrorKind.RETRYABLE
    return classify_error(_extract_status(exc), str(exc))
