"""Common retry decorators for Immich API calls.

All retry decorators use exponential backoff and re-raise the last exception
once attempts run out. Only transient failures are retried: transport errors
and 5xx responses. Client errors (4xx) fail immediately.
"""

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from framepool.constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_MAX_WAIT, DEFAULT_RETRY_MIN_WAIT


class ImmichApiError(Exception):
    """Non-success response from the Immich server."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Immich API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def is_transient(exc: BaseException) -> bool:
    """True for errors worth retrying."""
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, ImmichApiError) and exc.status_code >= 500


# Default retry configuration for Immich calls
# - 3 attempts maximum
# - Exponential backoff: 2s, 4s, 8s (multiplier=1, min=2, max=10)
api_retry = retry(
    retry=retry_if_exception(is_transient),
    stop=stop_after_attempt(DEFAULT_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=DEFAULT_RETRY_MIN_WAIT, max=DEFAULT_RETRY_MAX_WAIT),
    reraise=True,
)

__all__ = ["ImmichApiError", "api_retry", "is_transient"]
