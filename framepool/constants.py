"""Application-wide constants and magic numbers.

Centralizes configuration values and magic numbers for easier maintenance.
"""

# Timeouts (seconds)
TIMEOUT_HTTP_DEFAULT = 30.0  # Standard HTTP request timeout

# Immich API
IMMICH_API_KEY_HEADER = "x-api-key"
DEFAULT_SEARCH_PAGE_SIZE = 1000  # Single page; the remote source is not paginated
DEFAULT_API_RATE_LIMIT_PER_SECOND = 10.0

# Caching
DEFAULT_CACHE_DURATION_SECONDS = 300.0  # Filtered asset sets live for 5 minutes

# Recency weighting
DAYS_PER_YEAR = 365.0  # At bias=1.0 a one-year-old photo weighs ~37% of today's

# Retry configuration
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_MIN_WAIT = 2  # Minimum wait between retries (seconds)
DEFAULT_RETRY_MAX_WAIT = 10  # Maximum wait between retries (seconds)

# Logging
LOG_FILE_PREFIX = "framepool"
LOG_ROTATION_BYTES = 10 * 1024 * 1024  # Rotate logs at 10MB
LOG_BACKUP_COUNT = 5

__all__ = [
    "TIMEOUT_HTTP_DEFAULT",
    "IMMICH_API_KEY_HEADER",
    "DEFAULT_SEARCH_PAGE_SIZE",
    "DEFAULT_API_RATE_LIMIT_PER_SECOND",
    "DEFAULT_CACHE_DURATION_SECONDS",
    "DAYS_PER_YEAR",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RETRY_MIN_WAIT",
    "DEFAULT_RETRY_MAX_WAIT",
    "LOG_FILE_PREFIX",
    "LOG_ROTATION_BYTES",
    "LOG_BACKUP_COUNT",
]
