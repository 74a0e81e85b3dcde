"""Utility modules for common functionality."""

from framepool.utils.retry import ImmichApiError, api_retry

__all__ = ["ImmichApiError", "api_retry"]
