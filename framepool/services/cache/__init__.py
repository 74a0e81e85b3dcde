"""
Cache layer for framepool.

Provides the cache-aside store that memoizes filtered asset sets with:
- Single-flight computation per key
- Time-based expiry
- Eviction of failed or abandoned loads
"""

from .api_cache import ApiCache

__all__ = ["ApiCache"]
