"""framepool - cached, filtered and recency-weighted asset pools for Immich photo frames."""

__version__ = "0.1.0"
