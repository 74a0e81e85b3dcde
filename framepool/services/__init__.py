"""Services: Immich client, cache store and logging."""
