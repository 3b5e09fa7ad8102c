"""General-purpose helpers (text processing, error handling)."""
