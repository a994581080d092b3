"""
Core utilities shared across the jsonboard server.

This package hosts:
- configuration helpers (env vars, paths)
- logging setup and process-level error hooks
- exception handlers that turn domain/storage errors into JSON responses
"""
