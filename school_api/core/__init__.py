"""
Core utilities shared across the school records API.

This package hosts:
- configuration helpers (env vars, data directory, feature flags)
- cross-cutting concerns such as logging setup, the error taxonomy,
  password hashing and identifier generation.

Routers, services and repositories depend on these primitives instead of
reading the environment or building error payloads on their own.
"""
