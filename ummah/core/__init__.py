"""
Core utilities shared across the Ummah storage layer.

This package hosts:
- configuration helpers (env vars, data directory, feature flags)
- logging setup
- id/clock helpers used by the collections
"""
