"""Pydantic Schemas: response body contracts for API documentation.

Invariants:
    - Schemas describe API boundaries only; user records stay plain dicts
"""
