"""
school_management.auth

Authentication/authorization package.

Responsibilities:
- JWT helpers and validation.
- FastAPI auth dependencies (Principal + per-entity entitlements).
"""

# Package marker.
