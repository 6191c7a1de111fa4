"""
school_management.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models and engine/session setup.
"""

# Package marker.
