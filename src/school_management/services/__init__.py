"""
school_management.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Hold the generic entity service and its per-entity specializations.
"""

# Package marker.
