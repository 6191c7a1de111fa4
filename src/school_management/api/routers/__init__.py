"""
school_management.api.routers

HTTP routers.

Responsibilities:
- `crud`: router factory shared by every entity.
- `school`: one router per school-management entity.
- `health`, `dev_auth`: operational endpoints.
"""

# Package marker.
