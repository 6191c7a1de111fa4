"""
school_management.errors

Application exception hierarchy.

Responsibilities:
- Give services a framework-agnostic way to signal client errors.
- Carry the HTTP status each error maps to (see `api.app` exception handlers).
"""

from __future__ import annotations

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND


class ApplicationError(Exception):
    status_code: int = HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(ApplicationError):
    status_code = HTTP_400_BAD_REQUEST


class NotFoundError(ApplicationError):
    status_code = HTTP_404_NOT_FOUND


# --- Module Notes -----------------------------------------------------------
# Services raise these; routers never catch them. Translation to responses
# happens once, in the app factory.
