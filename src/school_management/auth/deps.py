"""
school_management.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Enforce per-entity entitlements via a reusable dependency factory.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from school_management.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from school_management.auth.models import Entitlement, Principal
from school_management.observability.logging import get_logger
from school_management.api.deps import settings_dep
from school_management.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal:
    if creds is None or not creds.credentials:
        raise _unauthorized("Missing bearer token")

    try:
        payload = decode_and_validate(cfg=jwt_config(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise _unauthorized(f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    entitlements_raw = payload.get("entitlements", {})
    if not subject:
        raise _unauthorized("Invalid token subject")
    if not isinstance(roles_raw, list):
        raise _unauthorized("Invalid token roles")
    if not isinstance(entitlements_raw, dict):
        raise _unauthorized("Invalid token entitlements")

    entitlements: dict[str, frozenset[Entitlement]] = {}
    for entity, ops in entitlements_raw.items():
        if not isinstance(ops, list):
            raise _unauthorized("Invalid token entitlements")
        parsed = (Entitlement.parse(str(op)) for op in ops)
        entitlements[str(entity)] = frozenset(e for e in parsed if e is not None)

    return Principal(
        subject=subject,
        roles=frozenset(str(r) for r in roles_raw),
        entitlements=entitlements,
    )


def require_entitlement(entity: str, entitlement: Entitlement):
    def _dep(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.has_entitlement(entity, entitlement):
            log.warning(
                "entitlement_denied",
                subject=principal.subject,
                entity=entity,
                entitlement=entitlement.value,
            )
            raise _unauthorized(f"Not entitled to {entitlement.value} {entity}")
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Entitlement failures answer 401, the same status as a missing or invalid token.
