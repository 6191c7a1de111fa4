"""
tests.test_auth

Authentication and per-entity entitlement checks.

Responsibilities:
- Missing/invalid tokens are rejected with 401.
- Entitlements are enforced per entity and per operation.
- Admins bypass entitlement checks.
- The dev token endpoint mints usable tokens outside prod.
"""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from school_management.api.app import create_app
from school_management.auth.deps import jwt_config
from school_management.auth.jwt import issue_token
from school_management.settings import Settings


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/skill")
    assert r.status_code == 401
    assert r.json()["detail"] == "Missing bearer token"
    assert r.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_invalid_tokens_are_unauthorized(
    client: httpx.AsyncClient, settings: Settings
) -> None:
    r = await client.get("/api/skill", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

    expired = issue_token(
        cfg=jwt_config(settings), subject="u", roles=["admin"], ttl=timedelta(seconds=-30)
    )
    r = await client.get("/api/skill", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["detail"].startswith("Invalid token")

    foreign = settings.model_copy(update={"jwt_secret": "another-secret-0123456789abcdefghij"})
    forged = issue_token(cfg=jwt_config(foreign), subject="u", roles=["admin"])
    r = await client.get("/api/skill", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_entitlements_are_per_operation(client: httpx.AsyncClient, auth_headers) -> None:
    reader = auth_headers(entitlements={"Skill": ["Read"]})

    r = await client.get("/api/skill", headers=reader)
    assert r.status_code == 200

    r = await client.post("/api/skill", json={"name": "Chess"}, headers=reader)
    assert r.status_code == 401
    assert r.json()["detail"] == "Not entitled to Create Skill"


@pytest.mark.asyncio
async def test_entitlements_are_per_entity(client: httpx.AsyncClient, auth_headers) -> None:
    benefits_only = auth_headers(entitlements={"Benefits": ["Create", "Read", "Update", "Delete"]})

    r = await client.get("/api/benefits", headers=benefits_only)
    assert r.status_code == 200

    r = await client.get("/api/skill", headers=benefits_only)
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_entitlement_names_are_case_insensitive(
    client: httpx.AsyncClient, auth_headers
) -> None:
    editor = auth_headers(entitlements={"Skill": ["create", "READ", "update", "delete"]})

    r = await client.post("/api/skill", json={"name": "Chess"}, headers=editor)
    assert r.status_code == 200
    skill_id = r.json()["id"]

    r = await client.patch(
        f"/api/skill/{skill_id}",
        json=[{"op": "replace", "path": "/name", "value": "Go"}],
        headers=editor,
    )
    assert r.status_code == 200

    r = await client.delete(f"/api/skill/{skill_id}", headers=editor)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_auth_runs_before_lookup(client: httpx.AsyncClient, auth_headers) -> None:
    reader = auth_headers(entitlements={"Skill": ["Read"]})
    r = await client.delete(
        "/api/skill/00000000-0000-0000-0000-000000000000", headers=reader
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_dev_token_endpoint(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/dev/token",
        json={"subject": "registrar", "entitlements": {"FeeWaiver": ["Read"]}},
    )
    assert r.status_code == 200
    token = r.json()["access_token"]
    assert r.json()["token_type"] == "bearer"

    headers = {"Authorization": f"Bearer {token}"}
    assert (await client.get("/api/feewaiver", headers=headers)).status_code == 200
    assert (await client.get("/api/skill", headers=headers)).status_code == 401


@pytest.mark.asyncio
async def test_dev_token_rejects_unknown_entitlement(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/dev/token",
        json={"subject": "registrar", "entitlements": {"Skill": ["Approve"]}},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_dev_token_hidden_in_prod(settings: Settings) -> None:
    app = create_app(settings=settings.model_copy(update={"env": "prod"}))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.post("/api/dev/token", json={"subject": "x"})
    assert r.status_code == 404
