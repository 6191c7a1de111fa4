"""
tests.conftest

Shared fixtures for API and service tests.

Responsibilities:
- Build an app per test against a throwaway SQLite file.
- Provide an in-process HTTP client and bearer-token helpers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping, Sequence
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from school_management.api.app import create_app, start_resources, stop_resources
from school_management.auth.deps import jwt_config
from school_management.auth.jwt import issue_token
from school_management.settings import Settings

TokenFactory = Callable[..., dict[str, str]]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'school.db'}",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; manage resources explicitly.
    await start_resources(app)
    try:
        yield app
    finally:
        await stop_resources(app)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings: Settings) -> TokenFactory:
    cfg = jwt_config(settings)

    def _make(
        *,
        roles: Sequence[str] = (),
        entitlements: Mapping[str, Sequence[str]] | None = None,
        subject: str = "teacher@school.test",
    ) -> dict[str, str]:
        token = issue_token(cfg=cfg, subject=subject, roles=roles, entitlements=entitlements)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin(auth_headers: TokenFactory) -> dict[str, str]:
    return auth_headers(roles=["admin"])
