from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from portal.auth.schemas import CurrentUser
from portal.backend.memory import (
    DEMO_PASSWORD,
    DEMO_USERNAME,
    InMemoryBackend,
    sample_objects,
    sample_tables,
)
from portal.backend.session import get_backend
from portal.main import app


DEMO_LOGIN = {"username": DEMO_USERNAME, "password": DEMO_PASSWORD}


@pytest.fixture()
def backend() -> InMemoryBackend:
    """Fresh copy of the sample data set for every test."""
    return InMemoryBackend(tables=sample_tables(), objects=sample_objects())


@pytest.fixture()
def demo_user() -> CurrentUser:
    return CurrentUser(
        id="1",
        name="Demo Student",
        email="demo.student@example.edu",
        application_number="ADM-2025-0001",
        username=DEMO_USERNAME,
    )


@pytest.fixture()
async def client(backend: InMemoryBackend) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app, with the backend dependency overridden."""

    async def override_get_backend() -> InMemoryBackend:
        return backend

    app.dependency_overrides[get_backend] = override_get_backend
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
async def auth_client(client: AsyncClient) -> AsyncClient:
    """Client holding the demo student's session cookie."""
    response = await client.post("/login", json=DEMO_LOGIN)
    assert response.status_code == 200
    return client
