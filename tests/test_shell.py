import pytest
from httpx import AsyncClient

from portal.core.routing import AUTHENTICATED_PATHS


@pytest.mark.asyncio
async def test_root_redirects_guest_to_login(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_root_redirects_student_to_dashboard(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/")
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", AUTHENTICATED_PATHS)
async def test_gated_pages_redirect_without_session(client: AsyncClient, path: str) -> None:
    response = await client.get(path)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", AUTHENTICATED_PATHS)
async def test_gated_pages_render_with_session(auth_client: AsyncClient, path: str) -> None:
    response = await auth_client.get(path)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unknown_route_is_not_found(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/admin/settings")
    assert response.status_code == 404
    assert response.json()["title"] == "Page not found"
    assert response.json()["home_path"] == "/"


@pytest.mark.asyncio
async def test_healthz(client: AsyncClient) -> None:
    response = await client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
