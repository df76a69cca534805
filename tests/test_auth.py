import pytest
from httpx import AsyncClient
from jose import jwt

from portal.auth.schemas import SessionUser
from portal.auth.security import create_session_token, decode_session_token
from portal.backend.memory import DEMO_PASSWORD, DEMO_USERNAME, InMemoryBackend
from portal.core.config import settings


@pytest.mark.asyncio
async def test_login_success_sets_session(client: AsyncClient) -> None:
    response = await client.post("/login", json={"username": DEMO_USERNAME, "password": DEMO_PASSWORD})
    assert response.status_code == 200
    data = response.json()

    assert data["success"] is True
    assert data["redirect_to"] == "/dashboard"
    # session id is the credentials row's student id
    assert data["user"]["id"] == "1"
    assert data["user"]["name"] == "Demo Student"
    assert data["user"]["application_number"] == "ADM-2025-0001"
    assert settings.session_cookie_name in response.cookies

    session = await client.get("/session")
    assert session.json()["authenticated"] is True
    assert session.json()["user"]["id"] == "1"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username,password",
    [
        (DEMO_USERNAME, "wrong-password"),
        ("nobody", DEMO_PASSWORD),
        ("nobody", "nothing"),
    ],
)
async def test_login_failure_creates_no_session(client: AsyncClient, username: str, password: str) -> None:
    response = await client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"
    assert settings.session_cookie_name not in response.cookies

    session = await client.get("/session")
    assert session.json() == {"authenticated": False, "user": None}


@pytest.mark.asyncio
async def test_failed_login_keeps_existing_session(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/login", json={"username": DEMO_USERNAME, "password": "bad"})
    assert response.status_code == 401

    session = await auth_client.get("/session")
    assert session.json()["authenticated"] is True


@pytest.mark.asyncio
async def test_login_reports_backend_error(client: AsyncClient, backend: InMemoryBackend) -> None:
    backend.fail_on("rpc:verify_student_login", "permission denied for function verify_student_login")

    response = await client.post("/login", json={"username": DEMO_USERNAME, "password": DEMO_PASSWORD})
    assert response.status_code == 401
    assert response.json()["detail"] == "permission denied for function verify_student_login"
    assert settings.session_cookie_name not in response.cookies


@pytest.mark.asyncio
async def test_login_requires_username(client: AsyncClient) -> None:
    response = await client.post("/login", json={"username": "  ", "password": "x"})
    assert response.status_code == 422
    assert "Username is required" in response.text


@pytest.mark.asyncio
async def test_logout_then_reload_has_no_session(auth_client: AsyncClient) -> None:
    response = await auth_client.post("/logout")
    assert response.status_code == 200
    assert response.json()["redirect_to"] == "/login"

    page = await auth_client.get("/dashboard")
    assert page.status_code == 303
    assert page.headers["location"] == "/login"

    session = await auth_client.get("/session")
    assert session.json()["authenticated"] is False


@pytest.mark.asyncio
async def test_login_page_for_guest(client: AsyncClient) -> None:
    response = await client.get("/login")
    assert response.status_code == 200
    assert response.json()["register_path"] == "/register"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/login", "/register"])
async def test_guest_pages_redirect_signed_in_student(auth_client: AsyncClient, path: str) -> None:
    response = await auth_client.get(path)
    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


@pytest.mark.asyncio
async def test_tampered_cookie_is_ignored(client: AsyncClient) -> None:
    client.cookies.set(settings.session_cookie_name, "not-a-valid-token")
    response = await client.get("/dashboard")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_account_register_is_a_dead_end(client: AsyncClient) -> None:
    response = await client.post(
        "/account/register",
        json={
            "application_number": "ADM-1",
            "email": "someone@example.com",
            "password": "secret123",
            "name": "Some One",
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Please use the application form to register"


def test_session_token_round_trip() -> None:
    user = SessionUser(id="42", name="Ada Lovelace", email="ada@example.edu", username="ada")
    restored = decode_session_token(create_session_token(user))
    assert restored is not None
    assert restored.student_id == 42
    assert restored.name == "Ada Lovelace"


def test_session_token_rejects_non_numeric_id() -> None:
    user = SessionUser(id="abc", name="X", username="x")
    assert decode_session_token(create_session_token(user)) is None
    assert decode_session_token(None) is None


@pytest.mark.asyncio
async def test_session_cookie_is_persistent_and_token_never_expires(client: AsyncClient) -> None:
    response = await client.post("/login", json={"username": DEMO_USERNAME, "password": DEMO_PASSWORD})
    cookie_header = response.headers["set-cookie"]
    assert f"Max-Age={settings.session_cookie_max_age}" in cookie_header
    assert "HttpOnly" in cookie_header

    token = response.cookies[settings.session_cookie_name]
    assert "exp" not in jwt.get_unverified_claims(token)
