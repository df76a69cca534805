import pytest
from httpx import AsyncClient

from portal.backend.memory import InMemoryBackend

STEP_ONE = {
    "first_name": "Priya",
    "last_name": "Sharma",
    "father_name": "Raj Sharma",
    "mother_name": "Anita Sharma",
    "date_of_birth": "2004-02-29",
    "phone_number": "+91 98765 43210",
    "email": "priya.sharma@example.com",
}
STEP_TWO = {
    "address": "12 MG Road",
    "city": "Pune",
    "country": "India",
    "aadhaar_number": "123412341234",
    "passport_number": "",
}
STEP_THREE = {
    "university_id": "1",
    "course_id": 1,
    "academic_session_id": 1,
    "twelfth_marks": "88.5",
    "seat_number": "",
    "scores": "IELTS 7.5",
}
STEP_FOUR = {"password": "secret1", "confirm_password": "secret1"}

FULL_FORM = {**STEP_ONE, **STEP_TWO, **STEP_THREE, **STEP_FOUR}


@pytest.mark.asyncio
async def test_register_page_options(client: AsyncClient) -> None:
    response = await client.get("/register")
    assert response.status_code == 200
    data = response.json()
    assert [s["number"] for s in data["steps"]] == [1, 2, 3, 4]
    assert "email" in data["steps"][0]["fields"]
    assert data["universities"] == [{"id": 1, "name": "State University"}]
    assert data["academic_sessions"] == [{"id": 1, "name": "2025-2026"}]


@pytest.mark.asyncio
async def test_register_page_survives_option_failure(client: AsyncClient, backend: InMemoryBackend) -> None:
    backend.fail_on("universities")
    data = (await client.get("/register")).json()
    assert data["universities"] == []
    assert data["courses"] == [{"id": 1, "name": "Master of Computer Science"}]


@pytest.mark.asyncio
async def test_step_advances_when_valid(client: AsyncClient) -> None:
    response = await client.post("/register/steps/1", json=STEP_ONE)
    assert response.status_code == 200
    assert response.json() == {"step": 1, "valid": True, "next_step": 2, "is_last_step": False}

    last = await client.post("/register/steps/4", json=STEP_FOUR)
    assert last.json()["is_last_step"] is True
    assert last.json()["next_step"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "step,data,field,message",
    [
        (1, dict(STEP_ONE, email="not-an-email"), "email", "Please enter a valid email address"),
        (1, dict(STEP_ONE, first_name=""), "first_name", "First name is required"),
        (2, dict(STEP_TWO, aadhaar_number="1234"), "aadhaar_number", "Aadhaar number must be 12 digits"),
        (2, dict(STEP_TWO, city=None), "city", "City is required"),
        (3, dict(STEP_THREE, twelfth_marks=101), "twelfth_marks", "Marks cannot exceed 100%"),
        (3, dict(STEP_THREE, twelfth_marks=-1), "twelfth_marks", "Marks cannot be negative"),
        (3, dict(STEP_THREE, course_id=""), "course_id", "Please select a course"),
        (4, {"password": "abc", "confirm_password": "abc"}, "password", "Password must be at least 6 characters"),
    ],
)
async def test_step_field_errors(client: AsyncClient, step: int, data: dict, field: str, message: str) -> None:
    response = await client.post(f"/register/steps/{step}", json=data)
    assert response.status_code == 422
    assert response.json()["detail"]["field_errors"][field] == message


@pytest.mark.asyncio
async def test_step_ignores_other_steps_fields(client: AsyncClient) -> None:
    # step 2 is valid even though step 1 fields are missing
    response = await client.post("/register/steps/2", json=STEP_TWO)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unknown_step(client: AsyncClient) -> None:
    response = await client.post("/register/steps/5", json={})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_password_mismatch_blocks_submission(client: AsyncClient, backend: InMemoryBackend) -> None:
    response = await client.post("/register", json=dict(FULL_FORM, confirm_password="secret2"))
    assert response.status_code == 422
    assert response.json()["detail"]["field_errors"] == {"confirm_password": "Passwords do not match"}
    assert backend.writes == []
    assert backend.tables["apply_students"] == []


@pytest.mark.asyncio
async def test_submit_inserts_pending_application(client: AsyncClient, backend: InMemoryBackend) -> None:
    response = await client.post("/register", json=FULL_FORM)
    assert response.status_code == 201
    assert response.json()["redirect_to"] == "/login"

    (row,) = backend.tables["apply_students"]
    assert row["status"] == "pending"
    assert row["application_status"] == "pending"
    assert "password" not in row
    assert "confirm_password" not in row
    assert row["email"] == "priya.sharma@example.com"
    assert row["date_of_birth"] == "2004-02-29"
    assert row["university_id"] == 1
    assert row["twelfth_marks"] == 88.5
    assert row["passport_number"] is None


@pytest.mark.asyncio
async def test_submit_reports_backend_error_verbatim(client: AsyncClient, backend: InMemoryBackend) -> None:
    message = 'duplicate key value violates unique constraint "apply_students_email_key"'
    backend.fail_on("apply_students", message)
    response = await client.post("/register", json=FULL_FORM)
    assert response.status_code == 400
    assert response.json()["detail"] == message


@pytest.mark.asyncio
async def test_submit_validates_every_step(client: AsyncClient, backend: InMemoryBackend) -> None:
    response = await client.post("/register", json=dict(FULL_FORM, email="", twelfth_marks=None))
    assert response.status_code == 422
    errors = response.json()["detail"]["field_errors"]
    assert errors["email"] == "Email is required"
    assert errors["twelfth_marks"] == "12th grade marks are required"
    assert backend.writes == []
