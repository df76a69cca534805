from datetime import date

import pytest
from httpx import AsyncClient

from portal.auth.schemas import CurrentUser
from portal.backend.memory import InMemoryBackend
from portal.pages.dashboard import service


@pytest.mark.asyncio
async def test_dashboard_requires_session(client: AsyncClient) -> None:
    response = await client.get("/dashboard")
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


@pytest.mark.asyncio
async def test_dashboard_for_demo_student(auth_client: AsyncClient) -> None:
    response = await auth_client.get("/dashboard")
    assert response.status_code == 200
    data = response.json()

    assert data["greeting"] == "Welcome back, Demo"
    assert data["admission"]["status"] == "Approved"
    assert data["admission"]["program"] == "Master of Computer Science"
    assert data["admission"]["start_date"] == "2025-09-01"

    # newest payment first, unpaid fees left out
    assert [p["id"] for p in data["recent_payments"]] == [3, 1]
    assert data["recent_payments_total"] == 4650
    assert data["payments_placeholder"] is None

    assert len(data["quick_links"]) == 4
    assert [s["completed"] for s in data["progress_steps"]] == [True, True, True, True, False]
    assert data["progress_percentage"] == 80
    assert data["admission"]["next_step"] == "Arrival and Registration"


@pytest.mark.asyncio
async def test_dashboard_empty_sections_use_placeholders(
    auth_client: AsyncClient, backend: InMemoryBackend
) -> None:
    backend.tables["fee_payments"] = []
    backend.tables["visa_deadlines"] = []

    data = (await auth_client.get("/dashboard")).json()
    assert data["recent_payments"] is None
    assert data["payments_placeholder"] == "No payments recorded yet"
    assert data["upcoming_deadlines"] is None
    assert data["deadlines_placeholder"] == "No upcoming deadlines"


@pytest.mark.asyncio
async def test_dashboard_read_failure_is_swallowed(auth_client: AsyncClient, backend: InMemoryBackend) -> None:
    backend.fail_on("fee_payments")
    backend.fail_on("students")

    response = await auth_client.get("/dashboard")
    assert response.status_code == 200
    data = response.json()
    assert data["recent_payments"] is None
    assert data["admission"] is None
    assert data["admission_placeholder"]


@pytest.mark.asyncio
async def test_dashboard_uses_seven_day_urgency(backend: InMemoryBackend, demo_user: CurrentUser) -> None:
    page = await service.get_dashboard(backend, demo_user, today=date(2025, 9, 5))

    residency, renewal = page.upcoming_deadlines
    assert residency.days_left == 10
    assert residency.is_urgent is False
    assert renewal.is_urgent is False

    page = await service.get_dashboard(backend, demo_user, today=date(2025, 9, 8))
    assert page.upcoming_deadlines[0].days_left == 7
    assert page.upcoming_deadlines[0].is_urgent is True


@pytest.mark.asyncio
async def test_completed_deadlines_are_not_upcoming(backend: InMemoryBackend, demo_user: CurrentUser) -> None:
    backend.tables["visa_deadlines"][0]["is_completed"] = True
    page = await service.get_dashboard(backend, demo_user, today=date(2025, 9, 5))
    assert [d.title for d in page.upcoming_deadlines] == ["Visa Renewal Application"]


@pytest.mark.asyncio
async def test_dashboard_reads_timestamps_with_trimmed_fraction(
    auth_client: AsyncClient, backend: InMemoryBackend
) -> None:
    backend.tables["fee_payments"][0]["last_payment_date"] = "2025-02-01T09:15:30.12345+00:00"
    response = await auth_client.get("/dashboard")
    assert response.status_code == 200
    paid_on = {p["id"]: p["paid_on"] for p in response.json()["recent_payments"]}
    assert paid_on[1] == "2025-02-01"
