"""Request building and error mapping of the REST client, exercised through httpx.MockTransport."""

import json
from typing import Callable, List

import httpx
import pytest

from portal.backend.client import Backend, BackendClient, build_query_params
from portal.core.exceptions import BackendError

URL = "https://project.supabase.co"
KEY = "anon-key"


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> BackendClient:
    return BackendClient(URL, KEY, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_select_builds_postgrest_query() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": 1, "title": "Visa Renewal"}])

    client = make_client(handler)
    rows = await (
        client.table("visa_deadlines")
        .select("id,title")
        .eq("student_id", 1)
        .order("due_date")
        .limit(5)
        .execute()
    )
    await client.aclose()

    assert rows == [{"id": 1, "title": "Visa Renewal"}]
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/rest/v1/visa_deadlines"
    assert request.url.params["select"] == "id,title"
    assert request.url.params["student_id"] == "eq.1"
    assert request.url.params["order"] == "due_date.asc"
    assert request.url.params["limit"] == "5"
    assert request.headers["apikey"] == KEY
    assert request.headers["authorization"] == f"Bearer {KEY}"


@pytest.mark.asyncio
async def test_single_row_missing_reads_as_none() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            406,
            json={"code": "PGRST116", "message": "JSON object requested, multiple (or no) rows returned"},
        )

    client = make_client(handler)
    row = await client.table("student_visa").select("*").eq("student_id", 7).single().execute()
    await client.aclose()

    assert row is None
    assert seen[0].headers["accept"] == "application/vnd.pgrst.object+json"


@pytest.mark.asyncio
async def test_insert_posts_rows_and_returns_representation() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        body = json.loads(request.content)
        return httpx.Response(201, json=[dict(body[0], id=11)])

    client = make_client(handler)
    inserted = await client.table("hostel_registrations").insert([{"student_id": 1, "hostel_id": 2}]).execute()
    await client.aclose()

    assert inserted == [{"student_id": 1, "hostel_id": 2, "id": 11}]
    request = seen[0]
    assert request.method == "POST"
    assert request.headers["prefer"] == "return=representation"
    assert "select" not in request.url.params


@pytest.mark.asyncio
async def test_backend_error_carries_message_and_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            409,
            json={
                "code": "23505",
                "message": 'duplicate key value violates unique constraint "apply_students_email_key"',
                "details": "Key (email) already exists.",
                "hint": None,
            },
        )

    client = make_client(handler)
    with pytest.raises(BackendError) as exc_info:
        await client.table("apply_students").insert([{"email": "a@b.co"}]).execute()
    await client.aclose()

    assert exc_info.value.code == "23505"
    assert exc_info.value.status_code == 409
    assert "duplicate key" in exc_info.value.message
    assert exc_info.value.details == "Key (email) already exists."


@pytest.mark.asyncio
async def test_server_errors_map_to_bad_gateway() -> None:
    client = make_client(lambda request: httpx.Response(503, text="upstream unavailable"))
    with pytest.raises(BackendError) as exc_info:
        await client.table("hostels").select().execute()
    await client.aclose()

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "upstream unavailable"


@pytest.mark.asyncio
async def test_transport_failure_is_a_backend_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(BackendError) as exc_info:
        await client.rpc("verify_student_login", {"input_username": "a", "input_password": "b"})
    await client.aclose()

    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_rpc_posts_parameters() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"student_id": 1}])

    client = make_client(handler)
    rows = await client.rpc("verify_student_login", {"input_username": "demo", "input_password": "pw"})
    await client.aclose()

    assert rows == [{"student_id": 1}]
    assert seen[0].url.path == "/rest/v1/rpc/verify_student_login"
    assert json.loads(seen[0].content) == {"input_username": "demo", "input_password": "pw"}


@pytest.mark.asyncio
async def test_storage_list_and_download() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.startswith("/storage/v1/object/list/"):
            return httpx.Response(200, json=[{"name": "Offer.pdf", "metadata": {"size": 2048}}])
        return httpx.Response(200, content=b"%PDF")

    client = make_client(handler)
    entries = await client.list_objects("student-documents", "1")
    content = await client.download("student-documents", "1/Offer.pdf")
    await client.aclose()

    assert entries[0]["name"] == "Offer.pdf"
    assert content == b"%PDF"
    assert json.loads(seen[0].content)["prefix"] == "1"
    assert seen[0].url.path == "/storage/v1/object/list/student-documents"
    assert seen[1].url.path == "/storage/v1/object/student-documents/1/Offer.pdf"


def test_query_params_for_in_and_null_filters() -> None:
    client = Backend()
    query = (
        client.table("hostel_registrations")
        .select()
        .in_("status", ["pending", "approved"])
        .eq("approved_at", None)
        .eq("is_completed", False)
        .order("requested_at", ascending=False)
    )
    assert build_query_params(query) == [
        ("select", "*"),
        ("status", "in.(pending,approved)"),
        ("approved_at", "is.null"),
        ("is_completed", "eq.false"),
        ("order", "requested_at.desc"),
    ]


@pytest.mark.asyncio
async def test_download_escapes_object_name() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"%PDF")

    client = make_client(handler)
    await client.download("student-documents", "1/Receipt #2?.pdf")
    await client.aclose()

    assert seen[0].url.raw_path == b"/storage/v1/object/student-documents/1/Receipt%20%232%3F.pdf"
    assert seen[0].url.query == b""
