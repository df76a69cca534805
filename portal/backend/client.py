"""
Async client for the hosted backend: PostgREST table API, RPC and object storage.

Queries are built fluently and executed by the backend that created them:

    rows = await backend.table("visa_deadlines").select("*").eq("student_id", 1).order("due_date").execute()
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

import httpx
from fastapi import status

from portal.core.exceptions import BackendError


# PostgREST code for "single row requested, zero rows returned"
NO_ROWS_CODE = "PGRST116"

Filter = Tuple[str, str, Any]


class TableQuery:
    """A table-scoped read or insert. Nothing is sent until `execute()`."""

    def __init__(self, backend: "Backend", table: str) -> None:
        self.backend = backend
        self.table = table
        self.method = "GET"
        self.columns = "*"
        self.filters: List[Filter] = []
        self.orders: List[Tuple[str, bool]] = []
        self.row_limit: Optional[int] = None
        self.single_row = False
        self.payload: Optional[List[Dict[str, Any]]] = None

    def select(self, columns: str = "*") -> "TableQuery":
        self.method = "GET"
        self.columns = columns
        return self

    def insert(self, rows: Sequence[Dict[str, Any]]) -> "TableQuery":
        self.method = "POST"
        self.payload = [dict(r) for r in rows]
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self.filters.append(("eq", column, value))
        return self

    def gt(self, column: str, value: Any) -> "TableQuery":
        self.filters.append(("gt", column, value))
        return self

    def in_(self, column: str, values: Sequence[Any]) -> "TableQuery":
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self.orders.append((column, ascending))
        return self

    def limit(self, count: int) -> "TableQuery":
        self.row_limit = count
        return self

    def single(self) -> "TableQuery":
        """Expect at most one row; `execute()` returns the row dict or None."""
        self.single_row = True
        return self

    async def execute(self) -> Any:
        return await self.backend.execute(self)


class Backend:
    """Operations the portal needs from the backend-as-a-service."""

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    async def execute(self, query: TableQuery) -> Any:
        raise NotImplementedError

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        raise NotImplementedError

    async def list_objects(self, bucket: str, prefix: str = "") -> List[Dict[str, Any]]:
        raise NotImplementedError

    async def download(self, bucket: str, path: str) -> bytes:
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def build_query_params(query: TableQuery) -> List[Tuple[str, str]]:
    """Translate a TableQuery into PostgREST query-string parameters."""
    params: List[Tuple[str, str]] = []
    if query.method == "GET":
        params.append(("select", query.columns))
    for op, column, value in query.filters:
        if op == "in":
            params.append((column, "in.(" + ",".join(_format_value(v) for v in value) + ")"))
        elif value is None and op == "eq":
            params.append((column, "is.null"))
        else:
            params.append((column, f"{op}.{_format_value(value)}"))
    if query.orders:
        params.append(
            ("order", ",".join(f"{col}.{'asc' if asc else 'desc'}" for col, asc in query.orders))
        )
    if query.row_limit is not None:
        params.append(("limit", str(query.row_limit)))
    return params


class BackendClient(Backend):
    """HTTP implementation talking to `{url}/rest/v1` and `{url}/storage/v1`."""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.url,
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[List[Tuple[str, str]]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            raise BackendError(f"Backend request failed: {e}") from e
        if response.is_error:
            raise _error_from_response(response)
        return response

    async def execute(self, query: TableQuery) -> Any:
        headers: Dict[str, str] = {}
        if query.single_row:
            headers["Accept"] = "application/vnd.pgrst.object+json"
        if query.method == "POST":
            headers["Prefer"] = "return=representation"
        try:
            response = await self._request(
                query.method,
                f"/rest/v1/{query.table}",
                params=build_query_params(query),
                json=query.payload,
                headers=headers,
            )
        except BackendError as e:
            if query.single_row and e.code == NO_ROWS_CODE:
                return None
            raise
        if not response.content:
            return None
        return response.json()

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = await self._request("POST", f"/rest/v1/rpc/{function}", json=params or {})
        if not response.content:
            return None
        return response.json()

    async def list_objects(self, bucket: str, prefix: str = "") -> List[Dict[str, Any]]:
        response = await self._request(
            "POST",
            f"/storage/v1/object/list/{bucket}",
            json={
                "prefix": prefix,
                "limit": 100,
                "offset": 0,
                "sortBy": {"column": "name", "order": "asc"},
            },
        )
        return response.json() or []

    async def download(self, bucket: str, path: str) -> bytes:
        object_path = "/".join(quote(segment, safe="") for segment in path.strip("/").split("/"))
        response = await self._request("GET", f"/storage/v1/object/{bucket}/{object_path}")
        return response.content


def _error_from_response(response: httpx.Response) -> BackendError:
    body: Dict[str, Any] = {}
    try:
        parsed = response.json()
        if isinstance(parsed, dict):
            body = parsed
    except ValueError:
        pass
    message = body.get("message") or body.get("error") or response.text or response.reason_phrase
    status_code = response.status_code if response.status_code < 500 else status.HTTP_502_BAD_GATEWAY
    return BackendError(
        message,
        code=body.get("code") or body.get("statusCode"),
        details=body.get("details"),
        hint=body.get("hint"),
        status_code=status_code,
    )
