"""
In-memory backend with the same surface as BackendClient.

Used when the backend URL/key are not configured in development, and as the
backend dependency override in tests.
"""

import copy
import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from fastapi import status

from portal.backend.client import Backend, TableQuery
from portal.core.exceptions import BackendError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo1234"

# columns stamped with the insert time when the caller leaves them out
TIMESTAMP_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "apply_students": ("created_at", "updated_at"),
    "hostel_registrations": ("requested_at",),
    "support_tickets": ("created_at", "updated_at"),
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(row: Row, op: str, column: str, value: Any) -> bool:
    current = row.get(column)
    if op == "eq":
        return current == value
    if op == "in":
        return current in value
    if op == "gt":
        return current is not None and current > value
    raise BackendError(f"Unsupported filter operator: {op}", status_code=status.HTTP_400_BAD_REQUEST)


def _sort_key(value: Any) -> Tuple[bool, Any]:
    return (value is None, value if value is not None else 0)


class InMemoryBackend(Backend):
    def __init__(
        self,
        tables: Optional[Dict[str, List[Row]]] = None,
        objects: Optional[Dict[str, Dict[str, Tuple[bytes, Row]]]] = None,
    ) -> None:
        self.tables: Dict[str, List[Row]] = copy.deepcopy(tables) if tables else {}
        # bucket -> object path -> (content, metadata)
        self.objects: Dict[str, Dict[str, Tuple[bytes, Row]]] = copy.deepcopy(objects) if objects else {}
        self.failures: Dict[str, BackendError] = {}
        self.writes: List[Tuple[str, Row]] = []
        self._ids = itertools.count(1000)
        self._functions: Dict[str, Callable[[Dict[str, Any]], List[Row]]] = {
            "verify_student_login": self._verify_student_login,
        }

    def fail_on(self, target: str, message: str = "Backend unavailable") -> None:
        """Make every call against `target` fail: a table name, `rpc:<name>` or `storage`."""
        self.failures[target] = BackendError(message)

    def _check_failure(self, target: str) -> None:
        error = self.failures.get(target)
        if error is not None:
            raise error

    async def execute(self, query: TableQuery) -> Any:
        self._check_failure(query.table)
        if query.method == "POST":
            return self._insert(query.table, query.payload or [])

        rows = [r for r in self.tables.get(query.table, []) if all(_matches(r, *f) for f in query.filters)]
        # apply sort keys last-to-first so the first order() wins; NULLs sort last ascending
        for column, ascending in reversed(query.orders):
            rows.sort(key=lambda r, c=column: _sort_key(r.get(c)), reverse=not ascending)
        if query.row_limit is not None:
            rows = rows[: query.row_limit]
        rows = copy.deepcopy(rows)
        if query.single_row:
            return rows[0] if len(rows) == 1 else None
        return rows

    def _insert(self, table: str, payload: List[Row]) -> List[Row]:
        inserted: List[Row] = []
        for raw in payload:
            row = dict(raw)
            row.setdefault("id", next(self._ids))
            for column in TIMESTAMP_COLUMNS.get(table, ()):
                row.setdefault(column, _now_iso())
            self.tables.setdefault(table, []).append(row)
            self.writes.append((table, row))
            inserted.append(copy.deepcopy(row))
        return inserted

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        self._check_failure(f"rpc:{function}")
        handler = self._functions.get(function)
        if handler is None:
            raise BackendError(
                f"Could not find the function public.{function}",
                code="PGRST202",
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return handler(params or {})

    def _verify_student_login(self, params: Dict[str, Any]) -> List[Row]:
        username = params.get("input_username")
        password = params.get("input_password")
        students = {s["id"]: s for s in self.tables.get("students", [])}
        result: List[Row] = []
        for cred in self.tables.get("student_credentials", []):
            if cred.get("username") != username or cred.get("password") != password:
                continue
            student = students.get(cred.get("student_id"), {})
            result.append(
                {
                    "student_id": cred.get("student_id"),
                    "first_name": student.get("first_name", ""),
                    "last_name": student.get("last_name", ""),
                    "email": student.get("email"),
                    "admission_number": student.get("admission_number"),
                    "username": cred.get("username"),
                }
            )
        return result

    async def list_objects(self, bucket: str, prefix: str = "") -> List[Dict[str, Any]]:
        self._check_failure("storage")
        folder = prefix.strip("/")
        entries: List[Dict[str, Any]] = []
        subfolders: List[str] = []
        for path, (content, meta) in sorted(self.objects.get(bucket, {}).items()):
            parent, _, name = path.rpartition("/")
            if parent != folder:
                # nested objects show up as one folder entry, without id or metadata
                inside = f"{folder}/" if folder else ""
                if path.startswith(inside):
                    child = path[len(inside):].split("/", 1)[0]
                    if child not in subfolders:
                        subfolders.append(child)
                        entries.append({"name": child, "id": None, "updated_at": None, "metadata": None})
                continue
            entries.append(
                {
                    "name": name,
                    "id": meta.get("id", path),
                    "created_at": meta.get("created_at"),
                    "updated_at": meta.get("updated_at"),
                    "metadata": {"size": len(content), "mimetype": meta.get("mimetype")},
                }
            )
        return entries

    async def download(self, bucket: str, path: str) -> bytes:
        self._check_failure("storage")
        stored = self.objects.get(bucket, {}).get(path.strip("/"))
        if stored is None:
            raise BackendError("Object not found", code="404", status_code=status.HTTP_404_NOT_FOUND)
        return stored[0]


def sample_tables() -> Dict[str, List[Row]]:
    """Development data set: one demo student with visa, residency, fees and hostels."""
    return {
        "students": [
            {
                "id": 1,
                "first_name": "Demo",
                "last_name": "Student",
                "father_name": "Robert Student",
                "mother_name": "Maria Student",
                "date_of_birth": "2002-04-12",
                "phone_number": "+1 (555) 987-6543",
                "email": "demo.student@example.edu",
                "university_id": 1,
                "course_id": 1,
                "academic_session_id": 1,
                "status": "Approved",
                "admission_number": "ADM-2025-0001",
                "address": "123 University Ave",
                "city": "College Town",
                "country": "United States",
                "updated_at": "2025-02-15T00:00:00Z",
            }
        ],
        "student_credentials": [
            {"id": 1, "student_id": 1, "username": DEMO_USERNAME, "password": DEMO_PASSWORD},
        ],
        "universities": [{"id": 1, "name": "State University"}],
        "courses": [{"id": 1, "name": "Master of Computer Science"}],
        "academic_sessions": [
            {
                "id": 1,
                "session_name": "2025-2026",
                "start_date": "2025-09-01",
                "end_date": "2026-06-30",
                "is_active": True,
            }
        ],
        "student_visa": [
            {
                "id": 1,
                "student_id": 1,
                "visa_type": "F-1 Student Visa",
                "visa_status": "Approved",
                "visa_number": "F1234567890",
                "issue_date": "2024-06-15",
                "expiration_date": "2026-06-15",
                "entry_type": "Multiple Entry",
                "application_date": "2024-03-01",
                "interview_date": "2024-05-15",
                "approval_date": "2024-06-01",
                "application_submitted": True,
                "visa_interview": True,
                "visa_approved": True,
                "residency_registration": False,
            }
        ],
        "student_residency": [
            {
                "id": 1,
                "student_id": 1,
                "registration_status": "Pending Registration",
                "registration_deadline": "2025-09-15",
                "current_address": "123 University Ave, College Town, ST 12345",
                "local_id_number": None,
                "registration_date": None,
            }
        ],
        "visa_deadlines": [
            {
                "id": 1,
                "student_id": 1,
                "title": "Complete Residency Registration",
                "description": "Register with local authorities within 30 days of arrival",
                "due_date": "2025-09-15",
                "deadline_type": "mandatory",
                "is_completed": False,
            },
            {
                "id": 2,
                "student_id": 1,
                "title": "Visa Renewal Application",
                "description": "Submit visa renewal application 90 days before expiration",
                "due_date": "2026-03-15",
                "deadline_type": "important",
                "is_completed": False,
            },
        ],
        "visa_documents": [
            {"id": 1, "student_id": 1, "document_name": "Visa Approval Letter", "is_available": True, "document_url": "#"},
            {"id": 2, "student_id": 1, "document_name": "I-20 Form", "is_available": True, "document_url": "#"},
            {
                "id": 3,
                "student_id": 1,
                "document_name": "Residency Registration Certificate",
                "is_available": False,
                "document_url": None,
            },
        ],
        "fee_payments": [
            {
                "id": 1,
                "student_id": 1,
                "fee_type": "tuition",
                "description": "Tuition Fee - Semester 1",
                "amount_due": 4500,
                "amount_paid": 4500,
                "status": "paid",
                "due_date": "2025-02-01",
                "last_payment_date": "2025-02-01",
                "payment_method": "Credit Card",
            },
            {
                "id": 2,
                "student_id": 1,
                "fee_type": "tuition",
                "description": "Tuition Fee - Semester 2",
                "amount_due": 5000,
                "amount_paid": 0,
                "status": "pending",
                "due_date": "2025-08-01",
                "last_payment_date": None,
                "payment_method": None,
            },
            {
                "id": 3,
                "student_id": 1,
                "fee_type": "technology",
                "description": "Technology Fee",
                "amount_due": 350,
                "amount_paid": 150,
                "status": "partial",
                "due_date": "2025-09-15",
                "last_payment_date": "2025-06-10",
                "payment_method": "Bank Transfer",
            },
        ],
        "hostels": [
            {
                "id": 1,
                "name": "North Residence Hall",
                "location": "North Campus",
                "capacity": 200,
                "current_occupancy": 150,
                "monthly_rent": 450,
                "facilities": "Wi-Fi, Laundry, Mess",
                "status": "Active",
            },
            {
                "id": 2,
                "name": "Lakeside Apartments",
                "location": "East Campus",
                "capacity": 80,
                "current_occupancy": 80,
                "monthly_rent": 650,
                "facilities": "Wi-Fi, Kitchenette",
                "status": "Active",
            },
        ],
        "hostel_registrations": [],
        "support_tickets": [],
        "apply_students": [],
    }


def sample_objects() -> Dict[str, Dict[str, Tuple[bytes, Row]]]:
    return {
        "student-documents": {
            "1/Admission Letter.pdf": (
                b"%PDF-1.4 admission letter",
                {"mimetype": "application/pdf", "updated_at": "2024-12-20T00:00:00Z"},
            ),
        }
    }


def create_sample_backend() -> InMemoryBackend:
    logger.warning("Backend environment variables not configured. Using in-memory sample data.")
    return InMemoryBackend(tables=sample_tables(), objects=sample_objects())
