from portal.auth.schemas import CurrentUser
from portal.backend.client import Backend
from portal.core.calculations import to_date
from portal.pages.common import fetch_row

from .schemas import ProfilePage


async def get_profile(backend: Backend, user: CurrentUser) -> ProfilePage:
    profile = ProfilePage(
        name=user.name,
        email=user.email,
        username=user.username,
        application_number=user.application_number,
        profile_image=user.profile_image,
    )
    student = await fetch_row(backend.table("students").select("*").eq("id", user.student_id), "student profile")
    if student is None:
        profile.placeholder = "Additional profile details are not available yet"
        return profile

    profile.phone = student.get("phone_number")
    profile.date_of_birth = to_date(student.get("date_of_birth"))
    profile.father_name = student.get("father_name")
    profile.mother_name = student.get("mother_name")
    profile.address = student.get("address")
    profile.city = student.get("city")
    profile.country = student.get("country")
    profile.status = student.get("status")

    if student.get("course_id") is not None:
        course = await fetch_row(backend.table("courses").select("name").eq("id", student["course_id"]), "course")
        profile.program = (course or {}).get("name")
    if student.get("academic_session_id") is not None:
        session = await fetch_row(
            backend.table("academic_sessions")
            .select("session_name,start_date,end_date")
            .eq("id", student["academic_session_id"]),
            "academic session",
        )
        if session:
            profile.academic_session = session.get("session_name")
            profile.start_date = to_date(session.get("start_date"))
            profile.expected_graduation = to_date(session.get("end_date"))
    return profile
