"""
Club students (members) endpoints and predicates.
"""

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from ..types import (
    ApiResponse,
    GetStudentsOptions,
    PageInfo,
    Student,
    StudentAccess,
    StudentLessons,
    StudentProgressOptions,
    from_timestamp,
)

if TYPE_CHECKING:
    from ..client import HotmartHttpClient


USERS_PATH = "/club/api/v1/users"
PAGE_SIZE = 100

PLUS_HOLDER_ACCESS = ("HOLDER", "HOLDER_WITH_DEPENDENTS", "HOLDER_WITHOUT_DEPENDENTS")


class StudentsService:
    """Club members operations."""

    def __init__(self, client: "HotmartHttpClient") -> None:
        self._client = client

    async def get_students(self, options: GetStudentsOptions) -> ApiResponse[Student]:
        """List members of a Club area, one page at a time."""
        response = await self._client.get(USERS_PATH, params=options.to_params())
        response = response or {}
        return ApiResponse(
            items=[Student.from_dict(item) for item in response.get("items") or []],
            page_info=PageInfo.from_dict(response.get("page_info") or {}),
        )

    async def get_student_progress(self, options: StudentProgressOptions) -> StudentLessons:
        """Fetch the lesson completion list of one member."""
        response = await self._client.get(
            f"{USERS_PATH}/{options.user_id}/lessons",
            params={"subdomain": options.subdomain},
        )
        return StudentLessons.from_dict(response or {})

    async def get_student_by_email(self, subdomain: str, email: str) -> Optional[Student]:
        response = await self.get_students(GetStudentsOptions(subdomain=subdomain, email=email))
        wanted = email.lower()
        for student in response.items:
            if (student.email or "").lower() == wanted:
                return student
        return None

    async def get_student_by_id(self, subdomain: str, user_id: str) -> Optional[Student]:
        """Look up a member by id on the first result page only."""
        response = await self.get_students(GetStudentsOptions(subdomain=subdomain))
        for student in response.items:
            if student.user_id == user_id:
                return student
        return None

    # =========================================================================
    # Predicates
    # =========================================================================

    def is_active_student(self, student: Student) -> bool:
        return student.status == "ACTIVE"

    def is_subscriber(self, student: Student) -> bool:
        return student.type == "BUYER" and self.is_active_student(student)

    def is_student(self, student: Student) -> bool:
        return student.role in ("STUDENT", "FREE_STUDENT")

    def is_free_student(self, student: Student) -> bool:
        return student.type == "FREE" or student.role == "FREE_STUDENT"

    def is_paid_student(self, student: Student) -> bool:
        return student.type == "BUYER" and self.is_active_student(student)

    def is_owner(self, student: Student) -> bool:
        return student.role == "OWNER"

    def is_admin(self, student: Student) -> bool:
        return student.role == "ADMIN"

    def is_moderator(self, student: Student) -> bool:
        return student.role == "MODERATOR"

    def is_content_editor(self, student: Student) -> bool:
        return student.role == "CONTENT_EDITOR"

    def has_plus_access(self, student: Student) -> bool:
        return student.plus_access != "WITHOUT_PLUS_ACCESS"

    def is_plus_holder(self, student: Student) -> bool:
        return student.plus_access in PLUS_HOLDER_ACCESS

    def is_plus_dependent(self, student: Student) -> bool:
        return student.plus_access == "DEPENDENT"

    def is_blocked(self, student: Student) -> bool:
        return student.status in ("BLOCKED", "BLOCKED_BY_OWNER")

    def is_overdue(self, student: Student) -> bool:
        return student.status == "OVERDUE"

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_progress_percentage(self, student: Student) -> float:
        return student.progress.completed_percentage

    def get_completed_lessons(self, student: Student) -> int:
        return student.progress.completed

    def get_total_lessons(self, student: Student) -> int:
        return student.progress.total

    def get_last_access_date(self, student: Student) -> Optional[datetime]:
        return from_timestamp(student.last_access_date)

    def get_first_access_date(self, student: Student) -> Optional[datetime]:
        return from_timestamp(student.first_access_date)

    def get_purchase_date(self, student: Student) -> Optional[datetime]:
        return from_timestamp(student.purchase_date)

    async def get_completed_lessons_details(self, subdomain: str, user_id: str) -> int:
        progress = await self.get_student_progress(StudentProgressOptions(subdomain, user_id))
        return sum(1 for lesson in progress.lessons if lesson.is_completed)

    async def get_pending_lessons_details(self, subdomain: str, user_id: str) -> int:
        progress = await self.get_student_progress(StudentProgressOptions(subdomain, user_id))
        return sum(1 for lesson in progress.lessons if not lesson.is_completed)

    # =========================================================================
    # Aggregations
    # =========================================================================

    async def verify_student_access(self, subdomain: str, email: str) -> StudentAccess:
        """
        Check whether an email belongs to an active member.

        access_type is "paid" for active buyers, "free" for free members
        and "none" otherwise, including when no member matches.
        """
        student = await self.get_student_by_email(subdomain, email)

        if student is None:
            return StudentAccess(has_access=False, student=None, access_type="none", status=None)

        if self.is_paid_student(student):
            access_type = "paid"
        elif self.is_free_student(student):
            access_type = "free"
        else:
            access_type = "none"

        return StudentAccess(
            has_access=self.is_active_student(student),
            student=student,
            access_type=access_type,
            status=student.status,
        )

    async def get_all_active_students(self, subdomain: str) -> List[Student]:
        """Walk every result page and keep the active members."""
        students: List[Student] = []
        page_token: Optional[str] = None

        while True:
            response = await self.get_students(GetStudentsOptions(
                subdomain=subdomain,
                max_results=PAGE_SIZE,
                page_token=page_token,
            ))
            students.extend(s for s in response.items if self.is_active_student(s))

            page_token = response.page_info.next_page_token
            if not page_token:
                return students

    async def get_all_subscribers(self, subdomain: str) -> List[Student]:
        students = await self.get_all_active_students(subdomain)
        return [s for s in students if self.is_subscriber(s)]

    async def get_all_free_students(self, subdomain: str) -> List[Student]:
        students = await self.get_all_active_students(subdomain)
        return [s for s in students if self.is_free_student(s)]
