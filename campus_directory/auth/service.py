"""
Student login verification.

A login succeeds when exactly one stored student of the selected department
and section carries the submitted identity. Matching rules:

* ``name``, ``fatherName`` and ``email`` compare after trimming and case-folding
* ``phone`` compares on its digits only, so ``(555) 123-4567`` == ``5551234567``
* ``rollNo`` is optional (blank counts as absent); when supplied it must
  equal the student's ``id``

Failures never say which field was wrong.
"""
import base64
import logging
import re
from typing import Any, Dict, Iterable, Optional

from campus_directory.auth.schemas import LoginData, LoginRequest
from campus_directory.errors import InvalidCredentials, ValidationError
from campus_directory.storage import DirectoryStore
from campus_directory.students.schemas import to_public_student

logger = logging.getLogger(__name__)

REQUIRED_LOGIN_FIELDS = ("name", "fatherName", "email", "phone", "deptId", "secId")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials. Please make sure all details match your registration."


def normalize_text(value: Any) -> str:
    return str(value or "").strip().casefold()


def normalize_phone(value: Any) -> str:
    return re.sub(r"\D", "", str(value or ""))


def credentials_match(student: Dict[str, Any], credentials: LoginRequest) -> bool:
    """True when ``student`` carries every identity field of ``credentials``."""
    roll_no = (credentials.rollNo or "").strip()
    if roll_no and str(student.get("id", "")).strip() != roll_no:
        return False
    for field in ("name", "fatherName", "email"):
        if normalize_text(student.get(field)) != normalize_text(getattr(credentials, field)):
            return False
    phone = normalize_phone(student.get("phone"))
    return bool(phone) and phone == normalize_phone(credentials.phone)


def find_student(candidates: Iterable[Dict[str, Any]], credentials: LoginRequest) -> Optional[Dict[str, Any]]:
    return next((s for s in candidates if credentials_match(s, credentials)), None)


def display_token(roll_no: str) -> str:
    """
    Opaque handle the student app keeps after login. It is only the encoded
    roll number: no signature, no expiry, and it must not be trusted to
    authenticate anything.
    """
    return "token_" + base64.urlsafe_b64encode(roll_no.encode("utf-8")).decode("ascii")


def check_required(credentials: LoginRequest) -> None:
    for field in REQUIRED_LOGIN_FIELDS:
        value = getattr(credentials, field)
        if value is None or not str(value).strip():
            raise ValidationError(f"{field} is required")


class LoginService:
    """Verifies student-app logins against a directory store."""

    def __init__(self, store: DirectoryStore):
        self.store = store

    def login(self, credentials: LoginRequest) -> LoginData:
        """
        Args:
            credentials (LoginRequest): The submitted login form

        Returns:
            LoginData: Display details of the matched student

        Raises:
            ValidationError: A required field is missing
            InvalidCredentials: No student matched
        """
        check_required(credentials)
        dept_id = credentials.deptId.strip()
        sec_id = credentials.secId.strip()

        department = self.store.get_department(dept_id)
        section = self.store.get_section(dept_id, sec_id) if department else None
        if department is None or section is None:
            logger.info(f"Login rejected: unknown department/section {dept_id}/{sec_id}")
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        student = find_student(self.store.list_students(dept_id, sec_id), credentials)
        if student is None:
            logger.info(f"Login rejected: no matching student in {dept_id}/{sec_id}")
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        public = to_public_student(student)
        logger.info(f"Login succeeded for student {public['id']} in {dept_id}/{sec_id}")
        return LoginData(
            name=public.get("name"),
            email=public.get("email"),
            department=department.get("name"),
            section=section.get("name"),
            rollNo=public["id"],
            token=display_token(public["id"]),
        )
