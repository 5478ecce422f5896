"""
Form handlers behind the admin console. Each ``add_*`` method validates the
form, calls the directory API and returns the status line shown to the admin.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from campus_directory.admin.client import DirectoryClient, DirectoryClientError

logger = logging.getLogger(__name__)

STUDENT_TABLE_HEADERS = ["Roll No", "Name", "Father's Name", "Email", "Phone", "Registered At"]


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


class AdminForms:

    def __init__(self, client: DirectoryClient):
        self.client = client

    # --- Departments ---

    def load_departments(self) -> List[Dict[str, Any]]:
        try:
            return self.client.list_departments()
        except DirectoryClientError as e:
            logger.error(f"Could not load departments: {e.message}")
            return []

    def department_rows(self) -> List[List[str]]:
        return [[d.get("id", ""), d.get("name", ""), d.get("code", "")] for d in self.load_departments()]

    def department_choices(self) -> List[Tuple[str, str]]:
        return [(f"{d.get('name')} ({d.get('code')})", d.get("id")) for d in self.load_departments()]

    def add_department(self, name: str, code: str) -> str:
        name, code = _clean(name), _clean(code)
        if not name or not code:
            return "Please enter a department name and code"
        try:
            self.client.add_department(name=name, code=code)
        except DirectoryClientError as e:
            logger.error(f"Error adding department: {e.message}")
            return "Error adding department"
        return "Department Added!"

    # --- Sections ---

    def load_sections(self) -> List[Dict[str, Any]]:
        """All sections, each tagged with its ``departmentId``."""
        try:
            directory = self.client.dropdown_data()
        except DirectoryClientError as e:
            logger.error(f"Could not load sections: {e.message}")
            return []
        return [
            {"id": sec.get("id"), "name": sec.get("name"), "departmentId": dept.get("id")}
            for dept in directory
            for sec in dept.get("sections") or []
        ]

    @staticmethod
    def get_dept_name(dept_id: str, departments: List[Dict[str, Any]]) -> str:
        dept = next((d for d in departments if d.get("id") == dept_id), None)
        return dept.get("name") if dept else "Unknown"

    def section_rows(self) -> List[List[str]]:
        departments = self.load_departments()
        return [
            [s.get("id", ""), s.get("name", ""), self.get_dept_name(s.get("departmentId"), departments)]
            for s in self.load_sections()
        ]

    def section_choices(self, dept_id: Optional[str]) -> List[Tuple[str, str]]:
        if not dept_id:
            return []
        try:
            sections = self.client.list_sections(dept_id)
        except DirectoryClientError as e:
            logger.error(f"Could not load sections for {dept_id}: {e.message}")
            return []
        return [(s.get("name"), s.get("id")) for s in sections]

    def add_section(self, name: str, dept_id: str) -> str:
        name, dept_id = _clean(name), _clean(dept_id)
        if not name or not dept_id:
            return "Please fill all fields"
        try:
            self.client.add_section(dept_id=dept_id, name=name)
        except DirectoryClientError as e:
            logger.error(f"Error adding section: {e.message}")
            return "Error adding section"
        return "Section Added!"

    # --- Students ---

    def add_student(
        self,
        roll_no: str,
        name: str,
        father_name: str,
        email: str,
        phone: str,
        dept_id: str,
        sec_id: str,
        year: str = "",
        semester: str = "",
    ) -> str:
        roll_no, name, dept_id, sec_id = _clean(roll_no), _clean(name), _clean(dept_id), _clean(sec_id)
        if not roll_no or not name or not dept_id or not sec_id:
            return "Please fill in required fields (Roll No, Name, Dept, Section)"

        student = {
            "id": roll_no,
            "name": name,
            "fatherName": _clean(father_name),
            "email": _clean(email),
            "phone": _clean(phone),
            "year": _clean(year),
            "semester": _clean(semester),
        }
        # Optional fields are sent only when filled in
        student = {k: v for k, v in student.items() if v}
        try:
            self.client.add_student(dept_id, sec_id, student)
        except DirectoryClientError as e:
            logger.error(f"Error adding student: {e.message}")
            return "Error adding student"
        return "Student Added Successfully!"

    def student_rows(self, dept_id: Optional[str], sec_id: Optional[str]) -> List[List[str]]:
        if not dept_id or not sec_id:
            return []
        try:
            students = self.client.list_students(dept_id, sec_id)
        except DirectoryClientError as e:
            logger.error(f"Could not load students for {dept_id}/{sec_id}: {e.message}")
            return []
        return [
            [
                s.get("id", ""),
                s.get("name", ""),
                s.get("fatherName", ""),
                s.get("email", ""),
                s.get("phone", ""),
                s.get("registeredAt", ""),
            ]
            for s in students
        ]

    def delete_student(self, roll_no: str) -> str:
        roll_no = _clean(roll_no)
        if not roll_no:
            return "Please enter a roll number"
        try:
            self.client.delete_student(roll_no)
        except DirectoryClientError as e:
            logger.error(f"Error deleting student {roll_no}: {e.message}")
            return "Error deleting student"
        return "Student Deleted"
