from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class DirectoryStore(ABC):
    """
    Persistence contract for the department -> section -> student hierarchy.

    Records are plain dicts using the wire field names (``departmentId``,
    ``fatherName`` ...). Every list operation returns an empty list when the
    backing store is empty or absent.
    """

    name: str = "abstract"

    @abstractmethod
    def list_departments(self) -> List[Record]:
        """All departments as ``{id, name, code}``."""

    @abstractmethod
    def get_department(self, dept_id: str) -> Optional[Record]:
        """A single department, or None."""

    @abstractmethod
    def list_sections(self, dept_id: str) -> List[Record]:
        """Sections belonging to ``dept_id``."""

    @abstractmethod
    def get_section(self, dept_id: str, sec_id: str) -> Optional[Record]:
        """A section of ``dept_id``, or None if absent or owned by another department."""

    @abstractmethod
    def list_students(self, dept_id: str, sec_id: str) -> List[Record]:
        """Raw (unscrubbed) student records of a section."""

    @abstractmethod
    def create_department(self, record: Record) -> Record:
        ...

    @abstractmethod
    def create_section(self, dept_id: str, record: Record) -> Record:
        ...

    @abstractmethod
    def create_student(self, dept_id: str, sec_id: str, record: Record) -> Record:
        ...

    @abstractmethod
    def delete_student(self, key: str) -> None:
        """Remove a student by key. Deleting an absent key is a no-op."""

    @abstractmethod
    def dump_tree(self) -> List[Record]:
        """Every department with embedded ``sections`` and their ``students``."""

    @abstractmethod
    def ping(self) -> bool:
        """True when the backing store is reachable and readable."""


def department_summary(dept: Record) -> Record:
    return {"id": dept.get("id"), "name": dept.get("name"), "code": dept.get("code")}


def section_summary(section: Record, dept_id: Optional[str] = None) -> Record:
    return {
        "id": section.get("id"),
        "name": section.get("name"),
        "departmentId": section.get("departmentId") or dept_id,
    }
