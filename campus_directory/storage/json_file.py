import copy
import json
import logging
import os
import tempfile
import threading
from typing import List, Optional

from campus_directory.errors import InternalError, NotFound, ValidationError
from campus_directory.storage.base import (
    DirectoryStore,
    Record,
    department_summary,
    section_summary,
)

logger = logging.getLogger(__name__)


class JsonFileDirectoryStore(DirectoryStore):
    """
    Nested-document store: the whole tree lives in one JSON array of
    departments, each embedding ``sections`` which embed ``students``.

    The file is re-read on every call and rewritten wholesale on every
    mutation. Mutations hold ``_write_lock`` for the full read-modify-write so
    concurrent requests in one process cannot lose each other's updates.
    Separate processes sharing the file are not coordinated.
    """

    name = "json"

    def __init__(self, path: str):
        self.path = path
        self._write_lock = threading.Lock()

    # -- file access ---------------------------------------------------------

    def _read(self) -> List[Record]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            logger.error(f"Could not read data file {self.path}: {e}")
            raise InternalError("Failed to read directory data") from e
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Malformed JSON in {self.path}: {e}")
            raise InternalError("Stored directory data is malformed") from e
        if not isinstance(data, list):
            logger.error(f"Expected a JSON array in {self.path}, found {type(data).__name__}")
            raise InternalError("Stored directory data is malformed")
        return data

    def _write(self, data: List[Record]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"Could not write data file {self.path}: {e}")
            raise InternalError("Failed to write directory data") from e

    @staticmethod
    def _find_department(data: List[Record], dept_id: str) -> Optional[Record]:
        return next((d for d in data if d.get("id") == dept_id), None)

    @staticmethod
    def _find_section(dept: Record, sec_id: str) -> Optional[Record]:
        return next((s for s in dept.get("sections") or [] if s.get("id") == sec_id), None)

    @staticmethod
    def _find_student(data: List[Record], key: str) -> Optional[Record]:
        for dept in data:
            for section in dept.get("sections") or []:
                for student in section.get("students") or []:
                    if student.get("id") == key:
                        return student
        return None

    def _require_department(self, data: List[Record], dept_id: str) -> Record:
        dept = self._find_department(data, dept_id)
        if dept is None:
            raise NotFound("Department not found")
        return dept

    def _require_section(self, dept: Record, sec_id: str) -> Record:
        section = self._find_section(dept, sec_id)
        if section is None:
            raise NotFound("Section not found")
        return section

    # -- reads ---------------------------------------------------------------

    def list_departments(self) -> List[Record]:
        return [department_summary(d) for d in self._read()]

    def get_department(self, dept_id: str) -> Optional[Record]:
        dept = self._find_department(self._read(), dept_id)
        return department_summary(dept) if dept else None

    def list_sections(self, dept_id: str) -> List[Record]:
        dept = self._require_department(self._read(), dept_id)
        return [section_summary(s, dept_id) for s in dept.get("sections") or []]

    def get_section(self, dept_id: str, sec_id: str) -> Optional[Record]:
        dept = self._find_department(self._read(), dept_id)
        if dept is None:
            return None
        section = self._find_section(dept, sec_id)
        return section_summary(section, dept_id) if section else None

    def list_students(self, dept_id: str, sec_id: str) -> List[Record]:
        dept = self._require_department(self._read(), dept_id)
        section = self._require_section(dept, sec_id)
        return [dict(s) for s in section.get("students") or []]

    def dump_tree(self) -> List[Record]:
        return copy.deepcopy(self._read())

    def ping(self) -> bool:
        try:
            self._read()
        except InternalError:
            return False
        return True

    # -- writes --------------------------------------------------------------

    def create_department(self, record: Record) -> Record:
        with self._write_lock:
            data = self._read()
            if self._find_department(data, record["id"]) is not None:
                raise ValidationError(f"Department {record['id']} already exists")
            stored = {**record, "sections": record.get("sections") or []}
            data.append(stored)
            self._write(data)
        logger.info(f"Created department {record['id']}")
        return department_summary(stored)

    def create_section(self, dept_id: str, record: Record) -> Record:
        with self._write_lock:
            data = self._read()
            dept = self._require_department(data, dept_id)
            if self._find_section(dept, record["id"]) is not None:
                raise ValidationError(f"Section {record['id']} already exists")
            stored = {**record, "departmentId": dept_id, "students": record.get("students") or []}
            if not dept.get("sections"):
                dept["sections"] = []
            dept["sections"].append(stored)
            self._write(data)
        logger.info(f"Created section {record['id']} in department {dept_id}")
        return section_summary(stored, dept_id)

    def create_student(self, dept_id: str, sec_id: str, record: Record) -> Record:
        with self._write_lock:
            data = self._read()
            dept = self._require_department(data, dept_id)
            section = self._require_section(dept, sec_id)
            # Roll numbers are storage keys across the whole directory
            if self._find_student(data, record["id"]) is not None:
                raise ValidationError(f"Student {record['id']} already exists")
            stored = {**record, "departmentId": dept_id, "sectionId": sec_id}
            if not section.get("students"):
                section["students"] = []
            section["students"].append(stored)
            self._write(data)
        logger.info(f"Created student {record['id']} in {dept_id}/{sec_id}")
        return dict(stored)

    def delete_student(self, key: str) -> None:
        with self._write_lock:
            data = self._read()
            removed = 0
            for dept in data:
                for section in dept.get("sections") or []:
                    students = section.get("students") or []
                    kept = [s for s in students if s.get("id") != key]
                    removed += len(students) - len(kept)
                    section["students"] = kept
            if removed:
                self._write(data)
        logger.info(f"Deleted student {key} ({removed} record(s) removed)")
