from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends

from campus_directory.database import get_store
from campus_directory.storage import DirectoryStore
from campus_directory.students.schemas import (
    DeleteStudentResponse,
    PublicStudent,
    StudentCreate,
    to_public_student,
)


router = APIRouter(
    prefix="/api",
    tags=["students"],
)


@router.get(
    "/departments/{dept_id}/sections/{sec_id}/students",
    response_model=List[PublicStudent],
    response_model_exclude_none=True,
)
def list_students(dept_id: str, sec_id: str, store: DirectoryStore = Depends(get_store)):
    """
    Students of a section with restricted fields removed.
    404 for an unknown department or section on the JSON file store; the
    hosted store returns an empty list instead.
    """
    return [to_public_student(s) for s in store.list_students(dept_id, sec_id)]


@router.post(
    "/departments/{dept_id}/sections/{sec_id}/students",
    response_model=PublicStudent,
    status_code=201,
    response_model_exclude_none=True,
)
def create_student(
    dept_id: str,
    sec_id: str,
    student: StudentCreate,
    store: DirectoryStore = Depends(get_store),
):
    """Register a student. ``year``/``semester`` are stored but not echoed back."""
    record = student.model_dump(exclude_none=True)
    record.setdefault("registeredAt", datetime.now(timezone.utc).isoformat())
    stored = store.create_student(dept_id, sec_id, record)
    return to_public_student(stored)


@router.delete("/students/{key}", response_model=DeleteStudentResponse)
def delete_student(key: str, store: DirectoryStore = Depends(get_store)):
    """Delete a student by key. Deleting a missing key still succeeds."""
    store.delete_student(key)
    return {"deleted": key}
