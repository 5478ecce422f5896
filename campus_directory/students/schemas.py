from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Stored with the student but never returned by any endpoint
RESTRICTED_FIELDS = ("year", "semester")


class StudentCreate(BaseModel):
    id: str  # roll number
    name: str
    fatherName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    registeredAt: Optional[str] = None
    year: Optional[str] = None
    semester: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator('id', 'name')
    @classmethod
    def validate_required(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f'{info.field_name} is required')
        return v.strip()


class PublicStudent(BaseModel):
    """The only student shape that leaves the API."""
    id: str
    name: Optional[str] = None
    fatherName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    departmentId: Optional[str] = None
    sectionId: Optional[str] = None
    registeredAt: Optional[str] = None

    model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)


class DeleteStudentResponse(BaseModel):
    deleted: str


def scrub(student: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a shallow copy of ``student`` without the restricted fields."""
    if student is None:
        return None
    return {key: value for key, value in student.items() if key not in RESTRICTED_FIELDS}


def to_public_student(record: Dict[str, Any]) -> Dict[str, Any]:
    """Project a stored student record onto ``PublicStudent``, dropping unset fields."""
    return PublicStudent.model_validate(scrub(record)).model_dump(exclude_none=True)
