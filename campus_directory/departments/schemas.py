from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from campus_directory.sections.schemas import SectionSummary
from campus_directory.students.schemas import PublicStudent


class DepartmentCreate(BaseModel):
    id: Optional[str] = None
    name: str
    code: str

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator('name', 'code')
    @classmethod
    def validate_required(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f'{info.field_name} is required')
        return v.strip()

    @field_validator('id')
    @classmethod
    def validate_id(cls, v):
        if v is None:
            return None
        return v.strip() or None


class DepartmentResponse(BaseModel):
    id: str
    name: Optional[str] = None
    code: Optional[str] = None


class SectionWithStudents(BaseModel):
    id: str
    name: Optional[str] = None
    departmentId: Optional[str] = None
    students: List[PublicStudent] = []


class DepartmentTree(BaseModel):
    id: str
    name: Optional[str] = None
    code: Optional[str] = None
    sections: List[SectionWithStudents] = []


class DropdownDepartment(BaseModel):
    id: str
    name: Optional[str] = None
    sections: List[SectionSummary] = []
