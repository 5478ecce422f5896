from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class SectionCreate(BaseModel):
    id: Optional[str] = None
    name: str

    model_config = ConfigDict(coerce_numbers_to_str=True)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('name is required')
        return v.strip()

    @field_validator('id')
    @classmethod
    def validate_id(cls, v):
        if v is None:
            return None
        return v.strip() or None


class SectionResponse(BaseModel):
    id: str
    name: Optional[str] = None
    departmentId: Optional[str] = None


class SectionSummary(BaseModel):
    id: str
    name: Optional[str] = None
