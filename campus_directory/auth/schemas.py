from pydantic import BaseModel, ConfigDict
from typing import Optional


class LoginRequest(BaseModel):
    """
    Student-app login details. Fields are optional at the schema level so the
    service can report the first missing one in the login envelope.
    """
    name: Optional[str] = None
    rollNo: Optional[str] = None
    fatherName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    deptId: Optional[str] = None
    secId: Optional[str] = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class LoginData(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    section: Optional[str] = None
    rollNo: str
    # Opaque display handle, not a verifiable credential
    token: str


class LoginResponse(BaseModel):
    status: str
    message: str
    data: Optional[LoginData] = None
