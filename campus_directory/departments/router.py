from typing import List

from fastapi import APIRouter, Depends

from campus_directory.database import get_id_generator, get_store
from campus_directory.departments.schemas import DepartmentCreate, DepartmentResponse
from campus_directory.ids import IdGenerator
from campus_directory.storage import DirectoryStore


router = APIRouter(
    prefix="/api/departments",
    tags=["departments"],
)


@router.get("", response_model=List[DepartmentResponse], response_model_exclude_none=True)
def list_departments(store: DirectoryStore = Depends(get_store)):
    """List every department as ``{id, name, code}``."""
    return store.list_departments()


@router.post("", response_model=DepartmentResponse, status_code=201, response_model_exclude_none=True)
def create_department(
    department: DepartmentCreate,
    store: DirectoryStore = Depends(get_store),
    ids: IdGenerator = Depends(get_id_generator),
):
    """
    Create a department. ``id`` is optional; a ``dept_<hex>`` identifier is
    generated when it is omitted.
    """
    record = department.model_dump()
    record["id"] = department.id or ids.new_id("dept")
    return store.create_department(record)
