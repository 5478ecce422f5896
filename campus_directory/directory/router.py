from typing import List

from fastapi import APIRouter, Depends

from campus_directory.database import get_store
from campus_directory.departments.schemas import DepartmentTree, DropdownDepartment
from campus_directory.storage import DirectoryStore
from campus_directory.students.schemas import to_public_student

router = APIRouter(
    prefix="/api",
    tags=["directory"],
)


@router.get("/data", response_model=List[DepartmentTree], response_model_exclude_none=True)
def get_full_directory(store: DirectoryStore = Depends(get_store)):
    """The whole department -> section -> student hierarchy, students scrubbed."""
    tree = []
    for dept in store.dump_tree():
        tree.append({
            "id": dept.get("id"),
            "name": dept.get("name"),
            "code": dept.get("code"),
            "sections": [
                {
                    "id": sec.get("id"),
                    "name": sec.get("name"),
                    "departmentId": sec.get("departmentId") or dept.get("id"),
                    "students": [to_public_student(s) for s in sec.get("students") or []],
                }
                for sec in dept.get("sections") or []
            ],
        })
    return tree


@router.get("/dropdown-data", response_model=List[DropdownDepartment], response_model_exclude_none=True)
def get_dropdown_data(store: DirectoryStore = Depends(get_store)):
    """
    Departments with their sections, for the student app's selection lists.
    No student data is included.
    """
    return [
        {
            "id": dept.get("id"),
            "name": dept.get("name"),
            "sections": [
                {"id": sec.get("id"), "name": sec.get("name")}
                for sec in dept.get("sections") or []
            ],
        }
        for dept in store.dump_tree()
    ]
