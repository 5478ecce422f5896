from typing import List

from fastapi import APIRouter, Depends

from campus_directory.database import get_id_generator, get_store
from campus_directory.ids import IdGenerator
from campus_directory.sections.schemas import SectionCreate, SectionResponse
from campus_directory.storage import DirectoryStore

router = APIRouter(
    prefix="/api/departments/{dept_id}/sections",
    tags=["sections"],
    responses={404: {"description": "Department not found"}},
)


@router.get("", response_model=List[SectionResponse], response_model_exclude_none=True)
def list_sections(dept_id: str, store: DirectoryStore = Depends(get_store)):
    """Sections of a department. 404 for an unknown department on the JSON file store."""
    return store.list_sections(dept_id)


@router.post("", response_model=SectionResponse, status_code=201, response_model_exclude_none=True)
def create_section(
    dept_id: str,
    section: SectionCreate,
    store: DirectoryStore = Depends(get_store),
    ids: IdGenerator = Depends(get_id_generator),
):
    record = section.model_dump()
    record["id"] = section.id or ids.new_id("sec")
    return store.create_section(dept_id, record)
