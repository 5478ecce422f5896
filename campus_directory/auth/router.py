import logging

from fastapi import APIRouter, Depends

from campus_directory.auth.schemas import LoginRequest, LoginResponse
from campus_directory.auth.service import LoginService
from campus_directory.database import get_store
from campus_directory.errors import DirectoryError, envelope_error
from campus_directory.storage import DirectoryStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["authentication"]
)


@router.post("/login", response_model=LoginResponse)
def login_student(request: LoginRequest, store: DirectoryStore = Depends(get_store)):
    """
    Verify a student-app login against the selected department and section.
    Every outcome uses the ``{status, message, data}`` envelope; ``data`` is
    null on failure.
    """
    try:
        data = LoginService(store).login(request)
    except DirectoryError as e:
        if e.status_code >= 500:
            logger.error(f"Login failed with {e.error}: {e.message}")
        return envelope_error(e.status_code, e.message)

    return {
        "status": "success",
        "message": "Login successful",
        "data": data,
    }
