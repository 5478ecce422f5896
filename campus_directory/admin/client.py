import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class DirectoryClientError(Exception):
    """Raised when the directory API cannot be reached or rejects a request."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class DirectoryClient:
    """
    Thin HTTP client for the directory API, used by the admin console and by
    student-facing tools.
    """

    def __init__(self, base_url: str, timeout: float = 15.0, client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=httpx.Timeout(timeout, connect=5.0))
        logger.info(f"DirectoryClient initialized with base_url: {self.base_url}")

    def close(self) -> None:
        self._client.close()

    def _call(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {method} {path}: {e}")
            raise DirectoryClientError(None, "The directory service timed out") from e
        except httpx.RequestError as e:
            logger.error(f"Request error calling {method} {path}: {type(e).__name__}: {e}")
            raise DirectoryClientError(None, f"Could not reach the directory service at {self.base_url}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") or body.get("error") or response.text or f"HTTP {response.status_code}"
            logger.warning(f"HTTP {response.status_code} from {method} {path}: {message}")
            raise DirectoryClientError(response.status_code, message)
        return response.json()

    # Departments
    def list_departments(self) -> List[Dict[str, Any]]:
        return self._call("GET", "/api/departments")

    def add_department(self, name: str, code: str, dept_id: Optional[str] = None) -> Dict[str, Any]:
        payload = {"name": name, "code": code}
        if dept_id:
            payload["id"] = dept_id
        return self._call("POST", "/api/departments", json=payload)

    # Sections
    def list_sections(self, dept_id: str) -> List[Dict[str, Any]]:
        return self._call("GET", f"/api/departments/{dept_id}/sections")

    def add_section(self, dept_id: str, name: str, section_id: Optional[str] = None) -> Dict[str, Any]:
        payload = {"name": name}
        if section_id:
            payload["id"] = section_id
        return self._call("POST", f"/api/departments/{dept_id}/sections", json=payload)

    # Students
    def list_students(self, dept_id: str, sec_id: str) -> List[Dict[str, Any]]:
        return self._call("GET", f"/api/departments/{dept_id}/sections/{sec_id}/students")

    def add_student(self, dept_id: str, sec_id: str, student: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("POST", f"/api/departments/{dept_id}/sections/{sec_id}/students", json=student)

    def delete_student(self, key: str) -> Dict[str, Any]:
        return self._call("DELETE", f"/api/students/{key}")

    # Whole directory
    def full_directory(self) -> List[Dict[str, Any]]:
        return self._call("GET", "/api/data")

    def dropdown_data(self) -> List[Dict[str, Any]]:
        return self._call("GET", "/api/dropdown-data")

    def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit a student-app login. Returns the ``{status, message, data}``
        envelope for both success and rejected credentials.
        """
        try:
            response = self._client.post("/api/login", json=credentials)
        except httpx.RequestError as e:
            logger.error(f"Request error during login: {type(e).__name__}: {e}")
            raise DirectoryClientError(None, f"Could not reach the directory service at {self.base_url}") from e
        try:
            return response.json()
        except ValueError as e:
            raise DirectoryClientError(response.status_code, "Unexpected login response") from e
