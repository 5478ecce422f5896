import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from campus_directory.errors import InternalError, UpstreamUnavailable, ValidationError
from campus_directory.storage.base import (
    DirectoryStore,
    Record,
    department_summary,
    section_summary,
)

logger = logging.getLogger(__name__)

DEPARTMENTS = "departments"
SECTIONS = "sections"
STUDENTS = "students"


class HostedDirectoryStore(DirectoryStore):
    """
    Flat-collection store backed by a hosted JSON document database exposed
    over REST (``{base}/{collection}/{key}.json``).

    Departments, sections and students are three keyed collections joined at
    query time on ``departmentId``/``sectionId``. Parent existence is not
    checked on create. Every write is a PUT addressed by the entity's own id,
    so a retried write lands on the same key instead of creating a duplicate.
    """

    name = "hosted"

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff: float = 0.5,
        client: Optional[httpx.Client] = None,
    ):
        if not base_url:
            raise ValueError("base_url is required for the hosted store")
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token or None
        self.max_retries = max(1, max_retries)
        self.backoff = backoff
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout, connect=min(timeout, 5.0)))
        logger.info(f"HostedDirectoryStore initialized with base_url: {self.base_url}")

    def close(self) -> None:
        self._client.close()

    # -- transport -----------------------------------------------------------

    def _url(self, collection: str, key: Optional[str] = None) -> str:
        if key is None:
            return f"{self.base_url}/{collection}.json"
        return f"{self.base_url}/{collection}/{key}.json"

    def _request(self, method: str, url: str, json: Any = None) -> Any:
        """
        Send a request, retrying timeouts, transport errors and 5xx responses
        with exponential backoff. Only used for idempotent requests.
        """
        params = {"auth": self.auth_token} if self.auth_token else None
        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                response = self._client.request(method, url, json=json, params=params)
            except httpx.TimeoutException as e:
                last_error = e
                logger.warning(f"Timeout on {method} {url} (attempt {attempt + 1}/{self.max_retries})")
            except httpx.TransportError as e:
                last_error = e
                logger.warning(f"{type(e).__name__} on {method} {url} (attempt {attempt + 1}/{self.max_retries}): {e}")
            else:
                if response.status_code >= 500:
                    last_error = httpx.HTTPStatusError(
                        f"HTTP {response.status_code}", request=response.request, response=response
                    )
                    logger.warning(f"HTTP {response.status_code} on {method} {url} (attempt {attempt + 1}/{self.max_retries})")
                elif response.status_code >= 400:
                    logger.error(f"HTTP {response.status_code} on {method} {url}: {response.text}")
                    raise InternalError(f"Hosted store rejected the request (HTTP {response.status_code})")
                else:
                    if not response.content:
                        return None
                    try:
                        return response.json()
                    except ValueError as e:
                        logger.error(f"Non-JSON response from {method} {url}: {response.text[:200]}")
                        raise InternalError("Hosted store returned malformed data") from e

            if attempt < self.max_retries - 1:
                wait_time = self.backoff * (2 ** attempt)
                if wait_time > 0:
                    time.sleep(wait_time)

        logger.error(f"Giving up on {method} {url} after {self.max_retries} attempts: {last_error}")
        raise UpstreamUnavailable("Directory store is unavailable, please retry")

    def _get_collection(self, collection: str) -> List[Record]:
        data = self._request("GET", self._url(collection))
        if not data:
            return []
        if isinstance(data, list):
            # Numeric keys come back as a sparse array
            items = {str(i): value for i, value in enumerate(data) if value is not None}
        elif isinstance(data, dict):
            items = data
        else:
            raise InternalError(f"Unexpected {collection} payload from hosted store")
        return [self._with_id(key, value) for key, value in items.items() if isinstance(value, dict)]

    def _get_item(self, collection: str, key: str) -> Optional[Record]:
        data = self._request("GET", self._url(collection, key))
        if not isinstance(data, dict):
            return None
        return self._with_id(key, data)

    def _put_item(self, collection: str, key: str, record: Record) -> None:
        self._request("PUT", self._url(collection, key), json=record)

    @staticmethod
    def _with_id(key: str, value: Dict[str, Any]) -> Record:
        return {**value, "id": value.get("id") or key}

    # -- reads ---------------------------------------------------------------

    def list_departments(self) -> List[Record]:
        return [department_summary(d) for d in self._get_collection(DEPARTMENTS)]

    def get_department(self, dept_id: str) -> Optional[Record]:
        dept = self._get_item(DEPARTMENTS, dept_id)
        return department_summary(dept) if dept else None

    def list_sections(self, dept_id: str) -> List[Record]:
        return [
            section_summary(s)
            for s in self._get_collection(SECTIONS)
            if s.get("departmentId") == dept_id
        ]

    def get_section(self, dept_id: str, sec_id: str) -> Optional[Record]:
        section = self._get_item(SECTIONS, sec_id)
        if section is None or section.get("departmentId") != dept_id:
            return None
        return section_summary(section)

    def list_students(self, dept_id: str, sec_id: str) -> List[Record]:
        return [
            s for s in self._get_collection(STUDENTS)
            if s.get("departmentId") == dept_id and s.get("sectionId") == sec_id
        ]

    def dump_tree(self) -> List[Record]:
        sections = self._get_collection(SECTIONS)
        students = self._get_collection(STUDENTS)
        tree = []
        for dept in self._get_collection(DEPARTMENTS):
            dept_sections = []
            for section in sections:
                if section.get("departmentId") != dept["id"]:
                    continue
                dept_sections.append({
                    **section_summary(section),
                    "students": [
                        s for s in students
                        if s.get("departmentId") == dept["id"] and s.get("sectionId") == section["id"]
                    ],
                })
            tree.append({**department_summary(dept), "sections": dept_sections})
        return tree

    def ping(self) -> bool:
        try:
            self._request("GET", self._url(DEPARTMENTS))
        except (UpstreamUnavailable, InternalError):
            return False
        return True

    # -- writes --------------------------------------------------------------

    def create_department(self, record: Record) -> Record:
        if self._get_item(DEPARTMENTS, record["id"]) is not None:
            raise ValidationError(f"Department {record['id']} already exists")
        stored = department_summary(record)
        self._put_item(DEPARTMENTS, record["id"], stored)
        logger.info(f"Created department {record['id']}")
        return stored

    def create_section(self, dept_id: str, record: Record) -> Record:
        if self._get_item(SECTIONS, record["id"]) is not None:
            raise ValidationError(f"Section {record['id']} already exists")
        stored = section_summary({**record, "departmentId": dept_id})
        self._put_item(SECTIONS, record["id"], stored)
        logger.info(f"Created section {record['id']} in department {dept_id}")
        return stored

    def create_student(self, dept_id: str, sec_id: str, record: Record) -> Record:
        if self._get_item(STUDENTS, record["id"]) is not None:
            raise ValidationError(f"Student {record['id']} already exists")
        stored = {**record, "departmentId": dept_id, "sectionId": sec_id}
        self._put_item(STUDENTS, record["id"], stored)
        logger.info(f"Created student {record['id']} in {dept_id}/{sec_id}")
        return stored

    def delete_student(self, key: str) -> None:
        self._request("DELETE", self._url(STUDENTS, key))
        logger.info(f"Deleted student {key}")
