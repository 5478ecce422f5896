import logging
import threading
from typing import Optional

from campus_directory.config.settings import Settings, settings
from campus_directory.ids import IdGenerator
from campus_directory.storage import DirectoryStore, HostedDirectoryStore, JsonFileDirectoryStore

logger = logging.getLogger(__name__)

_store: Optional[DirectoryStore] = None
_store_lock = threading.Lock()
_id_generator = IdGenerator()


def build_store(config: Settings) -> DirectoryStore:
    """Create the store selected by STORAGE_BACKEND."""
    backend = config.STORAGE_BACKEND.lower()
    if backend == "json":
        logger.info(f"Using JSON file storage at {config.DATA_FILE}")
        return JsonFileDirectoryStore(config.DATA_FILE)
    if backend == "hosted":
        logger.info(f"Using hosted document storage at {config.HOSTED_DB_URL}")
        return HostedDirectoryStore(
            base_url=config.HOSTED_DB_URL,
            auth_token=config.HOSTED_DB_AUTH,
            timeout=config.HOSTED_DB_TIMEOUT,
            max_retries=config.HOSTED_DB_MAX_RETRIES,
            backoff=config.HOSTED_DB_BACKOFF,
        )
    raise ValueError(f"Unknown STORAGE_BACKEND '{config.STORAGE_BACKEND}' (expected 'json' or 'hosted')")


def get_store() -> DirectoryStore:
    """FastAPI dependency returning the process-wide directory store."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = build_store(settings)
    return _store


def get_id_generator() -> IdGenerator:
    """FastAPI dependency returning the identifier generator for new records."""
    return _id_generator
