import itertools
import threading
import uuid


class IdGenerator:
    """Generates identifiers of the form ``<prefix>_<hex>`` for new records."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4().hex[:12]}"


class CounterIdGenerator(IdGenerator):
    """Monotonic ``<prefix>_<n>`` identifiers, predictable for tests and seeding."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def new_id(self, prefix: str) -> str:
        with self._lock:
            value = next(self._counter)
        return f"{prefix}_{value}"
