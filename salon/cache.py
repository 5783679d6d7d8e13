# salon/cache.py
"""
In-memory mirror of the document store collections.

Loaded once from the store, then kept fresh by the change notifications
the store emits (`LocalCache.apply` is registered as a store listener).
Readers get an immutable CacheSnapshot; it may be slightly stale.
"""

import logging
import threading
from typing import Any, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .config import (
    COLLECTIONS,
    CUSTOMERS_COLLECTION,
    EMPLOYEES_COLLECTION,
    RESERVATIONS_COLLECTION,
    SERVICES_COLLECTION,
)
from .schemas import Appointment, CacheSnapshot, Customer, Employee, Service

logger = logging.getLogger(__name__)

MODELS: dict[str, type[BaseModel]] = {
    RESERVATIONS_COLLECTION: Appointment,
    EMPLOYEES_COLLECTION: Employee,
    SERVICES_COLLECTION: Service,
    CUSTOMERS_COLLECTION: Customer,
}


class LocalCache:
    def __init__(self):
        self._lock = threading.Lock()
        self._records: dict[str, dict[str, BaseModel]] = {name: {} for name in COLLECTIONS}

    def load(self, store) -> None:
        """Replace the whole content with what the store holds now."""
        fresh = {}
        for collection in COLLECTIONS:
            fresh[collection] = {}
            for record_id, record in store.read_all(collection).items():
                model = self._parse(collection, record_id, record)
                if model is not None:
                    fresh[collection][record_id] = model
        with self._lock:
            self._records = fresh
        logger.info(
            "Local cache loaded: %s",
            ", ".join(f"{len(fresh[c])} {c}" for c in COLLECTIONS),
        )

    def apply(self, collection: str, record_id: str, record: Optional[dict[str, Any]]) -> None:
        if collection not in self._records:
            return
        with self._lock:
            if record is None:
                self._records[collection].pop(record_id, None)
                return
            model = self._parse(collection, record_id, record)
            if model is not None:
                self._records[collection][record_id] = model

    def snapshot(self) -> CacheSnapshot:
        with self._lock:
            return CacheSnapshot(
                employees=tuple(self._records[EMPLOYEES_COLLECTION].values()),
                services=tuple(self._records[SERVICES_COLLECTION].values()),
                appointments=tuple(self._records[RESERVATIONS_COLLECTION].values()),
                customers=tuple(self._records[CUSTOMERS_COLLECTION].values()),
            )

    def clear(self) -> None:
        with self._lock:
            self._records = {name: {} for name in COLLECTIONS}

    @staticmethod
    def _parse(collection: str, record_id: str, record: dict[str, Any]) -> Optional[BaseModel]:
        try:
            return MODELS[collection].model_validate({**record, "id": record_id})
        except PydanticValidationError:
            logger.warning("Ignoring malformed %s record %s", collection, record_id, exc_info=True)
            return None
