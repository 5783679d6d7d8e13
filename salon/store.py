# salon/store.py

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Protocol
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .errors import StoreUnavailableError
from .models import Document

logger = logging.getLogger(__name__)

# (collection, id, record or None when deleted)
ChangeListener = Callable[[str, str, Optional[dict[str, Any]]], None]


class DocumentStore(Protocol):
    def create(self, collection: str, record: dict[str, Any]) -> str: ...

    def set(self, collection: str, record_id: str, record: dict[str, Any]) -> None: ...

    def delete(self, collection: str, record_id: str) -> None: ...


class SQLDocumentStore:
    """
    Document store over the `documents` table.

    Listeners are notified after every committed write, which is how the
    local cache is kept in sync.
    """

    def __init__(self, session: Session, listeners: Optional[list[ChangeListener]] = None):
        self.session = session
        self.listeners = list(listeners or [])

    def subscribe(self, listener: ChangeListener) -> None:
        self.listeners.append(listener)

    def create(self, collection: str, record: dict[str, Any]) -> str:
        record_id = uuid4().hex
        self._write(collection, record_id, record)
        return record_id

    def set(self, collection: str, record_id: str, record: dict[str, Any]) -> None:
        self._write(collection, record_id, record)

    def delete(self, collection: str, record_id: str) -> None:
        try:
            doc = self.session.get(Document, (collection, record_id))
            if doc is not None:
                self.session.delete(doc)
                self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Delete of %s/%s failed", collection, record_id)
            raise StoreUnavailableError()
        self._notify(collection, record_id, None)

    def read_all(self, collection: str) -> dict[str, dict[str, Any]]:
        try:
            docs = self.session.exec(select(Document).where(Document.collection == collection)).all()
        except SQLAlchemyError:
            logger.exception("Read of %s failed", collection)
            raise StoreUnavailableError()
        return {doc.id: dict(doc.data) for doc in docs}

    def _write(self, collection: str, record_id: str, record: dict[str, Any]) -> None:
        try:
            doc = self.session.get(Document, (collection, record_id))
            if doc is None:
                doc = Document(collection=collection, id=record_id, data=record)
            else:
                doc.data = record
                doc.updated_at = datetime.now(timezone.utc)
            self.session.add(doc)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Write of %s/%s failed", collection, record_id)
            raise StoreUnavailableError()
        self._notify(collection, record_id, record)

    def _notify(self, collection: str, record_id: str, record: Optional[dict[str, Any]]) -> None:
        for listener in self.listeners:
            listener(collection, record_id, record)
