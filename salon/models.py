# salon/models.py

from typing import Any, Optional
from datetime import datetime, timezone

from sqlalchemy.types import JSON
from sqlmodel import SQLModel, Field, Column


class Document(SQLModel, table=True):
    __tablename__ = "documents"

    collection: str = Field(primary_key=True)
    id: str = Field(primary_key=True)
    data: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Operator(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
