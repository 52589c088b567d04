# app/data/mixins.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Uuid

from app.domain.enums import Lifecycle


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UuidPkMixin:
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class SoftDeleteMixin:
    """
    Cykl zycia encji (active / deleted) zamiast pary flaga + data.
    Oba pola ustawia wylacznie mark_deleted().
    """

    lifecycle = Column(String(16), nullable=False, default=Lifecycle.ACTIVE.value, index=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.lifecycle == Lifecycle.DELETED.value

    def mark_deleted(self):
        self.lifecycle = Lifecycle.DELETED.value
        self.deleted_at = utcnow()
