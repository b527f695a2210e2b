"""SQLAlchemy storage backend — one ``kv_store`` row per key."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

import sqlalchemy as sa
from sqlalchemy import create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column
from sqlalchemy.pool import StaticPool

from hrm.storage.base import StorageBackendError, StorageService


class Base(DeclarativeBase):
    """Base class for storage tables."""
    pass


class KeyValue(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(sa.String(100), primary_key=True)
    value: Mapped[str] = mapped_column(sa.Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class SqlStorage(StorageService):
    def __init__(self, url: str = "sqlite://", *, echo: bool = False) -> None:
        kwargs: dict = {"echo": echo}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # a single shared connection, or each checkout sees an empty DB
            kwargs.update(
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        self.engine = create_engine(url, **kwargs)
        Base.metadata.create_all(self.engine)

    def _read(self, key: str) -> Optional[str]:
        try:
            with Session(self.engine) as session:
                return session.scalar(select(KeyValue.value).where(KeyValue.key == key))
        except SQLAlchemyError as e:
            raise StorageBackendError(str(e)) from e

    def _write(self, key: str, raw: str) -> None:
        try:
            with Session(self.engine) as session, session.begin():
                row = session.get(KeyValue, key)
                if row is None:
                    session.add(KeyValue(key=key, value=raw))
                else:
                    row.value = raw
        except SQLAlchemyError as e:
            raise StorageBackendError(str(e)) from e

    def _delete(self, key: str) -> None:
        try:
            with Session(self.engine) as session, session.begin():
                row = session.get(KeyValue, key)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as e:
            raise StorageBackendError(str(e)) from e

    def keys(self) -> Iterable[str]:
        with Session(self.engine) as session:
            return list(session.scalars(select(KeyValue.key)))

    def close(self) -> None:
        self.engine.dispose()
