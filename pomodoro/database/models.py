"""SQLAlchemy ORM models for the Pomodoro timer."""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class StorageEntry(Base):
    """One key-value pair of the local storage area.

    Values are opaque strings; callers serialise to JSON themselves.
    """

    __tablename__ = "storage"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<StorageEntry key={self.key} len={len(self.value or '')}>"
