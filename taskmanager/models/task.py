from datetime import timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from taskmanager.database import Base


class UTCDateTime(TypeDecorator):
    """Stores timestamps as naive UTC and hands them back timezone-aware."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Task(Base):
    __tablename__ = "tasks"
    # AUTOINCREMENT keeps ids of deleted rows from being handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(UTCDateTime, nullable=True)
    status = Column(Text, nullable=True)
