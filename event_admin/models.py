import uuid
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as PydanticField
from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class TZDatetime(TypeDecorator):
    """Custom DateTime type that ensures timezone-aware datetimes."""

    impl = DateTime(timezone=True)

    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is None:
            raise ValueError(
                "Naive datetime is not allowed. Please provide a timezone-aware datetime."
            )
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            # SQLite drops the offset; values are always written as UTC
            return value.replace(tzinfo=timezone.utc)
        return value


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(AsyncAttrs, DeclarativeBase):
    """SQLAlchemy declarative base for all ORM models with async support."""

    pass


class UserRole(str, Enum):
    ADMIN = "admin"
    OWNER = "owner"


class User(Base):
    """User table ORM model."""

    __tablename__ = "user"

    id: Mapped[Optional[int]] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(
        SQLAlchemyEnum(UserRole), default=UserRole.ADMIN
    )
    created_at: Mapped[datetime] = mapped_column(
        TZDatetime(), default=lambda: datetime.now(timezone.utc)
    )


class Category(Base):
    """Category table, scoped to a page through ``page_type``."""

    __tablename__ = "category"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255))
    page_type: Mapped[str] = mapped_column(String(50), index=True)
    created_at: Mapped[datetime] = mapped_column(
        TZDatetime(), default=lambda: datetime.now(timezone.utc)
    )


class Event(Base):
    """Event table ORM model."""

    __tablename__ = "event"
    __table_args__ = (
        CheckConstraint("title <> ''", name="ck_event_title_not_empty"),
        Index("ix_event_event_date", "event_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    event_date: Mapped[date] = mapped_column(Date)
    event_time: Mapped[time] = mapped_column(Time)
    end_time: Mapped[time] = mapped_column(Time)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(255))
    category_id: Mapped[Optional[str]] = mapped_column(String(36))
    image_url: Mapped[Optional[str]] = mapped_column(String(1024))
    created_at: Mapped[datetime] = mapped_column(
        TZDatetime(), default=lambda: datetime.now(timezone.utc)
    )


# Pydantic models for request/response serialization
class UserBase(BaseModel):
    """Base Pydantic model for User."""

    username: str
    role: UserRole = UserRole.ADMIN


class UserPublic(UserBase):
    """Public User model for API responses."""

    id: int
    created_at: datetime


class UserCreate(BaseModel):
    """User creation model with validation."""

    username: str = PydanticField(min_length=3, max_length=50)
    password: str
    role: UserRole = UserRole.ADMIN


class CategoryPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    page_type: str


class EventPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    event_date: date
    event_time: time
    end_time: time
    user_id: int
    location: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime


class EventSubmission(BaseModel):
    """Raw form values for an event, without ``id`` and ``created_at``.

    Every field may be missing or an empty string; the payload builders decide
    what reaches the store.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[str] = None
    event_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("event_date", "event_time", "end_time", mode="before")
    @classmethod
    def _stringify_temporal(cls, value):
        if isinstance(value, (date, time)):
            return value.isoformat()
        return value


class EventRecord(BaseModel):
    """Validated full row written on insert."""

    title: str
    description: str
    event_date: date
    event_time: time
    end_time: time
    user_id: int
    location: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None


class EventPatch(BaseModel):
    """Validated partial row written on update."""

    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    end_time: Optional[time] = None
    user_id: Optional[int] = None
    location: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None
