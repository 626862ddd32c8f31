"""Store interfaces used by the controller and their SQLAlchemy implementations."""

from typing import Any, Awaitable, Callable, Protocol, Sequence, TypeVar

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..categories.crud import list_categories
from ..exceptions import EventNotFoundError, StoreError
from ..logger import logger
from ..models import (
    CategoryPublic,
    EventPatch,
    EventPublic,
    EventRecord,
    UserPublic,
)
from . import crud

T = TypeVar("T")


class CategorySource(Protocol):
    async def list(self, page_type: str) -> Sequence[CategoryPublic]: ...


class EventStore(Protocol):
    async def list(self, search_term: str = "") -> Sequence[EventPublic]: ...

    async def insert(self, record: dict[str, Any]) -> EventPublic: ...

    async def update(self, event_id: str, record: dict[str, Any]) -> None: ...

    async def delete(self, event_id: str) -> None: ...


class AuthProvider(Protocol):
    async def current_user(self) -> UserPublic | None: ...


class StaticAuthProvider:
    """Auth provider answering with a user resolved ahead of time.

    HTTP requests resolve the bearer token before the controller runs, so the
    actor is already known.
    """

    def __init__(self, user: UserPublic | None):
        self._user = user

    async def current_user(self) -> UserPublic | None:
        return self._user


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"])
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def _describe_db_error(error: SQLAlchemyError) -> str:
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class SqlCategorySource:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list(self, page_type: str) -> list[CategoryPublic]:
        try:
            async with self._session_factory() as session:
                categories = await list_categories(session, page_type)
                return [CategoryPublic.model_validate(c) for c in categories]
        except SQLAlchemyError as e:
            raise StoreError(_describe_db_error(e)) from e


class SqlEventStore:
    """Event store backed by the ``event`` table.

    Payloads are validated the way a remote backend would: values are
    parsed into their column types and any failure surfaces as
    ``StoreError`` with a readable message.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _run(self, operation: Callable[[AsyncSession], Awaitable[T]]) -> T:
        async with self._session_factory() as session:
            try:
                return await operation(session)
            except SQLAlchemyError as e:
                await session.rollback()
                raise StoreError(_describe_db_error(e)) from e

    async def list(self, search_term: str = "") -> list[EventPublic]:
        async def operation(session: AsyncSession) -> list[EventPublic]:
            events = await crud.list_events(session, search_term)
            return [EventPublic.model_validate(e) for e in events]

        return await self._run(operation)

    async def insert(self, record: dict[str, Any]) -> EventPublic:
        try:
            values = EventRecord.model_validate(record).model_dump()
        except ValidationError as e:
            raise StoreError(_describe_validation_error(e)) from e

        async def operation(session: AsyncSession) -> EventPublic:
            event = await crud.insert_event(session, values)
            logger.info(f"Inserted event {event.id} for user {event.user_id}")
            return EventPublic.model_validate(event)

        return await self._run(operation)

    async def update(self, event_id: str, record: dict[str, Any]) -> None:
        try:
            values = EventPatch.model_validate(record).model_dump(exclude_unset=True)
        except ValidationError as e:
            raise StoreError(_describe_validation_error(e)) from e

        async def operation(session: AsyncSession) -> None:
            event = await crud.update_event(session, event_id, values)
            if event is None:
                raise EventNotFoundError(event_id)
            logger.info(f"Updated event {event_id}: {sorted(values)}")

        await self._run(operation)

    async def delete(self, event_id: str) -> None:
        async def operation(session: AsyncSession) -> None:
            if not await crud.delete_event(session, event_id):
                raise EventNotFoundError(event_id)
            logger.info(f"Deleted event {event_id}")

        await self._run(operation)
