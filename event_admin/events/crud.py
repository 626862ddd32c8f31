"""CRUD operations for event records."""

from typing import Any, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Event


async def list_events(session: AsyncSession, search_term: str = "") -> List[Event]:
    """List events ordered by date, optionally filtered by title.

    Args:
        session: Database session
        search_term: Case-insensitive substring matched against the title.
            Empty means no filter. ``%`` and ``_`` are matched literally.

    Returns:
        Events ordered by event_date ascending
    """
    query = select(Event).order_by(Event.event_date.asc(), Event.event_time.asc())
    if search_term:
        query = query.where(Event.title.icontains(search_term, autoescape=True))

    result = await session.execute(query)
    return list(result.scalars().all())


async def get_event(session: AsyncSession, event_id: str) -> Event | None:
    return await session.get(Event, event_id)


async def insert_event(session: AsyncSession, values: dict[str, Any]) -> Event:
    """Insert an event row and return it with its generated id.

    Args:
        session: Database session
        values: Column values; ``id`` and ``created_at`` are generated

    Returns:
        The inserted event
    """
    event = Event(**values)
    session.add(event)
    await session.commit()
    await session.refresh(event)
    return event


async def update_event(
    session: AsyncSession, event_id: str, values: dict[str, Any]
) -> Event | None:
    """Apply ``values`` to an existing event.

    Returns:
        The updated event, or None if no event has this id
    """
    event = await get_event(session, event_id)
    if event is None:
        return None

    for column, value in values.items():
        setattr(event, column, value)
    await session.commit()
    return event


async def delete_event(session: AsyncSession, event_id: str) -> bool:
    """Delete an event by ID. Returns True if deleted, False if not found."""
    event = await get_event(session, event_id)
    if event is None:
        return False

    await session.delete(event)
    await session.commit()
    return True
