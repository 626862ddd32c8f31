"""In-memory stores and record builders for event admin tests."""

import asyncio
import uuid
from collections import defaultdict
from datetime import date, datetime, time, timezone
from typing import Any

from event_admin.exceptions import EventNotFoundError
from event_admin.models import CategoryPublic, EventPublic, UserPublic, UserRole


def make_event(title: str, event_date: date, **overrides: Any) -> EventPublic:
    values = {
        "id": str(uuid.uuid4()),
        "title": title,
        "description": f"About {title}",
        "event_date": event_date,
        "event_time": time(19, 0),
        "end_time": time(21, 0),
        "user_id": 1,
        "created_at": datetime.now(timezone.utc),
    }
    values.update(overrides)
    return EventPublic(**values)


def make_user(user_id: int = 7) -> UserPublic:
    return UserPublic(
        id=user_id,
        username=f"user{user_id}",
        role=UserRole.ADMIN,
        created_at=datetime.now(timezone.utc),
    )


class FakeEventStore:
    def __init__(self, events: list[EventPublic] | None = None):
        self.rows = {event.id: event for event in events or []}
        self.list_calls: list[str] = []
        self.attempts: list[dict[str, Any]] = []
        self.inserted: list[dict[str, Any]] = []
        self.updated: list[tuple[str, dict[str, Any]]] = []
        self.deleted: list[str] = []
        self.list_error: Exception | None = None
        self.write_error: Exception | None = None

    async def list(self, search_term: str = "") -> list[EventPublic]:
        self.list_calls.append(search_term)
        if self.list_error is not None:
            raise self.list_error
        needle = search_term.lower()
        matches = [e for e in self.rows.values() if needle in e.title.lower()]
        return sorted(matches, key=lambda e: (e.event_date, e.event_time))

    async def insert(self, record: dict[str, Any]) -> EventPublic:
        self.attempts.append(dict(record))
        if self.write_error is not None:
            raise self.write_error
        self.inserted.append(dict(record))
        event = EventPublic(
            id=str(uuid.uuid4()), created_at=datetime.now(timezone.utc), **record
        )
        self.rows[event.id] = event
        return event

    async def update(self, event_id: str, record: dict[str, Any]) -> None:
        if self.write_error is not None:
            raise self.write_error
        if event_id not in self.rows:
            raise EventNotFoundError(event_id)
        self.updated.append((event_id, dict(record)))
        current = self.rows[event_id].model_dump()
        self.rows[event_id] = EventPublic.model_validate({**current, **record})

    async def delete(self, event_id: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        if event_id not in self.rows:
            raise EventNotFoundError(event_id)
        self.deleted.append(event_id)
        del self.rows[event_id]


class GatedEventStore(FakeEventStore):
    """Holds ``list`` calls for a search term until its gate is opened."""

    def __init__(self, events: list[EventPublic] | None = None):
        super().__init__(events)
        self.started: defaultdict[str, asyncio.Event] = defaultdict(asyncio.Event)
        self.gates: dict[str, asyncio.Event] = {}

    async def list(self, search_term: str = "") -> list[EventPublic]:
        self.started[search_term].set()
        gate = self.gates.get(search_term)
        if gate is not None:
            await gate.wait()
        return await super().list(search_term)


class FakeCategorySource:
    def __init__(self, categories: list[CategoryPublic] | None = None):
        self.categories = categories or []
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def list(self, page_type: str) -> list[CategoryPublic]:
        self.calls.append(page_type)
        if self.error is not None:
            raise self.error
        return [c for c in self.categories if c.page_type == page_type]


