"""Controller behind the event administration screen.

The controller owns the screen state (events, categories, the event being
edited and the search term). Its operations are the only way to change that
state; each one talks to the stores, reports the outcome as a toast and never
raises.
"""

import asyncio
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from ..exceptions import (
    AuthorizationError,
    EventAdminError,
    MissingIdentifierError,
    StoreError,
)
from ..logger import logger
from ..models import CategoryPublic, EventPublic, EventSubmission
from .notifications import Notifier
from .payload import build_create_payload, build_update_payload
from .store import AuthProvider, CategorySource, EventStore

MSG_LOAD_CATEGORIES_FAILED = "Erro ao carregar categorias"
MSG_LOAD_EVENTS_FAILED = "Erro ao carregar eventos"
MSG_LOGIN_REQUIRED = "Você precisa estar logado para realizar esta ação."
MSG_MISSING_EVENT_ID = "ID do evento não encontrado"
MSG_CREATED = "Evento adicionado com sucesso!"
MSG_CREATE_FAILED = "Erro ao adicionar evento: {error}"
MSG_UPDATED = "Evento atualizado com sucesso!"
MSG_UPDATE_FAILED = "Erro ao atualizar evento: {error}"
MSG_DELETED = "Evento removido com sucesso!"
MSG_DELETE_FAILED = "Erro ao remover evento: {error}"


class AdminMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class AdminSnapshot(BaseModel):
    """Read-only copy of the screen state."""

    mode: AdminMode
    search_term: str
    events: list[EventPublic]
    categories: list[CategoryPublic]
    editing: Optional[EventPublic] = None


class EventAdminController:
    def __init__(
        self,
        events: EventStore,
        categories: CategorySource,
        auth: AuthProvider,
        notifier: Notifier | None = None,
        category_page_type: str = "events",
    ):
        self._event_store = events
        self._category_source = categories
        self._auth = auth
        self.notifier = notifier or Notifier()
        self._category_page_type = category_page_type

        self._events: list[EventPublic] = []
        self._categories: list[CategoryPublic] = []
        self._editing: EventPublic | None = None
        self._search_term = ""
        self._last_error: EventAdminError | None = None

        # Only the response to the most recent request of each kind is applied
        self._events_ticket = 0
        self._categories_ticket = 0

    # Read accessors

    @property
    def events(self) -> list[EventPublic]:
        return list(self._events)

    @property
    def categories(self) -> list[CategoryPublic]:
        return list(self._categories)

    @property
    def editing(self) -> EventPublic | None:
        return self._editing

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def mode(self) -> AdminMode:
        return AdminMode.CREATE if self._editing is None else AdminMode.EDIT

    @property
    def last_error(self) -> EventAdminError | None:
        """Error of the most recent failed operation."""
        return self._last_error

    def snapshot(self) -> AdminSnapshot:
        return AdminSnapshot(
            mode=self.mode,
            search_term=self._search_term,
            events=self.events,
            categories=self.categories,
            editing=self._editing,
        )

    # Reads

    async def refresh(self) -> None:
        """Load categories and events, as when the screen is first shown."""
        self._last_error = None
        await asyncio.gather(self._load_categories(), self._load_events())

    async def set_search_term(self, term: str) -> None:
        self._search_term = term
        await self.refresh()

    async def fetch_categories(self) -> bool:
        self._last_error = None
        return await self._load_categories()

    async def fetch_events(self) -> bool:
        self._last_error = None
        return await self._load_events()

    # Loads share last_error, so only the public entry points clear it

    async def _load_categories(self) -> bool:
        self._categories_ticket += 1
        ticket = self._categories_ticket
        try:
            categories = await self._category_source.list(self._category_page_type)
        except Exception as e:
            if ticket != self._categories_ticket:
                logger.debug(f"Ignoring failure of superseded categories fetch: {e}")
                return False
            return await self._fail(e, MSG_LOAD_CATEGORIES_FAILED)

        if ticket != self._categories_ticket:
            logger.debug("Discarding superseded categories response")
            return False
        self._categories = list(categories)
        return True

    async def _load_events(self) -> bool:
        self._events_ticket += 1
        ticket = self._events_ticket
        search_term = self._search_term
        try:
            events = await self._event_store.list(search_term)
        except Exception as e:
            if ticket != self._events_ticket:
                logger.debug(f"Ignoring failure of superseded events fetch: {e}")
                return False
            return await self._fail(e, MSG_LOAD_EVENTS_FAILED)

        if ticket != self._events_ticket:
            logger.debug(f"Discarding superseded events response for {search_term!r}")
            return False
        self._events = list(events)
        return True

    # Editing selection

    def select_for_edit(self, event: EventPublic) -> None:
        self._editing = event

    def select_for_edit_by_id(self, event_id: str) -> bool:
        """Select a loaded event by id. Returns False if it is not in the list."""
        for event in self._events:
            if event.id == event_id:
                self._editing = event
                return True
        return False

    def cancel_edit(self) -> None:
        self._editing = None

    # Writes

    async def create_event(
        self, submission: EventSubmission | Mapping[str, Any]
    ) -> bool:
        data = _submission_data(submission)
        self._last_error = None
        try:
            actor = await self._auth.current_user()
            if actor is None:
                raise AuthorizationError()

            payload = build_create_payload(data, actor.id)
            logger.info(f"Submitting event data: {payload}")
            await self._event_store.insert(payload)
        except AuthorizationError as e:
            return await self._fail(e, MSG_LOGIN_REQUIRED)
        except Exception as e:
            return await self._fail(e, MSG_CREATE_FAILED)

        await self.notifier.success(MSG_CREATED)
        await self._load_events()
        return True

    async def update_event(
        self, submission: EventSubmission | Mapping[str, Any]
    ) -> bool:
        data = _submission_data(submission)
        self._last_error = None
        try:
            if self._editing is None or not self._editing.id:
                raise MissingIdentifierError()
            event_id = self._editing.id

            actor = await self._auth.current_user()
            if actor is None:
                raise AuthorizationError()

            payload = build_update_payload(data, actor.id)
            logger.info(f"Updating event {event_id} with data: {payload}")
            await self._event_store.update(event_id, payload)
        except MissingIdentifierError as e:
            return await self._fail(e, MSG_MISSING_EVENT_ID)
        except AuthorizationError as e:
            return await self._fail(e, MSG_LOGIN_REQUIRED)
        except Exception as e:
            return await self._fail(e, MSG_UPDATE_FAILED)

        await self.notifier.success(MSG_UPDATED)
        self._editing = None
        await self._load_events()
        return True

    async def delete_event(self, event_id: str) -> bool:
        self._last_error = None
        try:
            actor = await self._auth.current_user()
            if actor is None:
                raise AuthorizationError()

            logger.info(f"User {actor.id} deleting event {event_id}")
            await self._event_store.delete(event_id)
        except AuthorizationError as e:
            return await self._fail(e, MSG_LOGIN_REQUIRED)
        except Exception as e:
            return await self._fail(e, MSG_DELETE_FAILED)

        await self.notifier.success(MSG_DELETED)
        await self._load_events()
        return True

    async def _fail(self, error: Exception, message: str) -> bool:
        if not isinstance(error, EventAdminError):
            error = StoreError(str(error))
        logger.error(f"{type(error).__name__}: {error.message}", exc_info=True)
        self._last_error = error
        await self.notifier.error(message.format(error=error.message))
        return False


def _submission_data(submission: EventSubmission | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(submission, EventSubmission):
        return submission.model_dump()
    return dict(submission)
