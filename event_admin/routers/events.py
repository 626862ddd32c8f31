from fastapi import APIRouter, Depends, Query, Response, status

from ..dependencies import get_event_admin_controller
from ..events import AdminSnapshot, EventAdminController, Toast
from ..exceptions import (
    AuthorizationError,
    EventAdminError,
    EventNotFoundError,
    MissingIdentifierError,
)
from ..models import CategoryPublic, EventSubmission

router = APIRouter(
    prefix="/admin",
    tags=["events"],
)


class EventAdminResponse(AdminSnapshot):
    notifications: list[Toast]


def _status_for(error: EventAdminError | None) -> int:
    if isinstance(error, AuthorizationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, (MissingIdentifierError, EventNotFoundError)):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def _screen(
    controller: EventAdminController, response: Response
) -> EventAdminResponse:
    if controller.last_error is not None:
        response.status_code = _status_for(controller.last_error)
    return EventAdminResponse(
        **controller.snapshot().model_dump(),
        notifications=controller.notifier.drain(),
    )


@router.get("/events", response_model=EventAdminResponse)
async def get_events_screen(
    response: Response,
    search: str = Query(default=""),
    controller: EventAdminController = Depends(get_event_admin_controller),
):
    """Load categories and the events matching ``search``."""
    await controller.set_search_term(search)
    return _screen(controller, response)


@router.post("/events", response_model=EventAdminResponse)
async def create_event(
    submission: EventSubmission,
    response: Response,
    search: str = Query(default=""),
    controller: EventAdminController = Depends(get_event_admin_controller),
):
    await controller.set_search_term(search)
    if await controller.create_event(submission):
        response.status_code = status.HTTP_201_CREATED
    return _screen(controller, response)


@router.put("/events/{event_id}", response_model=EventAdminResponse)
async def update_event(
    event_id: str,
    submission: EventSubmission,
    response: Response,
    search: str = Query(default=""),
    controller: EventAdminController = Depends(get_event_admin_controller),
):
    """Select ``event_id`` for editing and submit the form values.

    The event must be part of the list loaded for ``search``; otherwise
    nothing is selected and the update is rejected without writing.
    """
    await controller.set_search_term(search)
    controller.select_for_edit_by_id(event_id)
    await controller.update_event(submission)
    return _screen(controller, response)


@router.delete("/events/{event_id}", response_model=EventAdminResponse)
async def delete_event(
    event_id: str,
    response: Response,
    search: str = Query(default=""),
    controller: EventAdminController = Depends(get_event_admin_controller),
):
    await controller.set_search_term(search)
    await controller.delete_event(event_id)
    return _screen(controller, response)


@router.get("/categories", response_model=list[CategoryPublic])
async def get_categories(
    response: Response,
    controller: EventAdminController = Depends(get_event_admin_controller),
):
    """Categories available to the events form."""
    if not await controller.fetch_categories():
        response.status_code = _status_for(controller.last_error)
    return controller.categories
