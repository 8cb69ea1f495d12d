from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.create_event_use_case import CreateEventUseCase
from src.service.event_booking.app.command.delete_event_use_case import DeleteEventUseCase
from src.service.event_booking.app.command.update_event_use_case import (
    UpdateEventStatusUseCase,
    UpdateEventUseCase,
)
from src.service.event_booking.app.query.get_event_use_case import GetEventUseCase
from src.service.event_booking.app.query.list_events_use_case import ListEventsUseCase
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    DeleteResponse,
)
from src.service.event_booking.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventResponse,
    EventStatusUpdateRequest,
    EventUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('', response_model=List[EventResponse])
@Logger.io
async def list_events(
    venue_id: Optional[int] = None,
    category_id: Optional[int] = None,
    featured: Optional[bool] = None,
    ticket_type: Optional[str] = None,
    event_status: Optional[EventStatus] = Query(None, alias='status'),
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_events(
        venue_id=venue_id,
        category_id=category_id,
        is_featured=featured,
        ticket_type=ticket_type,
        status=event_status,
    )
    return [EventResponse.from_entity(event) for event in events]


@router.get('/featured', response_model=List[EventResponse])
@Logger.io
async def list_featured_events(
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> List[EventResponse]:
    events = await use_case.list_featured()
    return [EventResponse.from_entity(event) for event in events]


@router.get('/{event_id}', response_model=EventResponse)
@Logger.io
async def get_event(
    event_id: int,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventResponse:
    return EventResponse.from_entity(await use_case.get_by_id(event_id))


@router.post('', response_model=EventResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventResponse:
    with tracer.start_as_current_span('controller.create_event') as span:
        span.set_attribute('admin.id', current_user.id or 0)
        span.set_attribute('event.total_capacity', request.total_capacity)

        event = await use_case.create(
            created_by=current_user.id or 0,
            title=request.title,
            description=request.description,
            start_date_time=request.start_date_time,
            end_date_time=request.end_date_time,
            venue_id=request.venue_id,
            category_id=request.category_id,
            total_capacity=request.total_capacity,
            price=request.price,
            event_type=request.event_type,
            status=request.status,
            is_featured=request.is_featured,
            images=request.images,
            ticket_tiers=[tier.model_dump() for tier in request.ticket_tiers],
        )
        return EventResponse.from_entity(event)


@router.put('/{event_id}', response_model=EventResponse)
@Logger.io
async def update_event(
    event_id: int,
    request: EventUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventResponse:
    event = await use_case.update(
        event_id, request.model_dump(exclude_unset=True, exclude_none=True)
    )
    return EventResponse.from_entity(event)


@router.patch('/{event_id}/status', response_model=EventResponse)
@Logger.io
async def update_event_status(
    event_id: int,
    request: EventStatusUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateEventStatusUseCase = Depends(UpdateEventStatusUseCase.depends),
) -> EventResponse:
    event = await use_case.update_status(event_id, request.status)
    return EventResponse.from_entity(event)


@router.delete('/{event_id}', response_model=DeleteResponse)
@Logger.io
async def delete_event(
    event_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteEventUseCase = Depends(DeleteEventUseCase.depends),
) -> DeleteResponse:
    await use_case.delete(event_id)
    return DeleteResponse(message='Event deleted successfully')
