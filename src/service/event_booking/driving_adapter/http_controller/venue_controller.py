from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.venue_command_use_case import (
    CreateVenueUseCase,
    DeleteVenueUseCase,
    UpdateVenueUseCase,
)
from src.service.event_booking.app.query.venue_query_use_case import (
    GetVenueUseCase,
    ListVenuesUseCase,
)
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    require_admin,
)
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    DeleteResponse,
)
from src.service.event_booking.driving_adapter.http_controller.schema.event_schema import (
    EventResponse,
)
from src.service.event_booking.driving_adapter.http_controller.schema.venue_schema import (
    VenueCreateRequest,
    VenueResponse,
    VenueUpdateRequest,
    VenueWithEventsResponse,
)


router = APIRouter()


@router.get('', response_model=List[VenueResponse])
@Logger.io
async def list_venues(
    use_case: ListVenuesUseCase = Depends(ListVenuesUseCase.depends),
) -> List[VenueResponse]:
    venues = await use_case.list_venues()
    return [VenueResponse.from_entity(venue) for venue in venues]


@router.get('/{venue_id}', response_model=VenueWithEventsResponse)
@Logger.io
async def get_venue(
    venue_id: int,
    on_date: Optional[date] = Query(None, alias='date'),
    use_case: GetVenueUseCase = Depends(GetVenueUseCase.depends),
) -> VenueWithEventsResponse:
    venue, events = await use_case.get_with_events(venue_id, on_date=on_date)
    return VenueWithEventsResponse(
        **VenueResponse.from_entity(venue).model_dump(),
        events=[EventResponse.from_entity(event) for event in events],
    )


@router.post('', response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_venue(
    request: VenueCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.create(**request.model_dump())
    return VenueResponse.from_entity(venue)


@router.put('/{venue_id}', response_model=VenueResponse)
@Logger.io
async def update_venue(
    venue_id: int,
    request: VenueUpdateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: UpdateVenueUseCase = Depends(UpdateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.update(
        venue_id, request.model_dump(exclude_unset=True, exclude_none=True)
    )
    return VenueResponse.from_entity(venue)


@router.delete('/{venue_id}', response_model=DeleteResponse)
@Logger.io
async def delete_venue(
    venue_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: DeleteVenueUseCase = Depends(DeleteVenueUseCase.depends),
) -> DeleteResponse:
    await use_case.delete(venue_id)
    return DeleteResponse(message='Venue deleted successfully')
