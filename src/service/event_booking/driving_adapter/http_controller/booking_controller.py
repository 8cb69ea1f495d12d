from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.event_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.event_booking.app.command.delete_booking_use_case import DeleteBookingUseCase
from src.service.event_booking.app.command.update_booking_use_case import UpdateBookingUseCase
from src.service.event_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.event_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.event_booking.domain.entity.booking_entity import BookingStatus
from src.service.event_booking.domain.entity.user_entity import UserEntity
from src.service.event_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_admin,
)
from src.service.event_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    BookingUpdateRequest,
)
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    DeleteResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


# Fixed paths first, `/{booking_id}` would otherwise swallow them


@router.get('', response_model=List[BookingResponse])
@Logger.io
async def list_bookings(
    booking_status: Optional[BookingStatus] = Query(None, alias='status'),
    on_date: Optional[date] = Query(None, alias='date'),
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_all(status=booking_status, on_date=on_date)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.get('/my', response_model=List[BookingResponse])
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_for_user(current_user.id or 0)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.get('/reference/{reference}', response_model=BookingResponse)
@Logger.io
async def get_booking_by_reference(
    reference: str,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_by_reference(booking_reference=reference, requester=current_user)
    return BookingResponse.from_entity(booking)


@router.get('/event/{event_id}', response_model=List[BookingResponse])
@Logger.io
async def list_event_bookings(
    event_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_for_event(event_id)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.post('', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('seats_booked', request.seats_booked)
        span.set_attribute('user_id', current_user.id or 0)

        booking = await use_case.create_booking(
            user_id=current_user.id or 0,
            event_id=request.event_id,
            seats_booked=request.seats_booked,
            ticket_type=request.ticket_type,
        )
        span.set_attribute('booking.reference', booking.booking_reference)
        return BookingResponse.from_entity(booking)


@router.get('/{booking_id}', response_model=BookingResponse)
@Logger.io
async def get_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.get_booking(booking_id=booking_id, requester=current_user)
    return BookingResponse.from_entity(booking)


@router.put('/{booking_id}', response_model=BookingResponse)
@Logger.io
async def update_booking(
    booking_id: int,
    request: BookingUpdateRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateBookingUseCase = Depends(UpdateBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.update_booking(
        user_id=current_user.id or 0,
        booking_id=booking_id,
        changes=request.model_dump(exclude_unset=True),
    )
    return BookingResponse.from_entity(booking)


@router.delete('/{booking_id}', response_model=DeleteResponse)
@Logger.io
async def delete_booking(
    booking_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: DeleteBookingUseCase = Depends(DeleteBookingUseCase.depends),
) -> DeleteResponse:
    await use_case.delete_booking(user_id=current_user.id or 0, booking_id=booking_id)
    return DeleteResponse(message='Booking deleted successfully')
