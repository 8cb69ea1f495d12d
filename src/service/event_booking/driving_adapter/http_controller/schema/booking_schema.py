from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.event_booking.domain.entity.booking_entity import Booking, BookingStatus
from src.service.event_booking.domain.enum.ticket_type import TicketType
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    UserSummaryResponse,
    VenueSummaryResponse,
)


class BookingCreateRequest(BaseModel):
    event_id: int
    seats_booked: int
    ticket_type: str = TicketType.GENERAL.value

    class Config:
        json_schema_extra = {
            'example': {
                'event_id': 1,
                'seats_booked': 2,
                'ticket_type': 'VIP',
            }
        }


class BookingUpdateRequest(BaseModel):
    """Only `status` is acted on; other keys are accepted and dropped by the use case."""

    status: Optional[BookingStatus] = None

    class Config:
        extra = 'allow'
        json_schema_extra = {'example': {'status': 'cancelled'}}


class BookingEventResponse(BaseModel):
    id: int
    title: str
    start_date_time: datetime
    end_date_time: datetime
    venue_id: int
    description: str = ''
    images: List[str] = Field(default_factory=list)
    venue: Optional[VenueSummaryResponse] = None

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    id: int
    booking_reference: str
    user_id: int
    event_id: int
    ticket_type: str
    seats_booked: int
    total_amount: float
    status: BookingStatus
    booking_date: Optional[datetime] = None
    cancellation_allowed: bool
    cancellation_deadline: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    event: Optional[BookingEventResponse] = None
    user: Optional[UserSummaryResponse] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id or 0,
            booking_reference=booking.booking_reference,
            user_id=booking.user_id,
            event_id=booking.event_id,
            ticket_type=booking.ticket_type,
            seats_booked=booking.seats_booked,
            total_amount=booking.total_amount,
            status=booking.status,
            booking_date=booking.booking_date,
            cancellation_allowed=booking.cancellation_allowed,
            cancellation_deadline=booking.cancellation_deadline,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
            event=BookingEventResponse.model_validate(booking.event) if booking.event else None,
            user=UserSummaryResponse.model_validate(booking.user) if booking.user else None,
        )
