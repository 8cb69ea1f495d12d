from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.event_booking.domain.entity.event_entity import EventEntity
from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.domain.enum.event_type import EventType
from src.service.event_booking.domain.enum.ticket_type import TicketType
from src.service.event_booking.driving_adapter.http_controller.schema.common_schema import (
    CategorySummaryResponse,
    UserSummaryResponse,
    VenueSummaryResponse,
)


class TicketTierSchema(BaseModel):
    type: TicketType
    price_multiplier: float = Field(default=1.0, ge=0)
    description: Optional[str] = None


class EventCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str
    start_date_time: datetime
    end_date_time: datetime
    venue_id: int
    category_id: int
    total_capacity: int = Field(ge=0)
    price: float = Field(ge=0)
    event_type: EventType = EventType.IN_PERSON
    status: EventStatus = EventStatus.DRAFT
    is_featured: bool = False
    images: List[str] = Field(default_factory=list)
    ticket_tiers: List[TicketTierSchema] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'Summer Jazz Night',
                'description': 'An evening of live jazz',
                'start_date_time': '2030-07-01T19:00:00Z',
                'end_date_time': '2030-07-01T22:00:00Z',
                'venue_id': 1,
                'category_id': 1,
                'total_capacity': 500,
                'price': 40.0,
                'event_type': 'in-person',
                'status': 'published',
                'is_featured': True,
                'images': ['jazz-night.jpg'],
                'ticket_tiers': [
                    {'type': 'General', 'price_multiplier': 1.0},
                    {'type': 'VIP', 'price_multiplier': 2.5, 'description': 'Front rows'},
                ],
            }
        }


class EventUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None
    venue_id: Optional[int] = None
    category_id: Optional[int] = None
    total_capacity: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    event_type: Optional[EventType] = None
    is_featured: Optional[bool] = None
    images: Optional[List[str]] = None
    ticket_tiers: Optional[List[TicketTierSchema]] = None


class EventStatusUpdateRequest(BaseModel):
    status: EventStatus


class EventResponse(BaseModel):
    id: int
    title: str
    description: str
    images: List[str]
    start_date_time: datetime
    end_date_time: datetime
    venue_id: int
    category_id: int
    total_capacity: int
    available_seats: int
    price: float
    event_type: EventType
    status: EventStatus
    is_featured: bool
    created_by: Optional[int] = None
    ticket_tiers: List[TicketTierSchema]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    venue: Optional[VenueSummaryResponse] = None
    category: Optional[CategorySummaryResponse] = None
    creator: Optional[UserSummaryResponse] = None

    @classmethod
    def from_entity(cls, event: EventEntity) -> 'EventResponse':
        return cls(
            id=event.id or 0,
            title=event.title,
            description=event.description,
            images=list(event.images),
            start_date_time=event.start_date_time,
            end_date_time=event.end_date_time,
            venue_id=event.venue_id,
            category_id=event.category_id,
            total_capacity=event.total_capacity,
            available_seats=event.available_seats or 0,
            price=event.price,
            event_type=event.event_type,
            status=event.status,
            is_featured=event.is_featured,
            created_by=event.created_by,
            ticket_tiers=[TicketTierSchema(**tier.to_dict()) for tier in event.ticket_tiers],
            created_at=event.created_at,
            updated_at=event.updated_at,
            venue=VenueSummaryResponse.model_validate(event.venue) if event.venue else None,
            category=(
                CategorySummaryResponse.model_validate(event.category) if event.category else None
            ),
            creator=UserSummaryResponse.model_validate(event.creator) if event.creator else None,
        )
