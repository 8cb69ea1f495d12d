"""Model <-> entity conversion shared by the command and query repositories."""

from typing import Any, Optional

from src.service.event_booking.domain.entity.booking_entity import Booking
from src.service.event_booking.domain.entity.category_entity import CategorySummary
from src.service.event_booking.domain.entity.event_entity import EventEntity, EventSummary
from src.service.event_booking.domain.entity.user_entity import UserEntity, UserRole, UserSummary
from src.service.event_booking.domain.entity.venue_entity import VenueSummary
from src.service.event_booking.driven_adapter.model.booking_model import BookingModel
from src.service.event_booking.driven_adapter.model.category_model import CategoryModel
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.model.user_model import UserModel
from src.service.event_booking.driven_adapter.model.venue_model import VenueModel


def _loaded(model: Any, relation: str) -> Any:
    # Relationships are read only when eagerly loaded, never lazily in async code
    return model.__dict__.get(relation)


def user_model_to_summary(user_model: Optional[UserModel]) -> Optional[UserSummary]:
    if user_model is None:
        return None
    return UserSummary(
        id=user_model.id,
        email=user_model.email,
        first_name=user_model.first_name,
        last_name=user_model.last_name,
        phone=user_model.phone,
    )


def venue_model_to_summary(venue_model: Optional[VenueModel]) -> Optional[VenueSummary]:
    if venue_model is None:
        return None
    return VenueSummary(
        id=venue_model.id,
        name=venue_model.name,
        address=venue_model.address,
        city=venue_model.city,
        country=venue_model.country,
        capacity=venue_model.capacity,
        images=list(venue_model.images or []),
    )


def category_model_to_summary(
    category_model: Optional[CategoryModel],
) -> Optional[CategorySummary]:
    if category_model is None:
        return None
    return CategorySummary(
        id=category_model.id, name=category_model.name, description=category_model.description
    )


def user_model_to_entity(user_model: UserModel) -> UserEntity:
    return UserEntity(
        id=user_model.id,
        email=user_model.email,
        first_name=user_model.first_name,
        last_name=user_model.last_name,
        phone=user_model.phone,
        hashed_password=user_model.hashed_password,
        role=UserRole(user_model.role),
        is_active=user_model.is_active,
        created_at=user_model.created_at,
    )


def event_model_to_entity(event_model: EventModel) -> EventEntity:
    return EventEntity(
        id=event_model.id,
        title=event_model.title,
        description=event_model.description,
        images=list(event_model.images or []),
        start_date_time=event_model.start_date_time,
        end_date_time=event_model.end_date_time,
        venue_id=event_model.venue_id,
        category_id=event_model.category_id,
        total_capacity=event_model.total_capacity,
        available_seats=event_model.available_seats,
        price=event_model.price,
        event_type=event_model.event_type,
        status=event_model.status,
        is_featured=event_model.is_featured,
        created_by=event_model.created_by,
        ticket_tiers=list(event_model.ticket_tiers or []),
        created_at=event_model.created_at,
        updated_at=event_model.updated_at,
        venue=venue_model_to_summary(_loaded(event_model, 'venue')),
        category=category_model_to_summary(_loaded(event_model, 'category')),
        creator=user_model_to_summary(_loaded(event_model, 'creator')),
    )


def event_entity_to_columns(event: EventEntity) -> dict:
    """Descriptive columns only; seat counters and status have their own statements"""
    return {
        'title': event.title,
        'description': event.description,
        'images': list(event.images),
        'start_date_time': event.start_date_time,
        'end_date_time': event.end_date_time,
        'venue_id': event.venue_id,
        'category_id': event.category_id,
        'price': event.price,
        'event_type': event.event_type.value,
        'is_featured': event.is_featured,
        'ticket_tiers': [tier.to_dict() for tier in event.ticket_tiers],
    }


def booking_model_to_entity(booking_model: BookingModel) -> Booking:
    event_model = _loaded(booking_model, 'event')
    return Booking(
        id=booking_model.id,
        booking_reference=booking_model.booking_reference,
        user_id=booking_model.user_id,
        event_id=booking_model.event_id,
        ticket_type=booking_model.ticket_type,
        seats_booked=booking_model.seats_booked,
        total_amount=booking_model.total_amount,
        status=booking_model.status,
        booking_date=booking_model.booking_date,
        cancellation_allowed=booking_model.cancellation_allowed,
        cancellation_deadline=booking_model.cancellation_deadline,
        created_at=booking_model.created_at,
        updated_at=booking_model.updated_at,
        event=EventSummary(
            id=event_model.id,
            title=event_model.title,
            start_date_time=event_model.start_date_time,
            end_date_time=event_model.end_date_time,
            venue_id=event_model.venue_id,
            description=event_model.description,
            images=list(event_model.images or []),
            venue=venue_model_to_summary(_loaded(event_model, 'venue')),
        )
        if event_model is not None
        else None,
        user=user_model_to_summary(_loaded(booking_model, 'user')),
    )
