"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.event_booking.driven_adapter.model.booking_model import BookingModel
from src.service.event_booking.driven_adapter.model.category_model import CategoryModel
from src.service.event_booking.driven_adapter.model.event_model import EventModel
from src.service.event_booking.driven_adapter.model.user_model import UserModel
from src.service.event_booking.driven_adapter.model.venue_model import VenueModel

__all__ = [
    'BookingModel',
    'CategoryModel',
    'EventModel',
    'UserModel',
    'VenueModel',
]
