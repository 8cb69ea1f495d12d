"""Application layer interfaces (Ports)"""

from src.service.event_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.event_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.event_booking.app.interface.i_category_repo import ICategoryRepo
from src.service.event_booking.app.interface.i_event_command_repo import IEventCommandRepo
from src.service.event_booking.app.interface.i_event_query_repo import IEventQueryRepo
from src.service.event_booking.app.interface.i_password_hasher import IPasswordHasher
from src.service.event_booking.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.event_booking.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.event_booking.app.interface.i_venue_repo import IVenueRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'ICategoryRepo',
    'IEventCommandRepo',
    'IEventQueryRepo',
    'IPasswordHasher',
    'IUserCommandRepo',
    'IUserQueryRepo',
    'IVenueRepo',
]
