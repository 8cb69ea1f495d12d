"""Event Booking Domain Enums"""

from src.service.event_booking.domain.enum.event_status import EventStatus
from src.service.event_booking.domain.enum.event_type import EventType
from src.service.event_booking.domain.enum.ticket_type import TicketType

__all__ = ['EventStatus', 'EventType', 'TicketType']
