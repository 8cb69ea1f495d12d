"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.event_booking.app.command import (
    category_command_use_case,
    create_booking_use_case,
    create_event_use_case,
    delete_booking_use_case,
    delete_event_use_case,
    update_booking_use_case,
    update_event_use_case,
    user_command_use_case,
    venue_command_use_case,
)
from src.service.event_booking.app.query import (
    category_query_use_case,
    get_booking_use_case,
    get_event_use_case,
    list_bookings_use_case,
    list_events_use_case,
    user_query_use_case,
    venue_query_use_case,
)
from src.service.event_booking.driving_adapter.http_controller import user_controller
from src.service.event_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    user_command_use_case,
    user_query_use_case,
    venue_command_use_case,
    venue_query_use_case,
    category_command_use_case,
    category_query_use_case,
    create_event_use_case,
    update_event_use_case,
    delete_event_use_case,
    get_event_use_case,
    list_events_use_case,
    create_booking_use_case,
    update_booking_use_case,
    delete_booking_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    user_controller,
    role_auth,
]
