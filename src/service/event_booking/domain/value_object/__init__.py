from src.service.event_booking.domain.value_object.booking_reference import (
    BOOKING_REFERENCE_PATTERN,
    generate_booking_reference,
    normalize_booking_reference,
)

__all__ = ['BOOKING_REFERENCE_PATTERN', 'generate_booking_reference', 'normalize_booking_reference']
